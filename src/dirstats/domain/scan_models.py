from __future__ import annotations

"""
Directory Analysis Data Models.

Defines the value types exchanged between the traversal engine, the
post-traversal reducers, and the interface layer. Per-directory aggregates
are owned by a single recursive call and folded into their parent; the
run-scoped bookkeeping lives in an explicit ScanContext instead of module
globals.
"""

from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from dirstats.domain.constants import DEFAULT_LARGEST_SIZE

# Returns (width, height) for an image file, or None when it is not an image
ImageProbe = Callable[[str], Optional[Tuple[int, int]]]

# -----------------------------------------------------------------------------
# VALUE TYPES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ImageInfo:
    """
    An image discovered during the walk.

    Attributes:
        path: Path relative to the scan root.
        width: Width in pixels (positive).
        height: Height in pixels (positive).
    """
    path: str
    width: int
    height: int

    @property
    def pixels(self) -> int:
        return self.width * self.height


@dataclass
class DirectoryAggregate:
    """
    Statistics for one directory subtree.

    Attributes:
        largest_file_path: Relative path of the biggest file seen so far.
        largest_file_size: Size of that file, or -1 when no file was seen.
        file_count: Files in this directory and all descendants.
        dir_count: Directories in this subtree, including itself.
        total_bytes: Cumulative size of every sized file in the subtree.
        images: Every image found in the subtree, in discovery order.
    """
    largest_file_path: str = ""
    largest_file_size: int = DEFAULT_LARGEST_SIZE
    file_count: int = 0
    dir_count: int = 1
    total_bytes: int = 0
    images: List[ImageInfo] = field(default_factory=list)

    def offer_largest(self, path: str, size: int) -> None:
        """Replace the largest-file candidate only on a strictly greater size."""
        if size > self.largest_file_size:
            self.largest_file_path = path
            self.largest_file_size = size

    def absorb(self, child: DirectoryAggregate) -> None:
        """Fold a subdirectory aggregate into this one."""
        self.offer_largest(child.largest_file_path, child.largest_file_size)
        self.file_count += child.file_count
        self.dir_count += child.dir_count
        self.total_bytes += child.total_bytes
        self.images.extend(child.images)


@dataclass
class ScanContext:
    """
    Run-scoped state shared by every level of one traversal.

    Attributes:
        root: Filesystem location of the scan root.
        image_probe: Callable used to measure candidate images.
        parent_of: Relative directory -> relative parent directory.
        file_count_of: Relative directory -> transitive file count.
        word_counts: Occurrences of each long word across all text files.
    """
    root: str
    image_probe: ImageProbe
    parent_of: Dict[str, str] = field(default_factory=dict)
    file_count_of: Dict[str, int] = field(default_factory=dict)
    word_counts: Counter = field(default_factory=Counter)

# -----------------------------------------------------------------------------
# FINAL RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ScanResults:
    """
    Immutable outcome of a complete directory analysis.

    Attributes:
        largest_file_path: Relative path of the largest file ("" if none).
        largest_file_size: Size of the largest file (-1 if none).
        n_files: Total number of regular files.
        n_dirs: Total number of directories, root included.
        all_files_size: Cumulative size of all sized files.
        most_common_words: Ranked (word, count) pairs.
        largest_images: Ranked images.
        vacant_dirs: Sorted top-level vacant directories.
    """
    largest_file_path: str
    largest_file_size: int
    n_files: int
    n_dirs: int
    all_files_size: int
    most_common_words: List[Tuple[str, int]] = field(default_factory=list)
    largest_images: List[ImageInfo] = field(default_factory=list)
    vacant_dirs: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable view of the result."""
        data = asdict(self)
        data["most_common_words"] = [
            {"word": word, "count": count} for word, count in self.most_common_words
        ]
        return data
