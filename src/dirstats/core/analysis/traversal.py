from __future__ import annotations

"""
Directory Traversal Engine.

Walks the tree depth-first in a single pass. Each recursive call owns a
DirectoryAggregate for its subtree and returns it to the caller, which
folds it into its own. Run-wide tables (word counts, parent links and
per-directory file counts) are recorded on the ScanContext.
"""

import logging
import os
from typing import Optional, Tuple

from dirstats.core.analysis.classifiers import (
    classify_image,
    count_words,
    is_text_file,
    read_file_size,
)
from dirstats.domain.constants import NO_PATH, ROOT_DIR
from dirstats.domain.errors import DirectoryOpenError
from dirstats.domain.scan_models import (
    DirectoryAggregate,
    ImageProbe,
    ScanContext,
)
from dirstats.infra.fs import join_relative, to_fs_path
from dirstats.infra.image_probe import build_identify_probe

logger = logging.getLogger(__name__)

_FILE = "file"
_DIR = "dir"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def scan_tree(
        root: str = ROOT_DIR,
        image_probe: Optional[ImageProbe] = None,
) -> Tuple[DirectoryAggregate, ScanContext]:
    """
    Scan a whole tree starting at 'root'.

    Args:
        root: Filesystem location of the scan root.
        image_probe: Probe used to measure images; defaults to 'identify'.

    Returns:
        Tuple[DirectoryAggregate, ScanContext]: Aggregate of the whole tree
        and the populated run context.

    Raises:
        DirectoryOpenError: If any directory in the tree cannot be opened.
        FileReadError: If a text file cannot be opened.
    """
    ctx = ScanContext(root=root, image_probe=image_probe or build_identify_probe())
    aggregate = scan_directory(ctx, ROOT_DIR, NO_PATH)
    return aggregate, ctx


def scan_directory(ctx: ScanContext, rel_dir: str, parent_rel: str) -> DirectoryAggregate:
    """
    Aggregate one directory and, recursively, everything below it.

    Args:
        ctx: Active scan context.
        rel_dir: Report path of the directory ('.' for the root).
        parent_rel: Report path of its parent (NO_PATH for the root).

    Returns:
        DirectoryAggregate: Statistics of the subtree rooted at 'rel_dir'.

    Raises:
        DirectoryOpenError: If this directory or a descendant cannot be opened.
    """
    fs_dir = to_fs_path(ctx.root, rel_dir)
    stats = DirectoryAggregate()

    # At most one directory handle is open at any time
    try:
        with os.scandir(fs_dir) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise DirectoryOpenError(rel_dir, e) from e

    ctx.parent_of[rel_dir] = parent_rel
    ctx.file_count_of[rel_dir] = 0

    for entry in entries:
        kind = _entry_kind(entry)
        rel_path = join_relative(rel_dir, entry.name)

        if kind == _FILE:
            _visit_file(ctx, stats, entry.path, entry.name, rel_path)
            ctx.file_count_of[rel_dir] += 1
        elif kind == _DIR:
            sub_stats = scan_directory(ctx, rel_path, rel_dir)
            stats.absorb(sub_stats)
            ctx.file_count_of[rel_dir] += sub_stats.file_count
        else:
            logger.debug(f"Skipping special entry: {rel_path}")

    return stats

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _visit_file(
        ctx: ScanContext,
        stats: DirectoryAggregate,
        path: str,
        name: str,
        rel_path: str,
) -> None:
    """Count a regular file and run every classifier over it."""
    stats.file_count += 1

    size = read_file_size(path)
    if size is not None:
        stats.offer_largest(rel_path, size)
        stats.total_bytes += size

    if is_text_file(name):
        count_words(path, ctx.word_counts)

    image = classify_image(ctx, path, rel_path)
    if image is not None:
        stats.images.append(image)


def _entry_kind(entry: os.DirEntry) -> Optional[str]:
    """
    Classify a directory entry, following symbolic links.

    Returns:
        Optional[str]: 'file', 'dir', or None for dangling links, special
        files, and entries whose metadata cannot be read.
    """
    try:
        if entry.is_file():
            return _FILE
        if entry.is_dir():
            return _DIR
    except OSError:
        return None
    return None
