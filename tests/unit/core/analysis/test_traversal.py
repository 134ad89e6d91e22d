from __future__ import annotations

"""
Unit tests for the Directory Traversal Engine.

Verifies:
1. File, directory and byte totals across nested levels.
2. Largest-file selection and tie handling.
3. Parent links and transitive file counts recorded on the context.
4. Skipping of special entries and fatal directory-open failures.
"""

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from dirstats.core.analysis import traversal
from dirstats.core.analysis.traversal import scan_directory, scan_tree
from dirstats.domain.errors import DirectoryOpenError, FileReadError
from dirstats.domain.scan_models import ImageInfo, ScanContext


def _no_images(_path):
    return None


def test_counts_files_dirs_and_bytes(make_tree) -> None:
    """Totals include every level; the root counts as a directory."""
    root = make_tree({
        "a.bin": b"x" * 10,
        "sub": {
            "b.bin": b"x" * 20,
            "deeper": {"c.bin": b"x" * 30},
        },
        "empty": {},
    })

    stats, _ = scan_tree(str(root), image_probe=_no_images)

    assert stats.file_count == 3
    assert stats.dir_count == 4
    assert stats.total_bytes == 60


def test_largest_file_found_in_subdirectory(make_tree) -> None:
    """The largest candidate bubbles up from nested levels with its relative path."""
    root = make_tree({
        "small.bin": b"x" * 5,
        "sub": {"deeper": {"big.bin": b"x" * 500}},
    })

    stats, _ = scan_tree(str(root), image_probe=_no_images)

    assert stats.largest_file_path == "sub/deeper/big.bin"
    assert stats.largest_file_size == 500


def test_largest_file_tie_keeps_first_found(make_tree) -> None:
    """Entries are visited in name order and equal sizes do not replace the candidate."""
    root = make_tree({
        "b.bin": b"x" * 8,
        "a.bin": b"y" * 8,
        "c": {"z.bin": b"z" * 8},
    })

    stats, _ = scan_tree(str(root), image_probe=_no_images)

    assert stats.largest_file_path == "a.bin"


def test_empty_tree_has_sentinel_largest(make_tree) -> None:
    root = make_tree({})

    stats, ctx = scan_tree(str(root), image_probe=_no_images)

    assert stats.largest_file_path == ""
    assert stats.largest_file_size == -1
    assert stats.file_count == 0
    assert stats.dir_count == 1
    assert ctx.file_count_of == {".": 0}


def test_context_records_parents_and_file_counts(make_tree) -> None:
    """parent_of links every directory upward; file_count_of is transitive."""
    root = make_tree({
        "top.txt": "x",
        "a": {
            "b": {"f.bin": b"1"},
            "c": {},
        },
    })

    _, ctx = scan_tree(str(root), image_probe=_no_images)

    assert ctx.parent_of == {".": "", "a": ".", "a/b": "a", "a/c": "a"}
    assert ctx.file_count_of == {".": 2, "a": 1, "a/b": 1, "a/c": 0}


def test_words_pooled_across_directories(make_tree) -> None:
    """Word counts are run-wide, not attributed to directories."""
    root = make_tree({
        "one.txt": "apple banana",
        "nested": {"two.TXT": "Apple cherry"},
        "ignored.md": "apple apple apple",
    })

    _, ctx = scan_tree(str(root), image_probe=_no_images)

    assert ctx.word_counts == {"apple": 2, "banana": 1, "cherry": 1}


def test_images_collected_from_subtrees(make_tree, fake_probe) -> None:
    root = make_tree({
        "photo.png": b"png",
        "gallery": {"wide.jpg": b"jpg", "notes.txt": "plain"},
    })
    probe = fake_probe({"photo.png": (100, 50), "wide.jpg": (300, 10)})

    stats, _ = scan_tree(str(root), image_probe=probe)

    assert sorted(stats.images, key=lambda i: i.path) == [
        ImageInfo("gallery/wide.jpg", 300, 10),
        ImageInfo("photo.png", 100, 50),
    ]


def test_non_positive_probe_result_is_not_an_image(make_tree, fake_probe) -> None:
    root = make_tree({"broken.png": b"?"})
    probe = fake_probe({"broken.png": (0, 50)})

    stats, _ = scan_tree(str(root), image_probe=probe)

    assert stats.images == []


def test_unreadable_size_still_counts_file(make_tree) -> None:
    """A file whose metadata cannot be read counts as a file but adds no bytes."""
    root = make_tree({"ok.bin": b"x" * 4, "ghost.bin": b"x" * 100})

    real = traversal.read_file_size

    def flaky_size(path):
        if path.endswith("ghost.bin"):
            return None
        return real(path)

    with patch.object(traversal, "read_file_size", side_effect=flaky_size):
        stats, _ = scan_tree(str(root), image_probe=_no_images)

    assert stats.file_count == 2
    assert stats.total_bytes == 4
    assert stats.largest_file_path == "ok.bin"


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
def test_dangling_symlink_is_skipped(make_tree) -> None:
    root = make_tree({"real.bin": b"abc"})
    os.symlink(str(root / "missing-target"), str(root / "dangling"))

    stats, _ = scan_tree(str(root), image_probe=_no_images)

    assert stats.file_count == 1
    assert stats.dir_count == 1


def test_unopenable_directory_aborts(make_tree) -> None:
    """A directory that cannot be listed is fatal for the whole run."""
    root = make_tree({"locked": {"f.bin": b"1"}, "a.bin": b"1"})
    real_scandir = os.scandir

    def guarded_scandir(path):
        if str(path).endswith("locked"):
            raise PermissionError(13, "Permission denied")
        return real_scandir(path)

    with patch.object(traversal.os, "scandir", side_effect=guarded_scandir):
        with pytest.raises(DirectoryOpenError) as exc_info:
            scan_tree(str(root), image_probe=_no_images)

    assert exc_info.value.path == "locked"
    assert "Permission denied" in str(exc_info.value)


def test_missing_root_aborts(tmp_path: Path) -> None:
    with pytest.raises(DirectoryOpenError):
        scan_tree(str(tmp_path / "nope"), image_probe=_no_images)


def test_unreadable_text_file_aborts(make_tree) -> None:
    root = make_tree({"words.txt": "hello world"})

    def failing_count(path, counter):
        raise FileReadError(path, PermissionError(13, "Permission denied"))

    with patch.object(traversal, "count_words", side_effect=failing_count):
        with pytest.raises(FileReadError):
            scan_tree(str(root), image_probe=_no_images)


def test_scan_directory_on_subtree(make_tree) -> None:
    """scan_directory can be driven directly with a hand-built context."""
    root = make_tree({"a": {"b.bin": b"12"}})
    ctx = ScanContext(root=str(root), image_probe=_no_images)

    stats = scan_directory(ctx, "a", ".")

    assert stats.file_count == 1
    assert stats.largest_file_path == "a/b.bin"
    assert ctx.parent_of == {"a": "."}


def test_one_directory_handle_open_at_a_time(make_tree) -> None:
    """Deep trees never hold more than one directory listing open."""
    spec: dict = {"leaf.bin": b"1"}
    for depth in range(30):
        spec = {f"d{depth}": spec}
    root = make_tree(spec)

    real_scandir = os.scandir
    open_now = [0]
    peak = [0]

    class CountingScandir:
        def __init__(self, path):
            self._it = real_scandir(path)
            open_now[0] += 1
            peak[0] = max(peak[0], open_now[0])

        def __enter__(self):
            return self

        def __exit__(self, *exc_info):
            self._it.close()
            open_now[0] -= 1

        def __iter__(self):
            return iter(self._it)

    with patch.object(traversal.os, "scandir", CountingScandir):
        stats, _ = scan_tree(str(root), image_probe=_no_images)

    assert stats.dir_count == 31
    assert stats.file_count == 1
    assert peak[0] == 1
    assert open_now[0] == 0
