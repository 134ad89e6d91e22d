from __future__ import annotations

"""
Vacancy Resolver.

Reduces the parent links and per-directory file counts collected during
the walk to the topmost directories of every file-less subtree.
"""

from typing import Dict, List

from dirstats.domain.constants import NO_PATH
from dirstats.infra.fs import clean_path


def resolve_vacant_dirs(parent_of: Dict[str, str], file_count_of: Dict[str, int]) -> List[str]:
    """
    List the top-level vacant directories.

    A directory is vacant when no file exists anywhere below it. It is
    reported only if its parent is not vacant, so nested vacant directories
    are represented by their highest vacant ancestor. The parent of the scan
    root is never vacant, which lets an empty root report itself.

    Args:
        parent_of: Relative directory -> relative parent directory.
        file_count_of: Relative directory -> transitive file count.

    Returns:
        List[str]: Cleaned directory paths in lexicographic order.
    """
    def is_vacant(rel_dir: str) -> bool:
        if rel_dir == NO_PATH:
            return False
        return file_count_of.get(rel_dir, 0) == 0

    vacant = [
        clean_path(rel_dir)
        for rel_dir in file_count_of
        if is_vacant(rel_dir) and not is_vacant(parent_of.get(rel_dir, NO_PATH))
    ]
    return sorted(vacant)
