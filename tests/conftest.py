from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A builder for temporary directory trees.
3. A fake image probe so unit tests never depend on ImageMagick.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple, Union

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

TreeSpec = Dict[str, Union[str, bytes, "TreeSpec"]]


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
def build_tree(root: Path, spec: TreeSpec) -> Path:
    """
    Materialize a nested dict as files and directories under 'root'.

    Dict values become subdirectories; str/bytes values become file contents.
    """
    root.mkdir(parents=True, exist_ok=True)
    for name, content in spec.items():
        target = root / name
        if isinstance(content, dict):
            build_tree(target, content)
        elif isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[TreeSpec], Path]:
    """Return a factory that builds a tree under a fresh 'root' directory."""
    def _make(spec: TreeSpec) -> Path:
        return build_tree(tmp_path / "root", spec)
    return _make


@pytest.fixture
def fake_probe() -> Callable[[Dict[str, Tuple[int, int]]], Callable[[str], Optional[Tuple[int, int]]]]:
    """
    Return a factory for image probes keyed by file name.

    Files whose base name is not in the mapping are reported as non-images.
    """
    def _factory(sizes: Dict[str, Tuple[int, int]]) -> Callable[[str], Optional[Tuple[int, int]]]:
        def probe(path: str) -> Optional[Tuple[int, int]]:
            return sizes.get(os.path.basename(path))
        return probe
    return _factory
