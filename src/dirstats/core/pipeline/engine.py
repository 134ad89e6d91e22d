from __future__ import annotations

"""
Core analysis pipeline.

Coordinates a complete run:
1. Walks the tree once, collecting aggregates and run-wide tables.
2. Ranks and truncates the word and image tables.
3. Resolves the top-level vacant directories.
4. Packs everything into an immutable ScanResults.
"""

import logging
import time
from typing import Optional

from dirstats.core.analysis.ranking import rank_images, rank_words
from dirstats.core.analysis.traversal import scan_tree
from dirstats.core.analysis.vacancy import resolve_vacant_dirs
from dirstats.domain.constants import ROOT_DIR
from dirstats.domain.scan_models import ImageProbe, ScanResults

logger = logging.getLogger(__name__)


def analyze_directory(
        n: int,
        root: str = ROOT_DIR,
        image_probe: Optional[ImageProbe] = None,
) -> ScanResults:
    """
    Compute every statistic for the tree rooted at 'root'.

    Args:
        n: How many words and images to report.
        root: Filesystem location of the tree; defaults to the working directory.
        image_probe: Optional probe override used to measure images.

    Returns:
        ScanResults: The complete, ranked analysis.

    Raises:
        ScanError: If the walk hits a fatal filesystem error. No partial
                   result is produced.
    """
    logger.info(f"Analysis started: {root} (top {n})")
    started = time.perf_counter()

    stats, ctx = scan_tree(root, image_probe=image_probe)

    results = ScanResults(
        largest_file_path=stats.largest_file_path,
        largest_file_size=stats.largest_file_size,
        n_files=stats.file_count,
        n_dirs=stats.dir_count,
        all_files_size=stats.total_bytes,
        most_common_words=rank_words(ctx.word_counts, n),
        largest_images=rank_images(stats.images, n),
        vacant_dirs=resolve_vacant_dirs(ctx.parent_of, ctx.file_count_of),
    )

    elapsed = time.perf_counter() - started
    logger.info(
        f"Analysis finished in {elapsed:.2f}s: {results.n_files} files, "
        f"{results.n_dirs} dirs, {results.all_files_size} bytes"
    )
    logger.debug(
        f"Distinct words: {len(ctx.word_counts)}, images: {len(stats.images)}, "
        f"vacant dirs: {len(results.vacant_dirs)}"
    )
    return results
