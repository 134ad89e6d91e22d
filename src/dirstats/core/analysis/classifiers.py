from __future__ import annotations

"""
Per-File Classifiers.

Measures a single file for the traversal engine: its byte size, the long
words it contributes when it is a plain-text file, and its pixel
dimensions when the image probe recognizes it.
"""

import logging
import os
import re
from collections import Counter
from typing import List, Optional

from dirstats.domain.constants import MIN_WORD_LENGTH, TEXT_FILE_SUFFIX
from dirstats.domain.errors import FileReadError
from dirstats.domain.scan_models import ImageInfo, ScanContext

logger = logging.getLogger(__name__)

# Maximal runs of ASCII letters; every other byte is a delimiter
_WORD_RX = re.compile(rb"[A-Za-z]+")

# -----------------------------------------------------------------------------
# SIZE
# -----------------------------------------------------------------------------

def read_file_size(path: str) -> Optional[int]:
    """
    Return the size of a file in bytes, or None if its metadata is unreadable.
    """
    try:
        return os.stat(path).st_size
    except OSError as e:
        logger.debug(f"Size unavailable for '{path}': {e}")
        return None

# -----------------------------------------------------------------------------
# TEXT
# -----------------------------------------------------------------------------

def is_text_file(name: str) -> bool:
    """Check the text-file suffix, ignoring case."""
    return name.lower().endswith(TEXT_FILE_SUFFIX)


def extract_words(data: bytes, min_length: int = MIN_WORD_LENGTH) -> List[str]:
    """
    Extract the countable words from a chunk of raw bytes.

    Args:
        data: Raw file content. Must not split a run of letters.
        min_length: Shortest word that is counted.

    Returns:
        List[str]: Lowercased words in order of appearance.
    """
    return [
        match.decode("ascii").lower()
        for match in _WORD_RX.findall(data)
        if len(match) >= min_length
    ]


def count_words(path: str, counter: Counter) -> None:
    """
    Add every long word of a text file to the shared counter.

    The file is read line by line in binary mode; a newline is always a
    delimiter, so no word spans two lines and the final word of the file
    is counted even without a trailing delimiter.

    Args:
        path: Filesystem path of the text file.
        counter: Run-wide word table to update.

    Raises:
        FileReadError: If the file cannot be opened or read.
    """
    try:
        with open(path, "rb") as f:
            for line in f:
                counter.update(extract_words(line))
    except OSError as e:
        raise FileReadError(path, e) from e

# -----------------------------------------------------------------------------
# IMAGES
# -----------------------------------------------------------------------------

def classify_image(ctx: ScanContext, path: str, rel_path: str) -> Optional[ImageInfo]:
    """
    Measure a file with the context's image probe.

    Args:
        ctx: Active scan context.
        path: Filesystem path passed to the probe.
        rel_path: Report path stored in the result.

    Returns:
        Optional[ImageInfo]: The image entry, or None when the file is not a
        measurable image.
    """
    dimensions = ctx.image_probe(path)
    if dimensions is None:
        return None

    width, height = dimensions
    if width <= 0 or height <= 0:
        return None
    return ImageInfo(path=rel_path, width=width, height=height)
