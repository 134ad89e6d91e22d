from __future__ import annotations

"""
Ranking and Truncation of the accumulated word and image tables.
"""

from typing import Iterable, List, Mapping, Tuple

from dirstats.domain.scan_models import ImageInfo


def rank_words(word_counts: Mapping[str, int], n: int) -> List[Tuple[str, int]]:
    """
    Return the 'n' most frequent words.

    Ordered by descending count, then ascending word.
    """
    if n <= 0:
        return []
    ranked = sorted(word_counts.items(), key=lambda item: (-item[1], item[0]))
    return ranked[:n]


def rank_images(images: Iterable[ImageInfo], n: int) -> List[ImageInfo]:
    """
    Return the 'n' largest images.

    Ordered by descending pixel area, then ascending path.
    """
    if n <= 0:
        return []
    ranked = sorted(images, key=lambda image: (-image.pixels, image.path))
    return ranked[:n]
