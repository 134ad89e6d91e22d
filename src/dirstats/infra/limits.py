from __future__ import annotations

"""
Process Resource Limits.

Caps the number of simultaneously open file descriptors before a scan
starts. The traversal keeps one directory handle open per tree level.
"""

import logging
from typing import Tuple

from dirstats.domain.errors import ResourceLimitError

logger = logging.getLogger(__name__)

try:
    import resource
except ImportError:  # Windows
    resource = None  # type: ignore[assignment]


def apply_open_files_limit(limit: int) -> Tuple[int, int]:
    """
    Set the soft RLIMIT_NOFILE of the current process.

    The hard limit is left untouched so the cap can be raised again later in
    the same process.

    Args:
        limit: Maximum number of concurrently open descriptors.

    Returns:
        Tuple[int, int]: The (soft, hard) limits now in effect.

    Raises:
        ResourceLimitError: If the limit is invalid or rejected by the OS.
    """
    label = f"RLIMIT_NOFILE={limit}"

    if resource is None:
        logger.warning("Open file limit not supported on this platform; skipping.")
        return limit, limit

    if limit <= 0:
        raise ResourceLimitError(label, ValueError("limit must be positive"))

    try:
        _, hard = resource.getrlimit(resource.RLIMIT_NOFILE)
        if hard != resource.RLIM_INFINITY and limit > hard:
            raise ValueError(f"exceeds hard limit {hard}")
        resource.setrlimit(resource.RLIMIT_NOFILE, (limit, hard))
    except (OSError, ValueError) as e:
        raise ResourceLimitError(label, e) from e

    logger.debug(f"Open file limit set to {limit} (hard: {hard})")
    return limit, hard
