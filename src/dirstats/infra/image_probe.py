from __future__ import annotations

"""
External Image Probe.

Wraps the ImageMagick 'identify' tool to measure image dimensions. The
probe is best-effort: a missing executable, a non-zero exit status, a
timeout, or unparsable output all mean "not an image" and never interrupt
the scan.
"""

import logging
import subprocess
from typing import List, Optional, Tuple

from dirstats.domain.constants import DEFAULT_IMAGE_PROBE_COMMAND, IMAGE_PROBE_FORMAT
from dirstats.domain.scan_models import ImageProbe

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_identify_probe(
        command: str = DEFAULT_IMAGE_PROBE_COMMAND,
        timeout: Optional[float] = None,
) -> ImageProbe:
    """
    Create a probe callable bound to a specific executable and timeout.

    Args:
        command: Name or path of the 'identify' executable.
        timeout: Optional per-file limit in seconds; None waits indefinitely.

    Returns:
        ImageProbe: Callable mapping a file path to (width, height) or None.
    """
    def probe(path: str) -> Optional[Tuple[int, int]]:
        return probe_image_size(path, command=command, timeout=timeout)

    return probe


def probe_image_size(
        path: str,
        command: str = DEFAULT_IMAGE_PROBE_COMMAND,
        timeout: Optional[float] = None,
) -> Optional[Tuple[int, int]]:
    """
    Ask the external tool for the pixel dimensions of a file.

    Args:
        path: Filesystem path of the candidate file.
        command: Name or path of the 'identify' executable.
        timeout: Optional limit in seconds.

    Returns:
        Optional[Tuple[int, int]]: (width, height) when the file is a
        recognizable image with positive dimensions, otherwise None.
    """
    try:
        completed = subprocess.run(
            _build_command(command, path),
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except (FileNotFoundError, PermissionError) as e:
        logger.debug(f"Image probe unavailable ({command}): {e}")
        return None
    except subprocess.TimeoutExpired:
        logger.debug(f"Image probe timed out on '{path}'")
        return None
    except OSError as e:
        logger.debug(f"Image probe failed on '{path}': {e}")
        return None

    if completed.returncode != 0:
        return None

    return parse_dimensions(completed.stdout)


def parse_dimensions(output: str) -> Optional[Tuple[int, int]]:
    """
    Parse the first output line of the probe as 'WIDTH HEIGHT'.

    Args:
        output: Raw standard output of the probe.

    Returns:
        Optional[Tuple[int, int]]: Positive dimensions, or None.
    """
    lines = output.splitlines()
    if not lines:
        return None

    tokens = lines[0].split()
    if len(tokens) < 2:
        return None

    try:
        width, height = int(tokens[0]), int(tokens[1])
    except ValueError:
        return None

    if width <= 0 or height <= 0:
        return None
    return width, height

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _build_command(command: str, path: str) -> List[str]:
    """Assemble the argv for the probe without involving a shell."""
    return [command, "-format", IMAGE_PROBE_FORMAT, path]
