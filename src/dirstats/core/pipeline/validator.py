from __future__ import annotations

"""
Configuration Validation Service.

Normalizes the merged configuration before a run: coerces loosely typed
values coming from the CLI or the persisted JSON file, and falls back to
the defaults where a value is unusable.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from dirstats.domain.config import get_default_config

logger = logging.getLogger(__name__)

_STRING_FIELDS = ("image_probe_command", "log_level")
_OPTIONAL_STRING_FIELDS = ("log_file",)
_INT_FIELDS = ("top_n", "max_open_files")
_POSITIVE_INT_FIELDS = ("max_open_files",)
_OPTIONAL_FLOAT_FIELDS = ("image_probe_timeout",)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: If True, raise on invalid values instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          the warnings emitted.

    Raises:
        TypeError: In strict mode, when a value has the wrong type.
        ValueError: In strict mode, when a numeric value is out of range.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in _STRING_FIELDS:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in _OPTIONAL_STRING_FIELDS:
        value = merged.get(field)
        merged[field] = "" if value is None else _as_str(value, "", field, warnings, strict)

    for field in _INT_FIELDS:
        merged[field] = _as_int(
            merged.get(field), defaults[field], field, warnings, strict,
            positive=field in _POSITIVE_INT_FIELDS,
        )

    for field in _OPTIONAL_FLOAT_FIELDS:
        merged[field] = _as_optional_float(merged.get(field), field, warnings, strict)

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _reject(msg: str, exc_type: type, warnings: List[str], strict: bool) -> None:
    if strict:
        raise exc_type(msg)
    warnings.append(f"{msg} Using fallback.")


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and strip string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    _reject(
        f"Invalid field '{field}': expected str, received {type(value).__name__}.",
        TypeError, warnings, strict,
    )
    return fallback


def _as_int(
        value: Any,
        fallback: int,
        field: str,
        warnings: List[str],
        strict: bool,
        positive: bool = False,
) -> int:
    """Coerce ints and numeric strings; booleans are rejected."""
    if value is None:
        return fallback

    result: Optional[int] = None
    if isinstance(value, int) and not isinstance(value, bool):
        result = value
    elif isinstance(value, str) and not strict:
        try:
            result = int(value.strip())
            warnings.append(f"Field '{field}' converted from '{value}' to {result}.")
        except ValueError:
            result = None

    if result is None:
        _reject(
            f"Invalid field '{field}': expected int, received {type(value).__name__}.",
            TypeError, warnings, strict,
        )
        return fallback

    if positive and result <= 0:
        _reject(f"Invalid field '{field}': must be positive, received {result}.",
                ValueError, warnings, strict)
        return fallback

    return result


def _as_optional_float(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[float]:
    """Accept None or a positive number of seconds."""
    if value is None or value == "":
        return None

    result: Optional[float] = None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        result = float(value)
    elif isinstance(value, str) and not strict:
        try:
            result = float(value.strip())
        except ValueError:
            result = None

    if result is None:
        _reject(
            f"Invalid field '{field}': expected number, received {type(value).__name__}.",
            TypeError, warnings, strict,
        )
        return None

    if result <= 0:
        _reject(f"Invalid field '{field}': must be positive, received {result}.",
                ValueError, warnings, strict)
        return None

    return result
