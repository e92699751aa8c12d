"""Common utilities for wstools."""

import math
from typing import Any

from .exceptions import ToolError, ToolErrorKind


def invalid_input_error(message: str) -> ToolError:
    """Build an error for malformed, missing, or out-of-policy arguments."""
    return ToolError(ToolErrorKind.INVALID_INPUT, message)


def not_found_error(message: str) -> ToolError:
    """Build an error for a missing file, directory, or tool."""
    return ToolError(ToolErrorKind.NOT_FOUND, message)


def internal_error(message: str) -> ToolError:
    """Build an error for an unexpected I/O or runtime failure."""
    return ToolError(ToolErrorKind.INTERNAL, message)


def clamp_int(value: Any, fallback: int, minimum: int, maximum: int) -> int:
    """Coerce a loosely-typed numeric input into an integer within bounds.

    Values that cannot be read as a finite number (None, "abc", NaN) yield
    ``fallback``. Fractions are rounded half up before clamping.

    Args:
        value: Raw input value (int, float, numeric string, ...)
        fallback: Value used when ``value`` is not numeric
        minimum: Lower bound (inclusive)
        maximum: Upper bound (inclusive)

    Returns:
        Integer in ``[minimum, maximum]``

    Examples:
        >>> clamp_int("30", 20, 1, 200)
        30
        >>> clamp_int(5000, 20, 1, 200)
        200
        >>> clamp_int(None, 20, 1, 200)
        20
    """
    if value is None or isinstance(value, bool):
        return fallback

    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return fallback

    if not math.isfinite(numeric):
        return fallback

    return min(maximum, max(minimum, math.floor(numeric + 0.5)))


def to_posix_path(path: str) -> str:
    """Render a relative path with forward slashes regardless of host OS."""
    return path.replace("\\", "/")
