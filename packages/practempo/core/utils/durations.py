"""Duration string helpers (``MM:SS`` or ``SS``)."""

from __future__ import annotations


def parse_duration(duration: str) -> int:
    """Parse a duration string into total seconds.

    Args:
        duration: ``"MM:SS"`` (e.g. ``"3:45"``) or plain seconds (``"45"``).

    Returns:
        Total duration in whole seconds.

    Raises:
        ValueError: If the string is empty, has more than two parts, contains
            non-integer parts, negative values, or seconds >= 60 (in either form).

    Example:
        >>> parse_duration("3:45")
        225
        >>> parse_duration("45")
        45
    """
    if not isinstance(duration, str) or not duration.strip():
        raise ValueError("Invalid duration input: must be a non-empty string.")

    parts = duration.strip().split(":")
    if len(parts) == 1:
        minutes_str, seconds_str = "0", parts[0]
    elif len(parts) == 2:
        minutes_str, seconds_str = parts
    else:
        raise ValueError(f'Invalid duration format: "{duration}". Use MM:SS or SS.')

    try:
        minutes = int(minutes_str)
        seconds = int(seconds_str)
    except ValueError:
        raise ValueError(f'Invalid time values in duration: "{duration}".') from None

    if minutes < 0 or seconds < 0:
        raise ValueError(f'Duration cannot be negative: "{duration}".')
    if seconds >= 60:
        raise ValueError(f'Invalid time values in duration: "{duration}". Seconds must be < 60.')

    return minutes * 60 + seconds


def format_duration(total_seconds: float) -> str:
    """Format seconds as ``M:SS``; negative input formats as ``0:00``."""
    if total_seconds < 0:
        return "0:00"
    minutes, seconds = divmod(int(total_seconds), 60)
    return f"{minutes}:{seconds:02d}"
