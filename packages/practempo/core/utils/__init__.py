"""Shared utilities for PracTempo."""

from practempo.core.utils.durations import format_duration, parse_duration
from practempo.core.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "format_duration",
    "get_logger",
    "parse_duration",
]
