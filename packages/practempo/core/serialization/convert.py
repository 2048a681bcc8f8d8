"""Conversion between the text DSL and the JSON document format.

Conversion always goes through the row model: parse with one codec, emit
with the other.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from practempo.core.features.registry import FeatureRegistry
from practempo.core.schedule.models import ScheduleDocument
from practempo.core.serialization.json_format import generate_schedule_json, parse_schedule_json
from practempo.core.serialization.text import generate_schedule_text, parse_schedule_text


class ScheduleFormat(str, Enum):
    """Surface format of a schedule file."""

    TEXT = "text"
    JSON = "json"


def detect_schedule_format(path: Path | str) -> ScheduleFormat:
    """JSON for ``.json`` files, text for anything else."""
    return ScheduleFormat.JSON if Path(path).suffix.lower() == ".json" else ScheduleFormat.TEXT


def parse_schedule(
    content: str,
    fmt: ScheduleFormat,
    registry: FeatureRegistry,
    default_category: str = "Guitar",
) -> ScheduleDocument:
    if fmt == ScheduleFormat.JSON:
        return parse_schedule_json(content, registry, default_category)
    return parse_schedule_text(content, registry, default_category)


def generate_schedule(document: ScheduleDocument, fmt: ScheduleFormat) -> str:
    if fmt == ScheduleFormat.JSON:
        return generate_schedule_json(document)
    return generate_schedule_text(document)


def text_to_json(text: str, registry: FeatureRegistry, default_category: str = "Guitar") -> str:
    """Convert schedule text to a JSON document; unrecognized lines are dropped."""
    return generate_schedule_json(parse_schedule_text(text, registry, default_category))


def json_to_text(
    json_text: str, registry: FeatureRegistry, default_category: str = "Guitar"
) -> str:
    """Convert a JSON document to schedule text.

    Raises:
        ScheduleFormatError: If the JSON document is structurally invalid.
    """
    return generate_schedule_text(parse_schedule_json(json_text, registry, default_category))


__all__ = [
    "ScheduleFormat",
    "detect_schedule_format",
    "generate_schedule",
    "json_to_text",
    "parse_schedule",
    "text_to_json",
]
