"""Text DSL and JSON codecs for schedule documents."""

from practempo.core.serialization.convert import (
    ScheduleFormat,
    detect_schedule_format,
    generate_schedule,
    json_to_text,
    parse_schedule,
    text_to_json,
)
from practempo.core.serialization.json_format import (
    generate_schedule_json,
    parse_schedule_json,
    row_to_json,
)
from practempo.core.serialization.text import (
    format_interval_line,
    generate_schedule_text,
    parse_schedule_text,
)

__all__ = [
    # Text DSL
    "format_interval_line",
    "generate_schedule_text",
    "parse_schedule_text",
    # JSON
    "generate_schedule_json",
    "parse_schedule_json",
    "row_to_json",
    # Conversion
    "ScheduleFormat",
    "detect_schedule_format",
    "generate_schedule",
    "json_to_text",
    "parse_schedule",
    "text_to_json",
]
