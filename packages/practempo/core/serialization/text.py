"""Plain-text schedule DSL.

One row per non-blank line::

    # Scale Practice
    ## Major
    3:00, C Major Scale, Scale, Major, C, @BPM:80

A group line is a run of ``#`` (the level) followed by the name. An interval
line is ``duration[, task][, featureType][, arg, ...][, @SETTINGS]``.

Empty args keep their slot: they are written as ``""`` and an empty or
``""`` token parses back to an empty arg, so later args stay in place.

Quoting is partial: args containing a comma are written in double quotes,
and a token wrapped in double quotes has them stripped on parse, but the
parser still splits on every comma, so a quoted comma does not survive a
round trip.
"""

from __future__ import annotations

import logging
import re

from practempo.core.features.registry import FeatureRegistry
from practempo.core.features.settings import EmptyIntervalSettings, IntervalSettings
from practempo.core.schedule.models import (
    DEFAULT_DURATION,
    GroupRow,
    IntervalRow,
    ScheduleDocument,
    ScheduleRow,
)

logger = logging.getLogger(__name__)

# duration(1), task(2), feature type(3), rest(4); task and type never start with @ or #
INTERVAL_LINE_RE = re.compile(
    r"^([0-9:]+)(?:,\s*([^,@#][^,]*)?)?(?:,\s*([^,@#][^,]*)?)?(?:,(.*))?$"
)
GROUP_LINE_RE = re.compile(r"^(#+)\s*(.*)$")

SETTINGS_PREFIX = "@"
ARG_SEPARATOR = ","
LINE_SEPARATOR = ", "


def parse_schedule_text(
    text: str,
    registry: FeatureRegistry,
    default_category: str = "Guitar",
) -> ScheduleDocument:
    """Parse schedule text into a document.

    Unrecognized lines are skipped with a warning. Every interval is assigned
    ``default_category``; its settings come from that category's factory,
    or from its literal parser when the line ends with a settings token.

    Args:
        text: Schedule text.
        registry: Registry providing settings factories and literal parsers.
        default_category: Category assigned to parsed intervals.

    Returns:
        Parsed document (unnamed; the DSL has no name line).

    Example:
        >>> doc = parse_schedule_text("# Scales\\n3:00, C Major, Scale, Major, C", registry)
        >>> [type(r).__name__ for r in doc.items]
        ['GroupRow', 'IntervalRow']
    """
    if default_category not in registry:
        logger.warning(
            f"Default category '{default_category}' is not registered; "
            "intervals will carry empty settings"
        )

    rows: list[ScheduleRow] = []
    lines = [line.strip() for line in text.splitlines()]
    for line_no, line in enumerate(lines, start=1):
        if not line:
            continue
        row = parse_line(line, registry, default_category)
        if row is None:
            logger.warning(f"Skipping schedule line {line_no} due to unrecognized format: {line}")
            continue
        rows.append(row)

    logger.debug(f"Parsed schedule text into {len(rows)} rows")
    return ScheduleDocument(items=rows)


def parse_line(line: str, registry: FeatureRegistry, category_name: str) -> ScheduleRow | None:
    """Parse one stripped, non-blank line; None when it matches neither shape."""
    group_match = GROUP_LINE_RE.match(line)
    if group_match:
        level = len(group_match.group(1))
        name = group_match.group(2).strip()
        return GroupRow(level=level, name=name or GroupRow.default_name(level))

    interval_match = INTERVAL_LINE_RE.match(line)
    if not interval_match:
        return None

    duration, task, feature_type, rest = interval_match.groups()
    tokens = _split_args(rest) if rest and rest.strip() else []

    settings = _default_settings(registry, category_name)
    if tokens and tokens[-1].startswith(SETTINGS_PREFIX):
        parsed = _parse_settings_literal(registry, category_name, tokens[-1])
        if parsed is not None:
            settings = parsed
            tokens.pop()
        else:
            logger.warning(f"Unrecognized settings token {tokens[-1]!r}; kept as an argument")

    return IntervalRow(
        duration=(duration or "").strip() or DEFAULT_DURATION,
        task=(task or "").strip(),
        category_name=category_name,
        feature_type_name=(feature_type or "").strip(),
        feature_args_list=tokens,
        interval_settings=settings,
    )


def generate_schedule_text(document: ScheduleDocument) -> str:
    """Render a document as schedule text.

    Interval rows without content are omitted. Empty task and feature type
    placeholders are written only when a later part of the line needs them.
    """
    lines: list[str] = []
    for row in document.items:
        if isinstance(row, GroupRow):
            lines.append(f"{'#' * row.level} {row.name}".rstrip())
        elif row.has_content():
            lines.append(format_interval_line(row))
    return "\n".join(lines).strip()


def format_interval_line(row: IntervalRow) -> str:
    args = list(row.feature_args_list)
    has_args = bool(args)
    literal = row.interval_settings.to_literal()

    parts = [row.duration or DEFAULT_DURATION]
    if row.task or row.feature_type_name or has_args or literal:
        parts.append(row.task)
    if row.feature_type_name or has_args or literal:
        parts.append(row.feature_type_name)
    if args:
        parts.extend(_quote(a) for a in args)
    if literal:
        parts.append(literal)
    return LINE_SEPARATOR.join(parts)


def _split_args(raw: str) -> list[str]:
    tokens = (token.strip() for token in raw.split(ARG_SEPARATOR))
    return [_unquote(t) for t in tokens]


def _quote(arg: str) -> str:
    if arg == "" or ARG_SEPARATOR in arg:
        return f'"{arg}"'
    return arg


def _unquote(token: str) -> str:
    if len(token) >= 2 and token[0] == token[-1] == '"':
        return token[1:-1]
    return token


def _default_settings(registry: FeatureRegistry, category_name: str) -> IntervalSettings:
    factory = registry.get_settings_factory(category_name)
    return factory() if factory else EmptyIntervalSettings()


def _parse_settings_literal(
    registry: FeatureRegistry, category_name: str, token: str
) -> IntervalSettings | None:
    literal_parser = registry.get_settings_literal_parser(category_name)
    return literal_parser(token) if literal_parser else None


__all__ = [
    "GROUP_LINE_RE",
    "INTERVAL_LINE_RE",
    "format_interval_line",
    "generate_schedule_text",
    "parse_line",
    "parse_schedule_text",
]
