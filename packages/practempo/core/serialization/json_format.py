"""JSON document codec.

Wire shape::

    {"name": "...", "items": [
        {"rowType": "group", "level": 1, "name": "..."},
        {"rowType": "interval", "duration": "3:00", "task": "...",
         "categoryName": "Guitar", "featureTypeName": "Scale",
         "featureArgsList": ["Major", "C"], "intervalSettings": {...}}
    ]}

Structural problems (malformed JSON, non-object top level, missing
``items`` array) raise ``ScheduleFormatError``. Individual items that are
invalid, or whose category is not registered, are skipped with a warning.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from practempo.core.errors import ScheduleFormatError
from practempo.core.features.registry import FeatureRegistry
from practempo.core.schedule.models import (
    DEFAULT_DURATION,
    GroupRow,
    IntervalRow,
    ScheduleDocument,
    ScheduleRow,
)

logger = logging.getLogger(__name__)

JSON_INDENT = 2


class GroupItemJSON(BaseModel):
    """Wire form of a group row."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    row_type: Literal["group"] = Field(default="group", alias="rowType")
    level: int = 1
    name: str | None = None

    @field_validator("level", mode="before")
    @classmethod
    def coerce_level(cls, v: Any) -> int:
        # Anything but a positive integer falls back to level 1
        if isinstance(v, bool) or not isinstance(v, int | float) or v < 1:
            return 1
        return int(v)

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, v: Any) -> str | None:
        return v.strip() if isinstance(v, str) else None


def _arg_text(value: Any) -> str:
    """Render a JSON scalar the way the text format and codec spell it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class IntervalItemJSON(BaseModel):
    """Wire form of an interval row.

    ``featureCategoryName`` is accepted as a legacy spelling of
    ``categoryName``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    row_type: Literal["interval"] = Field(default="interval", alias="rowType")
    duration: str = DEFAULT_DURATION
    task: str = ""
    category_name: str | None = Field(
        default=None,
        alias="categoryName",
        validation_alias=AliasChoices("categoryName", "featureCategoryName"),
    )
    feature_type_name: str = Field(default="", alias="featureTypeName")
    feature_args_list: list[str] = Field(default_factory=list, alias="featureArgsList")
    interval_settings: dict[str, Any] | None = Field(default=None, alias="intervalSettings")

    @field_validator("duration", mode="before")
    @classmethod
    def coerce_duration(cls, v: Any) -> str:
        return v.strip() if isinstance(v, str) else DEFAULT_DURATION

    @field_validator("task", "feature_type_name", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return v.strip() if isinstance(v, str) else ""

    @field_validator("category_name", mode="before")
    @classmethod
    def coerce_category(cls, v: Any) -> str | None:
        return (v.strip() or None) if isinstance(v, str) else None

    @field_validator("feature_args_list", mode="before")
    @classmethod
    def coerce_args(cls, v: Any) -> list[str]:
        if not isinstance(v, list):
            return []
        return [_arg_text(a) for a in v]

    @field_validator("interval_settings", mode="before")
    @classmethod
    def coerce_settings(cls, v: Any) -> dict[str, Any] | None:
        if v is not None and not isinstance(v, dict):
            logger.warning(f"Ignoring non-object intervalSettings: {v!r}")
            return None
        return v


def parse_schedule_json(
    json_text: str,
    registry: FeatureRegistry,
    default_category: str = "Guitar",
) -> ScheduleDocument:
    """Parse a JSON schedule document.

    Args:
        json_text: Document text.
        registry: Registry used to resolve categories and settings parsers.
        default_category: Category assumed for items without ``categoryName``.

    Returns:
        Parsed document; skipped items are absent.

    Raises:
        ScheduleFormatError: If the document is structurally invalid.
    """
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise ScheduleFormatError(f"Invalid JSON format: {e}") from e

    if not isinstance(data, dict):
        raise ScheduleFormatError("Invalid schedule format: Expected a top-level object.")

    items = data.get("items")
    if not isinstance(items, list):
        raise ScheduleFormatError(
            "Invalid schedule format: Expected an 'items' array within the object."
        )

    name = data.get("name")
    rows: list[ScheduleRow] = []
    for index, item in enumerate(items):
        row = _parse_item(index, item, registry, default_category)
        if row is not None:
            rows.append(row)

    logger.debug(f"Parsed JSON schedule with {len(rows)} of {len(items)} items")
    return ScheduleDocument(name=name.strip() if isinstance(name, str) else "", items=rows)


def _parse_item(
    index: int,
    item: Any,
    registry: FeatureRegistry,
    default_category: str,
) -> ScheduleRow | None:
    row_type = item.get("rowType") if isinstance(item, dict) else None
    try:
        if row_type == "group":
            group = GroupItemJSON.model_validate(item)
            return GroupRow(
                level=group.level,
                name=group.name if group.name is not None else GroupRow.default_name(group.level),
            )
        if row_type == "interval":
            interval = IntervalItemJSON.model_validate(item)
            return _parse_interval(index, interval, registry, default_category)
    except ValidationError as e:
        logger.warning(f"Skipping invalid schedule item at index {index}: {e}")
        return None

    logger.warning(f"Skipping invalid schedule item at index {index}: {item!r}")
    return None


def _parse_interval(
    index: int,
    item: IntervalItemJSON,
    registry: FeatureRegistry,
    default_category: str,
) -> IntervalRow | None:
    category_name = item.category_name or default_category
    parser = registry.get_settings_parser(category_name)
    if parser is None:
        logger.warning(
            f"Skipping interval item at index {index}: unknown category '{category_name}'"
        )
        return None

    if item.feature_type_name and not registry.get_feature_type_descriptor(
        category_name, item.feature_type_name
    ):
        # Kept with opaque args; the builder reports it if the row is run
        logger.warning(
            f"Interval item at index {index} references unknown feature type "
            f"'{item.feature_type_name}' in category '{category_name}'"
        )

    return IntervalRow(
        duration=item.duration,
        task=item.task,
        category_name=category_name,
        feature_type_name=item.feature_type_name,
        feature_args_list=item.feature_args_list,
        interval_settings=parser(item.interval_settings),
    )


def row_to_json(row: ScheduleRow) -> dict[str, Any]:
    """Wire dict for one row; ``intervalSettings`` omitted when default."""
    if isinstance(row, GroupRow):
        return GroupItemJSON(level=row.level, name=row.name).model_dump(by_alias=True)
    item = IntervalItemJSON(
        duration=row.duration,
        task=row.task,
        category_name=row.category_name,
        feature_type_name=row.feature_type_name,
        feature_args_list=list(row.feature_args_list),
        interval_settings=row.interval_settings.to_json(),
    )
    return item.model_dump(by_alias=True, exclude_none=True)


def generate_schedule_json(document: ScheduleDocument) -> str:
    """Pretty-print a document; ``name`` is omitted when blank."""
    payload: dict[str, Any] = {}
    if document.name.strip():
        payload["name"] = document.name.strip()
    payload["items"] = [row_to_json(row) for row in document.items]
    return json.dumps(payload, indent=JSON_INDENT, ensure_ascii=False)


__all__ = [
    "GroupItemJSON",
    "IntervalItemJSON",
    "generate_schedule_json",
    "parse_schedule_json",
    "row_to_json",
]
