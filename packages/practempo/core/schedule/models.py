"""Row data model for schedules.

A schedule is an ordered list of rows. Group rows carry a nesting level
(a depth marker, not a parent reference); interval rows carry one timed
segment and its optional feature binding. The tree structure is recovered
positionally by ``schedule.grouping``.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny

from practempo.core.features.settings import EmptyIntervalSettings, IntervalSettings

DEFAULT_DURATION = "0:00"


class GroupRow(BaseModel):
    """Named, leveled header row.

    Attributes:
        row_type: Discriminator, always "group".
        level: Nesting level (1 for ``#``, 2 for ``##``, ...).
        name: Group name.
    """

    model_config = ConfigDict(validate_assignment=True)

    row_type: Literal["group"] = "group"
    level: int = Field(default=1, ge=1)
    name: str = ""

    @staticmethod
    def default_name(level: int) -> str:
        return f"Group Level {level}"


class IntervalRow(BaseModel):
    """One timed segment of a schedule.

    The row tolerates an unknown or unregistered feature type: its
    positional args are then kept as opaque strings.

    Attributes:
        row_type: Discriminator, always "interval".
        duration: Duration string (``MM:SS`` or ``SS``).
        task: Task label.
        category_name: Owning feature category.
        feature_type_name: Feature type within the category ("" for none).
        feature_args_list: Encoded positional args (see ``features.codec``).
        interval_settings: Per-interval category settings.
    """

    model_config = ConfigDict(validate_assignment=True)

    row_type: Literal["interval"] = "interval"
    duration: str = DEFAULT_DURATION
    task: str = ""
    category_name: str = ""
    feature_type_name: str = ""
    feature_args_list: list[str] = Field(default_factory=list)
    interval_settings: SerializeAsAny[IntervalSettings] = Field(
        default_factory=EmptyIntervalSettings
    )

    def has_content(self) -> bool:
        """True when the row holds anything worth writing out."""
        return (
            self.duration not in (DEFAULT_DURATION, "")
            or bool(self.task)
            or bool(self.feature_type_name)
            or any(a != "" for a in self.feature_args_list)
            or not self.interval_settings.is_default()
        )

    def display_label(self) -> str:
        return self.task or self.feature_type_name or "Interval"


ScheduleRow = Annotated[GroupRow | IntervalRow, Field(discriminator="row_type")]


class ScheduleDocument(BaseModel):
    """A named, ordered list of rows; the unit of persistence."""

    model_config = ConfigDict(validate_assignment=True)

    name: str = ""
    items: list[ScheduleRow] = Field(default_factory=list)

    def intervals(self) -> list[IntervalRow]:
        return [row for row in self.items if isinstance(row, IntervalRow)]

    def groups(self) -> list[GroupRow]:
        return [row for row in self.items if isinstance(row, GroupRow)]


def copy_row(row: GroupRow | IntervalRow) -> GroupRow | IntervalRow:
    """Deep copy a row, including its settings object."""
    return row.model_copy(deep=True)


__all__ = [
    "DEFAULT_DURATION",
    "GroupRow",
    "IntervalRow",
    "ScheduleDocument",
    "ScheduleRow",
    "copy_row",
]
