"""Schedule row model, grouping, building and editing."""

from practempo.core.schedule.models import (
    DEFAULT_DURATION,
    GroupRow,
    IntervalRow,
    ScheduleDocument,
    ScheduleRow,
    copy_row,
)
from practempo.core.schedule.grouping import (
    OutlineEntry,
    build_outline,
    compute_indents,
    group_span,
)
from practempo.core.schedule.builder import Interval, Schedule, ScheduleBuilder
from practempo.core.schedule.editor import ScheduleEditor

__all__ = [
    # Models
    "DEFAULT_DURATION",
    "GroupRow",
    "IntervalRow",
    "ScheduleDocument",
    "ScheduleRow",
    "copy_row",
    # Grouping
    "OutlineEntry",
    "build_outline",
    "compute_indents",
    "group_span",
    # Build
    "Interval",
    "Schedule",
    "ScheduleBuilder",
    # Editing
    "ScheduleEditor",
]
