"""Build a runnable schedule from a schedule document.

Building is fail-fast: the first invalid interval raises
``ScheduleBuildError`` and no partial schedule is returned, since a
partially built schedule is unsafe to run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from practempo.core.config.models import ScheduleConfig
from practempo.core.errors import ScheduleBuildError
from practempo.core.features.codec import validate_args
from practempo.core.features.descriptor import Feature, FeatureContext
from practempo.core.features.registry import FeatureRegistry
from practempo.core.features.settings import IntervalSettings
from practempo.core.schedule.models import IntervalRow, ScheduleDocument
from practempo.core.utils.durations import format_duration, parse_duration
from practempo.core.utils.logging import get_logger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Interval:
    """One runnable interval.

    Attributes:
        duration_seconds: Length of the interval.
        warmup_seconds: Lead-in before the interval starts counting.
        label: Task, feature type or "Interval".
        feature: Configured feature, or None for a plain timer.
        settings: Per-interval settings resolved through the category.
    """

    duration_seconds: int
    warmup_seconds: int
    label: str
    feature: Feature | None = None
    settings: IntervalSettings | None = None


@dataclass(frozen=True)
class Schedule:
    """Ordered runnable intervals of one built document."""

    name: str = ""
    intervals: tuple[Interval, ...] = field(default_factory=tuple)

    @property
    def total_duration_seconds(self) -> int:
        return sum(i.duration_seconds for i in self.intervals)

    @property
    def total_duration(self) -> str:
        return format_duration(self.total_duration_seconds)

    def __len__(self) -> int:
        return len(self.intervals)

    def __iter__(self) -> Iterator[Interval]:
        return iter(self.intervals)


class ScheduleBuilder:
    """Turns a ``ScheduleDocument`` into a ``Schedule``.

    For each interval row, in document order: parse the duration, add it to
    the running total and check the ceiling, resolve settings through the
    category's parser, resolve the feature type descriptor, and call its
    factory. Group rows are skipped.

    Args:
        registry: Frozen feature registry.
        config: Schedule settings (duration ceiling, warmup).

    Example:
        >>> builder = ScheduleBuilder(build_default_registry(), ScheduleConfig())
        >>> schedule = builder.build(document)
        >>> schedule.total_duration
        '11:00'
    """

    def __init__(self, registry: FeatureRegistry, config: ScheduleConfig | None = None) -> None:
        self.registry = registry
        self.config = config or ScheduleConfig()

    def build(
        self,
        document: ScheduleDocument,
        global_settings: Mapping[str, Mapping[str, Any]] | None = None,
        extras: Mapping[str, Any] | None = None,
    ) -> Schedule:
        """Build every interval of ``document``.

        Args:
            document: Document to build.
            global_settings: Per-category overrides of the category's
                default global settings, keyed by category name.
            extras: Opaque runtime handles passed to feature factories.

        Returns:
            The built schedule.

        Raises:
            ScheduleBuildError: On the first invalid interval.
        """
        ceiling = self.config.max_total_duration_seconds
        total = 0
        intervals: list[Interval] = []

        for index, row in enumerate(document.items, start=1):
            if not isinstance(row, IntervalRow):
                logger.debug(f"Skipping group row {index}: '{row.name}'")
                continue

            label = row.task or row.feature_type_name or row.duration
            try:
                seconds = parse_duration(row.duration)
            except ValueError as e:
                raise ScheduleBuildError(index, label, str(e)) from e

            total += seconds
            if total > ceiling:
                raise ScheduleBuildError(
                    index,
                    label,
                    f"Total schedule duration exceeds maximum limit ({format_duration(ceiling)}).",
                )

            settings = self._resolve_settings(row)
            feature = self._create_feature(index, label, row, settings, global_settings, extras)
            intervals.append(
                Interval(
                    duration_seconds=seconds,
                    warmup_seconds=self.config.warmup_period_seconds,
                    label=row.display_label(),
                    feature=feature,
                    settings=settings,
                )
            )

        logger.info(
            f"Schedule built with {len(intervals)} intervals, total {format_duration(total)}"
        )
        return Schedule(name=document.name, intervals=tuple(intervals))

    def _resolve_settings(self, row: IntervalRow) -> IntervalSettings:
        parser = self.registry.get_settings_parser(row.category_name)
        if parser is None:
            logger.warning(
                f"No settings parser for category '{row.category_name}'; using row settings as-is"
            )
            return row.interval_settings.copy_settings()
        return parser(row.interval_settings.to_json())

    def _create_feature(
        self,
        index: int,
        label: str,
        row: IntervalRow,
        settings: IntervalSettings,
        global_settings: Mapping[str, Mapping[str, Any]] | None,
        extras: Mapping[str, Any] | None,
    ) -> Feature | None:
        if not row.feature_type_name:
            logger.debug(f"No feature specified for interval {index}")
            return None

        descriptor = self.registry.get_feature_type_descriptor(
            row.category_name, row.feature_type_name
        )
        if descriptor is None:
            raise ScheduleBuildError(
                index,
                label,
                f'Unknown feature type: "{row.feature_type_name}" '
                f'in category "{row.category_name}"',
            )

        row_log = get_logger(__name__, row_index=index, label=label)
        for problem in validate_args(descriptor.schema, row.feature_args_list):
            row_log.warning(f"Interval {index} ({label}): {problem}")

        category_globals = self.registry.get_default_global_settings(row.category_name) or {}
        if global_settings and row.category_name in global_settings:
            category_globals.update(global_settings[row.category_name])

        context = FeatureContext(
            interval_settings=settings,
            global_settings=category_globals,
            extras=dict(extras or {}),
        )
        try:
            feature = descriptor.create_feature(row.feature_args_list, context)
        except Exception as e:
            raise ScheduleBuildError(index, label, str(e)) from e

        logger.debug(f"Created feature '{descriptor.type_name}' for interval {index}")
        return feature


__all__ = ["Interval", "Schedule", "ScheduleBuilder"]
