"""Built-in Guitar category."""

from __future__ import annotations

from practempo.core.categories.guitar.features import (
    CATEGORY_NAME,
    GUITAR_FEATURE_DESCRIPTORS,
    GuitarFeature,
)
from practempo.core.categories.guitar.settings import (
    DEFAULT_GUITAR_SETTINGS,
    GuitarIntervalSettings,
)
from practempo.core.features.registry import Category
from practempo.core.schedule.models import GroupRow, IntervalRow, ScheduleRow


def default_guitar_rows() -> list[ScheduleRow]:
    """Starter rows for a new guitar schedule."""
    return [
        IntervalRow(
            duration="5:00",
            task="Warmup",
            category_name=CATEGORY_NAME,
            feature_type_name="Notes",
            interval_settings=GuitarIntervalSettings(),
        ),
        GroupRow(level=1, name="Scale Practice"),
        IntervalRow(
            duration="3:00",
            task="C Major Scale",
            category_name=CATEGORY_NAME,
            feature_type_name="Scale",
            feature_args_list=["Major", "C"],
            interval_settings=GuitarIntervalSettings(),
        ),
        IntervalRow(
            duration="3:00",
            task="G Major Scale",
            category_name=CATEGORY_NAME,
            feature_type_name="Scale",
            feature_args_list=["Major", "G"],
            interval_settings=GuitarIntervalSettings(),
        ),
    ]


def build_guitar_category() -> Category:
    return Category.from_descriptors(
        name=CATEGORY_NAME,
        display_name="Guitar",
        descriptors=GUITAR_FEATURE_DESCRIPTORS,
        settings_factory=GuitarIntervalSettings.create_default,
        settings_parser=GuitarIntervalSettings.from_json,
        settings_literal_parser=GuitarIntervalSettings.from_literal,
        default_global_settings=DEFAULT_GUITAR_SETTINGS,
        default_rows_factory=default_guitar_rows,
    )


__all__ = [
    "CATEGORY_NAME",
    "GuitarFeature",
    "GuitarIntervalSettings",
    "build_guitar_category",
    "default_guitar_rows",
]
