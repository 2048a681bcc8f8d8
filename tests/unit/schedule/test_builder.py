"""Tests for ScheduleBuilder."""

from __future__ import annotations

import logging

import pytest

from practempo.core.categories import register_builtin_categories
from practempo.core.categories.guitar.features import GuitarFeature
from practempo.core.categories.guitar.settings import GuitarIntervalSettings
from practempo.core.config.models import ScheduleConfig
from practempo.core.errors import ScheduleBuildError
from practempo.core.features.descriptor import FeatureTypeDescriptor
from practempo.core.features.registry import Category, FeatureRegistry
from practempo.core.schedule.builder import ScheduleBuilder
from practempo.core.schedule.models import GroupRow, IntervalRow, ScheduleDocument


def _interval(duration: str, task: str = "", feature: str = "", args=None, **kwargs) -> IntervalRow:
    return IntervalRow(
        duration=duration,
        task=task,
        category_name="Guitar",
        feature_type_name=feature,
        feature_args_list=list(args or []),
        **kwargs,
    )


def test_build_skips_groups_and_creates_features(registry: FeatureRegistry) -> None:
    document = ScheduleDocument(
        name="Daily",
        items=[
            _interval("5:00", "Warmup", "Notes"),
            GroupRow(level=1, name="Scales"),
            _interval("3:00", "", "Scale", ["Major", "C"]),
            _interval("0:30", "Rest"),
        ],
    )

    schedule = ScheduleBuilder(registry).build(document)

    assert schedule.name == "Daily"
    assert len(schedule) == 3
    assert [i.label for i in schedule] == ["Warmup", "Scale", "Rest"]
    assert [i.duration_seconds for i in schedule] == [300, 180, 30]
    assert isinstance(schedule.intervals[1].feature, GuitarFeature)
    assert schedule.intervals[2].feature is None
    assert schedule.total_duration_seconds == 510
    assert schedule.total_duration == "8:30"


def test_settings_resolved_through_category_parser(registry: FeatureRegistry) -> None:
    document = ScheduleDocument(
        items=[
            _interval(
                "1:00",
                feature="Metronome",
                interval_settings=GuitarIntervalSettings(metronome_bpm=100),
            )
        ]
    )
    interval = ScheduleBuilder(registry).build(document).intervals[0]

    assert isinstance(interval.settings, GuitarIntervalSettings)
    assert interval.settings.metronome_bpm == 100
    assert interval.feature.metronome_bpm == 100


def test_warmup_from_config(registry: FeatureRegistry) -> None:
    config = ScheduleConfig(warmup_period_seconds=5)
    schedule = ScheduleBuilder(registry, config).build(
        ScheduleDocument(items=[_interval("1:00", "A")])
    )
    assert schedule.intervals[0].warmup_seconds == 5


def test_total_duration_ceiling(registry: FeatureRegistry) -> None:
    """Exceeding the ceiling fails the whole build; no partial schedule."""
    document = ScheduleDocument(
        items=[
            _interval("90:00", "First"),
            _interval("90:00", "Second"),
            _interval("0:01", "Third"),
        ]
    )

    with pytest.raises(ScheduleBuildError) as exc_info:
        ScheduleBuilder(registry).build(document)

    err = exc_info.value
    assert err.index == 3
    assert err.label == "Third"
    assert "exceeds maximum limit" in str(err)
    assert str(err).startswith("Error processing interval 3 (Third)")


def test_exactly_at_ceiling_is_allowed(registry: FeatureRegistry) -> None:
    config = ScheduleConfig(max_total_duration_seconds=120)
    schedule = ScheduleBuilder(registry, config).build(
        ScheduleDocument(items=[_interval("1:00", "A"), _interval("1:00", "B")])
    )
    assert schedule.total_duration_seconds == 120


@pytest.mark.parametrize("duration", ["abc", "1:75", "90", "1:2:3", "-1:00", ""])
def test_bad_duration_fails(registry: FeatureRegistry, duration: str) -> None:
    document = ScheduleDocument(items=[_interval("1:00", "Ok"), _interval(duration, "Bad")])
    with pytest.raises(ScheduleBuildError) as exc_info:
        ScheduleBuilder(registry).build(document)
    assert exc_info.value.index == 2
    assert exc_info.value.label == "Bad"


def test_index_counts_group_rows(registry: FeatureRegistry) -> None:
    document = ScheduleDocument(items=[GroupRow(level=1), _interval("x", "Bad")])
    with pytest.raises(ScheduleBuildError) as exc_info:
        ScheduleBuilder(registry).build(document)
    assert exc_info.value.index == 2


def test_unknown_feature_type_fails(registry: FeatureRegistry) -> None:
    document = ScheduleDocument(items=[_interval("1:00", feature="Banjo Rolls")])
    with pytest.raises(ScheduleBuildError, match='Unknown feature type: "Banjo Rolls"') as exc_info:
        ScheduleBuilder(registry).build(document)
    # Label falls back to the feature type
    assert exc_info.value.label == "Banjo Rolls"


def test_factory_error_wrapped(registry: FeatureRegistry) -> None:
    document = ScheduleDocument(items=[_interval("1:00", "Scale", "Scale", ["Major", "H"])])
    with pytest.raises(ScheduleBuildError, match="Unknown key") as exc_info:
        ScheduleBuilder(registry).build(document)
    assert exc_info.value.__cause__ is not None


def test_invalid_args_logged(registry: FeatureRegistry, caplog: pytest.LogCaptureFixture) -> None:
    document = ScheduleDocument(
        items=[_interval("1:00", "Triads", "Triad Shapes", ["C", "Major", "3rd"])]
    )
    with caplog.at_level(logging.WARNING), pytest.raises(ScheduleBuildError):
        ScheduleBuilder(registry).build(document)
    assert "'Inversion' has unknown value '3rd'" in caplog.text
    assert any(getattr(r, "row_index", None) == 1 for r in caplog.records)


def test_global_settings_override_defaults(registry: FeatureRegistry) -> None:
    captured = {}

    def _capture(args, context):
        captured.update(context.global_settings)
        return GuitarFeature(type_name="Capture", config=args)

    guitar = registry.get_category("Guitar")
    custom = FeatureRegistry()
    register_builtin_categories(custom)
    custom.register(
        Category(
            name=guitar.name,
            display_name=guitar.display_name,
            settings_factory=guitar.settings_factory,
            settings_parser=guitar.settings_parser,
            default_global_settings=guitar.default_global_settings,
            feature_types={
                "Capture": FeatureTypeDescriptor("Guitar", "Capture", "Capture", _capture)
            },
        )
    )

    ScheduleBuilder(custom).build(
        ScheduleDocument(items=[_interval("1:00", feature="Capture")]),
        global_settings={"Guitar": {"handedness": "left"}},
    )
    assert captured["handedness"] == "left"
    assert captured["tuning"] == "Standard"
