"""Tests for the built-in guitar feature types."""

from __future__ import annotations

import pytest

from practempo.core.categories.guitar import default_guitar_rows, theory
from practempo.core.categories.guitar.features import GuitarFeature
from practempo.core.categories.guitar.settings import GuitarIntervalSettings
from practempo.core.errors import FeatureConfigError
from practempo.core.features.descriptor import Feature, FeatureContext
from practempo.core.features.registry import FeatureRegistry
from practempo.core.schedule.models import GroupRow, IntervalRow


def _create(registry: FeatureRegistry, type_name: str, args: list[str], bpm: int = 0):
    descriptor = registry.get_feature_type_descriptor("Guitar", type_name)
    context = FeatureContext(interval_settings=GuitarIntervalSettings(metronome_bpm=bpm))
    return descriptor.create_feature(args, context)


def test_scale_feature_resolves_notes(registry: FeatureRegistry) -> None:
    feature = _create(registry, "Scale", ["Major", "G"])

    assert isinstance(feature, GuitarFeature)
    assert isinstance(feature, Feature)
    assert feature.notes == ("G", "A", "B", "C", "D", "E", "F#")
    assert feature.header_text == "G Major"
    assert feature.config == ("Major", "G")


def test_scale_feature_accepts_alias_and_flat_key(registry: FeatureRegistry) -> None:
    feature = _create(registry, "Scale", ["Minor Pentatonic", "Bb"])
    assert feature.notes[0] == "A#"
    assert feature.header_text == "A# Minor Pentatonic"


@pytest.mark.parametrize(
    ("args", "message"),
    [
        (["Major"], "Expected at least"),
        (["Bogus", "C"], "Unknown scale"),
        (["Major", "H"], "Unknown key"),
    ],
)
def test_scale_feature_rejects_bad_args(registry: FeatureRegistry, args, message: str) -> None:
    with pytest.raises(FeatureConfigError, match=message):
        _create(registry, "Scale", args)


def test_notes_feature_without_root_shows_all_notes(registry: FeatureRegistry) -> None:
    feature = _create(registry, "Notes", [])
    assert len(feature.notes) == 12
    assert _create(registry, "Notes", ["Eb"]).notes == ("D#",)


def test_chord_feature_collects_chords(registry: FeatureRegistry) -> None:
    feature = _create(registry, "Chord", ["C_MAJOR", "A_MINOR"])
    assert feature.chords == ("C_MAJOR", "A_MINOR")
    assert feature.notes == ("C", "E", "G", "A")

    with pytest.raises(FeatureConfigError, match="Unknown chord"):
        _create(registry, "Chord", ["X_MAJOR"])
    with pytest.raises(FeatureConfigError):
        _create(registry, "Chord", [])


def test_progression_feature_maps_numerals(registry: FeatureRegistry) -> None:
    feature = _create(registry, "Chord Progression", ["C", "I", "V", "vi", "IV"])
    assert feature.chords == ("C", "G", "Am", "F")
    assert feature.header_text == "I-V-vi-IV Progression in C"


def test_progression_feature_accepts_legacy_hyphen_token(registry: FeatureRegistry) -> None:
    feature = _create(registry, "Chord Progression", ["G", "ii-V-I"])
    assert feature.chords == ("Am", "D", "G")


def test_progression_feature_rejects_unknown_numeral(registry: FeatureRegistry) -> None:
    with pytest.raises(FeatureConfigError, match="Unknown numeral"):
        _create(registry, "Chord Progression", ["C", "I", "bVII"])


def test_triad_feature_inversions(registry: FeatureRegistry) -> None:
    assert _create(registry, "Triad Shapes", ["C", "Major"]).notes == ("C", "E", "G")
    assert _create(registry, "Triad Shapes", ["C", "Major", "1st"]).notes == ("E", "G", "C")
    assert _create(registry, "Triad Shapes", ["A", "Minor", "2nd"]).notes == ("E", "A", "C")


def test_caged_feature(registry: FeatureRegistry) -> None:
    feature = _create(registry, "CAGED", ["A", "Minor Pentatonic"])
    assert feature.notes == ("A", "C", "D", "E", "G")
    assert feature.options["labelDisplay"] == "Interval"

    with pytest.raises(FeatureConfigError, match="scale type"):
        _create(registry, "CAGED", ["A", "Dorian"])


def test_metronome_feature_uses_interval_bpm(registry: FeatureRegistry) -> None:
    feature = _create(registry, "Metronome", [], bpm=90)
    assert feature.metronome_bpm == 90
    assert feature.header_text == "Metronome: 90 BPM"


def test_every_schema_ends_with_guitar_settings(registry: FeatureRegistry) -> None:
    for descriptor in registry.get_available_feature_types("Guitar"):
        last = descriptor.schema.args[-1]
        assert last.name == "Guitar Settings"
        assert last.is_nested_block
        assert [n.name for n in last.nested_schema] == ["metronomeBpm"]


def test_default_rows() -> None:
    rows = default_guitar_rows()
    assert [type(r) for r in rows] == [IntervalRow, GroupRow, IntervalRow, IntervalRow]
    assert rows[0].task == "Warmup"
    assert rows[2].feature_args_list == ["Major", "C"]
    # Rows do not share settings objects
    assert rows[2].interval_settings is not rows[3].interval_settings


def test_theory_chord_name_in_key() -> None:
    assert theory.chord_name_in_key("D", "vii°") == "C#dim"
    assert theory.get_key_index("Gb") == theory.get_key_index("F#")
    assert theory.get_key_index("H") == -1


def test_caged_scale_type_without_scale_data(
    registry: FeatureRegistry, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(theory, "CAGED_SCALE_TYPES", (*theory.CAGED_SCALE_TYPES, "Bogus"))
    with pytest.raises(FeatureConfigError, match="scale type"):
        _create(registry, "CAGED", ["A", "Bogus"])
