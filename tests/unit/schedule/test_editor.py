"""Tests for ScheduleEditor."""

from __future__ import annotations

import pytest

from practempo.core.categories.guitar.settings import GuitarIntervalSettings
from practempo.core.errors import ScheduleFormatError
from practempo.core.features.registry import FeatureRegistry
from practempo.core.schedule.editor import ScheduleEditor
from practempo.core.schedule.models import GroupRow, IntervalRow
from practempo.core.storage import MemoryScheduleStore


def _make_editor(registry: FeatureRegistry, *tasks: str) -> ScheduleEditor:
    editor = ScheduleEditor(registry)
    for task in tasks:
        index = editor.add_interval_row()
        editor.update_row(index, task=task)
    return editor


def _tasks(editor: ScheduleEditor) -> list[str]:
    return [row.task if isinstance(row, IntervalRow) else f"#{row.name}" for row in editor.rows]


# =============================================================================
# Structural edits
# =============================================================================


def test_add_interval_row_uses_config_defaults(registry: FeatureRegistry) -> None:
    editor = ScheduleEditor(registry)
    index = editor.add_interval_row()
    row = editor.get_row(index)

    assert index == 0
    assert row.duration == "3:00"
    assert row.category_name == "Guitar"
    assert isinstance(row.interval_settings, GuitarIntervalSettings)


def test_add_rows_after_index(registry: FeatureRegistry) -> None:
    editor = _make_editor(registry, "a", "c")
    index = editor.add_interval_row(after=0)
    editor.update_row(index, task="b")
    group_index = editor.add_group_row(level=2, after=2)

    assert index == 1
    assert group_index == 3
    assert _tasks(editor) == ["a", "b", "c", "#Group Level 2"]


def test_update_row_rejects_unknown_field(registry: FeatureRegistry) -> None:
    editor = _make_editor(registry, "a")
    with pytest.raises(AttributeError):
        editor.update_row(0, tempo=90)


def test_remove_rows_returns_removed_in_order(registry: FeatureRegistry) -> None:
    editor = _make_editor(registry, "a", "b", "c", "d")
    removed = editor.remove_rows([3, 1])

    assert [r.task for r in removed] == ["b", "d"]
    assert _tasks(editor) == ["a", "c"]


def test_remove_rows_out_of_range(registry: FeatureRegistry) -> None:
    editor = _make_editor(registry, "a")
    with pytest.raises(IndexError):
        editor.remove_rows([5])
    assert len(editor) == 1


def test_move_rows_before_target(registry: FeatureRegistry) -> None:
    editor = _make_editor(registry, "a", "b", "c", "d", "e")
    new_indices = editor.move_rows([3, 4], 1)

    assert _tasks(editor) == ["a", "d", "e", "b", "c"]
    assert new_indices == [1, 2]


def test_move_rows_to_end(registry: FeatureRegistry) -> None:
    editor = _make_editor(registry, "a", "b", "c")
    assert editor.move_rows([0], None) == [2]
    assert _tasks(editor) == ["b", "c", "a"]


def test_move_rows_onto_itself_keeps_order(registry: FeatureRegistry) -> None:
    """A target inside the moved set resolves to the next unmoved row."""
    editor = _make_editor(registry, "a", "b", "c", "d")
    editor.move_rows([1, 2], 2)
    assert _tasks(editor) == ["a", "b", "c", "d"]


def test_copy_and_paste_are_deep(registry: FeatureRegistry) -> None:
    editor = _make_editor(registry, "a", "b")
    editor.update_row(0, interval_settings=GuitarIntervalSettings(metronome_bpm=60))

    assert editor.copy_rows([0]) == 1
    pasted = editor.paste_rows(after=1)
    assert pasted == [2]

    editor.get_row(2).interval_settings.metronome_bpm = 120
    assert editor.get_row(0).interval_settings.metronome_bpm == 60

    # Pasting twice yields independent rows as well
    editor.paste_rows()
    assert editor.get_row(3) is not editor.get_row(2)
    assert _tasks(editor) == ["a", "b", "a", "a"]


def test_paste_with_empty_clipboard(registry: FeatureRegistry) -> None:
    editor = _make_editor(registry, "a")
    assert editor.paste_rows() == []
    assert len(editor) == 1


# =============================================================================
# Feature binding
# =============================================================================


def test_set_feature_type_resets_args(registry: FeatureRegistry) -> None:
    editor = _make_editor(registry, "a")
    editor.update_row(0, feature_type_name="Scale", feature_args_list=["Major", "C"])

    row = editor.set_feature_type(0, "Chord")
    assert row.feature_type_name == "Chord"
    assert row.feature_args_list == []
    assert editor.get_schema(0).args[0].name == "ChordNames"


def test_feature_binding_rejects_group_rows(registry: FeatureRegistry) -> None:
    editor = ScheduleEditor(registry)
    editor.add_group_row()
    with pytest.raises(TypeError):
        editor.set_feature_type(0, "Scale")


def test_unknown_feature_type_has_no_schema(registry: FeatureRegistry) -> None:
    editor = _make_editor(registry, "a")
    editor.set_feature_type(0, "Banjo Rolls")
    assert editor.get_schema(0) is None

    editor.update_row(0, feature_args_list=["x", "y"])
    decoded = editor.get_structured_args(0)
    assert decoded.extra == ["x", "y"]
    assert editor.set_structured_args(0, decoded) == ["x", "y"]


def test_structured_args_round_trip(registry: FeatureRegistry) -> None:
    editor = _make_editor(registry, "a")
    editor.update_row(
        0,
        feature_type_name="Scale",
        feature_args_list=["Major", "G"],
        interval_settings=GuitarIntervalSettings(metronome_bpm=80),
    )

    decoded = editor.get_structured_args(0)
    assert decoded["ScaleName"] == "Major"
    assert decoded["Key"] == "G"
    assert decoded.nested["Guitar Settings"] == {"metronomeBpm": 80}

    decoded.values["Key"] = "D"
    decoded.nested["Guitar Settings"]["metronomeBpm"] = 100
    assert editor.set_structured_args(0, decoded) == ["Major", "D"]
    assert editor.get_row(0).interval_settings.metronome_bpm == 100


# =============================================================================
# Grouping and documents
# =============================================================================


def test_new_schedule_uses_category_starter_rows(registry: FeatureRegistry) -> None:
    editor = ScheduleEditor(registry)
    editor.new_schedule()

    assert len(editor) == 4
    assert editor.indents() == [0, 0, 1, 1]
    assert isinstance(editor.get_row(1), GroupRow)


def test_new_schedule_for_category_without_starter_rows(registry: FeatureRegistry) -> None:
    editor = ScheduleEditor(registry)
    editor.new_schedule("Piano")
    assert len(editor) == 1
    assert editor.get_row(0).category_name == "Piano"


def test_to_document_is_a_snapshot(registry: FeatureRegistry) -> None:
    editor = _make_editor(registry, "a")
    editor.name = "Snapshot"
    document = editor.to_document()
    editor.update_row(0, task="changed")

    assert document.name == "Snapshot"
    assert document.items[0].task == "a"


def test_load_text_and_outline(registry: FeatureRegistry, sample_text: str) -> None:
    editor = ScheduleEditor(registry)
    editor.load_text(sample_text)

    outline = editor.outline()
    assert [e.indent for e in outline] == [0, 0, 1, 2, 2, 1, 2, 0, 1, 1]
    assert editor.get_row(4).interval_settings.metronome_bpm == 80


def test_load_json_failure_keeps_rows(registry: FeatureRegistry) -> None:
    editor = _make_editor(registry, "keep")
    with pytest.raises(ScheduleFormatError):
        editor.load_json("[1, 2, 3]")
    assert _tasks(editor) == ["keep"]


def test_json_round_trip_through_editor(registry: FeatureRegistry, sample_json: str) -> None:
    editor = ScheduleEditor(registry)
    editor.load_json(sample_json)
    assert editor.name == "Morning Practice"

    other = ScheduleEditor(registry)
    other.load_json(editor.to_json())
    assert other.to_document() == editor.to_document()


def test_text_round_trip_keeps_trailing_empty_arg(registry: FeatureRegistry) -> None:
    editor = _make_editor(registry, "Triads")
    editor.set_feature_type(0, "Triad Shapes")
    editor.update_row(0, feature_args_list=["C", "Major", ""])

    other = ScheduleEditor(registry)
    other.load_text(editor.to_text())
    assert other.get_row(0).feature_args_list == ["C", "Major", ""]


# =============================================================================
# Group spans
# =============================================================================


def _grouped_editor(registry: FeatureRegistry) -> ScheduleEditor:
    editor = _make_editor(registry, "warmup")
    editor.add_group_row(level=1, name="Scales")
    for task in ("major", "minor"):
        editor.update_row(editor.add_interval_row(), task=task)
    editor.add_group_row(level=1, name="Chords")
    editor.update_row(editor.add_interval_row(), task="triads")
    return editor


def test_remove_group_with_contents(registry: FeatureRegistry) -> None:
    editor = _grouped_editor(registry)
    removed = editor.remove_rows([1], with_contents=True)

    assert len(removed) == 3
    assert _tasks(editor) == ["warmup", "#Chords", "triads"]


def test_move_group_with_contents(registry: FeatureRegistry) -> None:
    editor = _grouped_editor(registry)
    new_indices = editor.move_rows([4], 0, with_contents=True)

    assert new_indices == [0, 1]
    assert _tasks(editor) == ["#Chords", "triads", "warmup", "#Scales", "major", "minor"]


def test_copy_group_with_contents(registry: FeatureRegistry) -> None:
    editor = _grouped_editor(registry)
    assert editor.copy_rows([4], with_contents=True) == 2
    assert editor.copy_rows([4]) == 1


# =============================================================================
# Restoring the stored schedule
# =============================================================================


def test_restore_loads_stored_schedule(registry: FeatureRegistry, sample_json: str) -> None:
    editor = ScheduleEditor(registry)
    assert editor.restore(MemoryScheduleStore(sample_json)) is True
    assert editor.name == "Morning Practice"


def test_restore_without_stored_schedule_starts_fresh(registry: FeatureRegistry) -> None:
    editor = ScheduleEditor(registry)
    assert editor.restore(MemoryScheduleStore()) is False
    assert len(editor) == 4


def test_restore_discards_corrupt_schedule(registry: FeatureRegistry) -> None:
    store = MemoryScheduleStore("{not json")
    editor = _make_editor(registry, "old")

    assert editor.restore(store) is False
    assert store.load() is None
    assert len(editor) == 4
    assert "old" not in _tasks(editor)
