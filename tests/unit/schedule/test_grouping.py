"""Tests for group-level indentation."""

from __future__ import annotations

from practempo.core.schedule.grouping import (
    build_outline,
    compute_indents,
    group_span,
)
from practempo.core.schedule.models import GroupRow, IntervalRow


def _groups(*levels: int) -> list[GroupRow]:
    return [GroupRow(level=level, name=f"L{level}") for level in levels]


def test_nested_groups_close_at_same_or_lower_level() -> None:
    """[1, 2, 3, 2, 1] -> [0, 1, 2, 1, 0]."""
    assert compute_indents(_groups(1, 2, 3, 2, 1)) == [0, 1, 2, 1, 0]


def test_level_jump_is_accepted_without_gap_filling() -> None:
    """A level-3 group directly under level 1 is indented once."""
    assert compute_indents(_groups(1, 3)) == [0, 1]


def test_intervals_take_the_innermost_open_level() -> None:
    rows = [
        IntervalRow(task="before"),
        GroupRow(level=1),
        IntervalRow(task="in 1"),
        GroupRow(level=3),
        IntervalRow(task="in 3"),
        GroupRow(level=1),
        IntervalRow(task="in second 1"),
    ]
    assert compute_indents(rows) == [0, 0, 1, 1, 3, 0, 1]


def test_sibling_groups_share_indent() -> None:
    assert compute_indents(_groups(2, 2, 2)) == [0, 0, 0]


def test_empty_rows() -> None:
    assert compute_indents([]) == []
    assert build_outline([]) == []


def test_build_outline_pairs_rows_with_indents() -> None:
    rows = [GroupRow(level=1, name="A"), IntervalRow(task="x")]
    outline = build_outline(rows)
    assert [(e.index, e.indent) for e in outline] == [(0, 0), (1, 1)]
    assert outline[1].row is rows[1]


def test_group_span_runs_to_next_group_at_same_or_lower_level() -> None:
    rows = [
        GroupRow(level=1),
        IntervalRow(),
        GroupRow(level=2),
        IntervalRow(),
        GroupRow(level=1),
        IntervalRow(),
    ]
    assert group_span(rows, 0) == range(0, 4)
    assert group_span(rows, 2) == range(2, 4)
    assert group_span(rows, 4) == range(4, 6)
    assert group_span(rows, 1) == range(1, 2)
