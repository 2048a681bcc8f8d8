"""Indentation of schedule rows from group levels.

Group rows carry only a level; which groups enclose a given row is recovered
with a single left-to-right pass over a stack of open group levels.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from practempo.core.schedule.models import GroupRow, IntervalRow


def compute_indents(rows: Iterable[GroupRow | IntervalRow]) -> list[int]:
    """Compute the indent of every row from the stack of open group levels.

    The stack starts as ``[0]``. A group at level L first pops every open
    level >= L (closing a sibling at the same level too), takes the new top
    as its indent, then pushes L. Interval rows take the current top without
    touching the stack. Level jumps are accepted without gap-filling: a
    level-3 group directly under a level-1 group gets indent 1, and rows
    inside it get indent 3.

    Args:
        rows: Rows in document order.

    Returns:
        One indent per row.

    Example:
        >>> compute_indents([GroupRow(level=1), GroupRow(level=2), GroupRow(level=1)])
        [0, 1, 0]
    """
    stack: list[int] = [0]
    indents: list[int] = []

    for row in rows:
        if isinstance(row, GroupRow):
            while len(stack) > 1 and stack[-1] >= row.level:
                stack.pop()
            indents.append(stack[-1])
            stack.append(row.level)
        else:
            indents.append(stack[-1])

    return indents


@dataclass(frozen=True)
class OutlineEntry:
    """One row of an indented outline."""

    index: int
    indent: int
    row: GroupRow | IntervalRow


def build_outline(rows: Sequence[GroupRow | IntervalRow]) -> list[OutlineEntry]:
    """Pair every row with its index and indent."""
    return [
        OutlineEntry(index=i, indent=indent, row=row)
        for i, (row, indent) in enumerate(zip(rows, compute_indents(rows), strict=True))
    ]


def group_span(rows: Sequence[GroupRow | IntervalRow], index: int) -> range:
    """Return the row range covered by the group at ``index``.

    The span runs until the next group whose level is <= this group's level.
    An interval row spans only itself.
    """
    row = rows[index]
    if isinstance(row, IntervalRow):
        return range(index, index + 1)
    end = index + 1
    while end < len(rows):
        other = rows[end]
        if isinstance(other, GroupRow) and other.level <= row.level:
            break
        end += 1
    return range(index, end)
