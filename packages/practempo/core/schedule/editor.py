"""Live, editable row model of a schedule.

``ScheduleEditor`` owns the ordered rows of the schedule being edited and
implements the structural edits a UI layer drives (add, remove, move, copy
and paste), feature binding through the argument codec, and loading from
or saving to both surface formats. It holds no widgets.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from practempo.core.config.models import ScheduleConfig
from practempo.core.errors import ScheduleFormatError
from practempo.core.features.codec import DecodedArgs, decode_args, encode_args
from practempo.core.features.registry import FeatureRegistry
from practempo.core.features.schema import ConfigurationSchema
from practempo.core.features.settings import EmptyIntervalSettings
from practempo.core.schedule.grouping import (
    OutlineEntry,
    build_outline,
    compute_indents,
    group_span,
)
from practempo.core.schedule.models import (
    GroupRow,
    IntervalRow,
    ScheduleDocument,
    ScheduleRow,
    copy_row,
)
from practempo.core.serialization.json_format import generate_schedule_json, parse_schedule_json
from practempo.core.serialization.text import generate_schedule_text, parse_schedule_text
from practempo.core.storage.store import ScheduleStore

logger = logging.getLogger(__name__)


class ScheduleEditor:
    """Editable schedule state.

    Row indices refer to the current row order. Every structural edit
    leaves the rows in document order; indentation is recomputed on demand
    by ``indents()``.

    Args:
        registry: Frozen feature registry.
        config: Schedule settings (default category and interval duration).

    Example:
        >>> editor = ScheduleEditor(build_default_registry())
        >>> editor.new_schedule()
        >>> editor.indents()
        [0, 0, 1, 1]
    """

    def __init__(self, registry: FeatureRegistry, config: ScheduleConfig | None = None) -> None:
        self.registry = registry
        self.config = config or ScheduleConfig()
        self.name = ""
        self._rows: list[ScheduleRow] = []
        self._clipboard: list[ScheduleRow] = []

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def rows(self) -> tuple[ScheduleRow, ...]:
        return tuple(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def get_row(self, index: int) -> ScheduleRow:
        """Return the row at ``index``; rows are edited in place."""
        return self._rows[self._check_index(index)]

    def update_row(self, index: int, **changes: Any) -> ScheduleRow:
        """Assign fields on a row (validated by the row model).

        Raises:
            IndexError: If ``index`` is out of range.
            AttributeError: If a field does not exist on the row.
            ValueError: If a new value fails validation.
        """
        row = self.get_row(index)
        for field_name, value in changes.items():
            if field_name not in type(row).model_fields:
                raise AttributeError(f"{type(row).__name__} has no field '{field_name}'")
            setattr(row, field_name, value)
        return row

    # ------------------------------------------------------------------
    # Structural edits
    # ------------------------------------------------------------------

    def add_interval_row(self, category: str | None = None, after: int | None = None) -> int:
        """Add an empty interval row and return its index.

        The row gets the configured default duration and a default settings
        object from the category's factory.

        Args:
            category: Category of the new row; the configured default if None.
            after: Insert after this index; append when None.
        """
        category_name = category or self.config.default_category
        factory = self.registry.get_settings_factory(category_name)
        if factory is None:
            logger.warning(f"Unknown category '{category_name}'; new row has empty settings")
        row = IntervalRow(
            duration=self.config.default_interval_duration,
            category_name=category_name,
            interval_settings=factory() if factory else EmptyIntervalSettings(),
        )
        return self._insert(row, after)

    def add_group_row(self, level: int = 1, name: str = "", after: int | None = None) -> int:
        """Add a group row and return its index."""
        row = GroupRow(level=level, name=name or GroupRow.default_name(level))
        return self._insert(row, after)

    def insert_rows(self, rows: Iterable[ScheduleRow], after: int | None = None) -> list[int]:
        """Insert rows in order after ``after`` (append when None).

        Returns:
            Indices of the inserted rows.
        """
        position = len(self._rows) if after is None else self._check_index(after) + 1
        inserted: list[int] = []
        for row in rows:
            self._rows.insert(position, row)
            inserted.append(position)
            position += 1
        return inserted

    def remove_rows(
        self, indices: Iterable[int], with_contents: bool = False
    ) -> list[ScheduleRow]:
        """Remove rows and return them in document order.

        With ``with_contents``, a group row takes the rows it spans with it.
        """
        targets = self._select(indices, with_contents)
        removed = [self._rows[i] for i in targets]
        for i in reversed(targets):
            del self._rows[i]
        logger.debug(f"Removed {len(removed)} rows")
        return removed

    def move_rows(
        self, indices: Iterable[int], target: int | None, with_contents: bool = False
    ) -> list[int]:
        """Move rows before the row at ``target`` (to the end when None).

        Moved rows keep their relative order. When ``target`` is one of the
        moved rows, the rows land before the next row that is not moved.
        With ``with_contents``, a group row is dragged along with its span.

        Returns:
            New indices of the moved rows.
        """
        moving = self._select(indices, with_contents)
        if not moving:
            return []

        anchor: int | None = None
        if target is not None:
            candidate = self._check_index(target) if target < len(self._rows) else len(self._rows)
            while candidate in moving:
                candidate += 1
            anchor = candidate if candidate < len(self._rows) else None

        moved_rows = [self._rows[i] for i in moving]
        anchor_row = self._rows[anchor] if anchor is not None else None
        remaining = [row for i, row in enumerate(self._rows) if i not in moving]

        position = len(remaining)
        if anchor_row is not None:
            position = next(i for i, row in enumerate(remaining) if row is anchor_row)

        self._rows = remaining[:position] + moved_rows + remaining[position:]
        return list(range(position, position + len(moved_rows)))

    def copy_rows(self, indices: Iterable[int], with_contents: bool = False) -> int:
        """Copy rows (deep) to the internal clipboard; return how many."""
        targets = self._select(indices, with_contents)
        self._clipboard = [copy_row(self._rows[i]) for i in targets]
        return len(self._clipboard)

    def paste_rows(self, after: int | None = None) -> list[int]:
        """Insert fresh copies of the clipboard rows after ``after``."""
        if not self._clipboard:
            logger.info("Nothing in clipboard to paste.")
            return []
        return self.insert_rows((copy_row(r) for r in self._clipboard), after)

    # ------------------------------------------------------------------
    # Feature binding
    # ------------------------------------------------------------------

    def set_feature_type(self, index: int, type_name: str) -> IntervalRow:
        """Bind a feature type to an interval row and reset its args."""
        row = self._interval_row(index)
        descriptor = self.registry.get_feature_type_descriptor(row.category_name, type_name)
        if type_name and descriptor is None:
            logger.warning(
                f"Feature type '{type_name}' is not registered in category '{row.category_name}'"
            )
        row.feature_type_name = type_name
        row.feature_args_list = []
        return row

    def get_schema(self, index: int) -> ConfigurationSchema | None:
        row = self._interval_row(index)
        descriptor = self.registry.get_feature_type_descriptor(
            row.category_name, row.feature_type_name
        )
        return descriptor.schema if descriptor else None

    def get_structured_args(self, index: int) -> DecodedArgs:
        """Decode the row's positional args against its feature schema."""
        row = self._interval_row(index)
        return decode_args(self.get_schema(index), row.feature_args_list, row.interval_settings)

    def set_structured_args(self, index: int, decoded: DecodedArgs) -> list[str]:
        """Encode structured values into the row's args and settings."""
        row = self._interval_row(index)
        row.feature_args_list = encode_args(self.get_schema(index), decoded, row.interval_settings)
        return list(row.feature_args_list)

    # ------------------------------------------------------------------
    # Grouping
    # ------------------------------------------------------------------

    def indents(self) -> list[int]:
        return compute_indents(self._rows)

    def outline(self) -> list[OutlineEntry]:
        return build_outline(self._rows)

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def to_document(self) -> ScheduleDocument:
        """Snapshot the editor state as a document (rows are deep copies)."""
        return ScheduleDocument(name=self.name, items=[copy_row(r) for r in self._rows])

    def load_document(self, document: ScheduleDocument) -> None:
        """Replace every row with copies of the document's rows."""
        self.name = document.name
        self._rows = [copy_row(r) for r in document.items]
        logger.debug(f"Loaded document '{self.name}' with {len(self._rows)} rows")

    def new_schedule(self, category: str | None = None) -> None:
        """Reset to the category's starter rows (one empty interval if none)."""
        category_name = category or self.config.default_category
        found = self.registry.get_category(category_name)
        self.name = ""
        self._rows = []
        if found is not None and found.default_rows_factory is not None:
            self._rows = list(found.default_rows_factory())
        else:
            self.add_interval_row(category_name)

    def load_text(self, text: str) -> None:
        self.load_document(
            parse_schedule_text(text, self.registry, self.config.default_category)
        )

    def load_json(self, json_text: str) -> None:
        """Load a JSON document.

        Raises:
            ScheduleFormatError: If the document is structurally invalid; the
                current rows are left untouched.
        """
        self.load_document(
            parse_schedule_json(json_text, self.registry, self.config.default_category)
        )

    def restore(self, store: ScheduleStore) -> bool:
        """Load the last committed schedule from ``store``.

        Falls back to ``new_schedule()`` when nothing is stored. Stored JSON
        that cannot be parsed is cleared from the store before falling back.

        Returns:
            True when the stored schedule was loaded.
        """
        stored = store.load()
        if stored is None:
            self.new_schedule()
            return False
        try:
            self.load_json(stored)
        except ScheduleFormatError as e:
            logger.error(f"Discarding unreadable stored schedule: {e}")
            store.clear()
            self.new_schedule()
            return False
        logger.info(f"Restored stored schedule with {len(self._rows)} rows")
        return True

    def to_text(self) -> str:
        return generate_schedule_text(self.to_document())

    def to_json(self) -> str:
        return generate_schedule_json(self.to_document())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _select(self, indices: Iterable[int], with_contents: bool) -> list[int]:
        selected = {self._check_index(i) for i in indices}
        if with_contents:
            for i in list(selected):
                selected.update(group_span(self._rows, i))
        return sorted(selected)

    def _insert(self, row: ScheduleRow, after: int | None) -> int:
        return self.insert_rows([row], after)[0]

    def _interval_row(self, index: int) -> IntervalRow:
        row = self.get_row(index)
        if not isinstance(row, IntervalRow):
            raise TypeError(f"Row {index} is a group row, not an interval row")
        return row

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._rows):
            raise IndexError(f"Row index {index} out of range (0..{len(self._rows) - 1})")
        return index


__all__ = ["ScheduleEditor"]
