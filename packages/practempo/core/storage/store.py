"""Persistence of the last committed schedule.

The persisted state is a single JSON blob: the schedule most recently built.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class ScheduleStore(Protocol):
    """Key-value style store for the last committed schedule JSON."""

    def load(self) -> str | None:
        """Return the stored JSON text, or None when nothing was saved."""
        ...

    def save(self, json_text: str) -> None:
        """Replace the stored JSON text.

        Implementations must be atomic: readers never observe a partial write.
        """
        ...

    def clear(self) -> None:
        """Forget the stored schedule; a no-op when nothing is stored."""
        ...


class FileScheduleStore:
    """Store backed by a single file.

    Writes go to a temp file in the target directory, which then atomically
    replaces the target.

    Args:
        path: File holding the schedule JSON.
        encoding: Text encoding.
    """

    def __init__(self, path: Path | str, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding

    def load(self) -> str | None:
        if not self.path.is_file():
            logger.debug(f"No stored schedule at {self.path}")
            return None
        return self.path.read_text(encoding=self.encoding)

    def save(self, json_text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding=self.encoding) as f:
                f.write(json_text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.info(f"Saved schedule to {self.path} ({len(json_text)} chars)")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class MemoryScheduleStore:
    """In-memory store, used in tests and by embedders without a filesystem."""

    def __init__(self, initial: str | None = None) -> None:
        self._value = initial

    def load(self) -> str | None:
        return self._value

    def save(self, json_text: str) -> None:
        self._value = json_text

    def clear(self) -> None:
        self._value = None


__all__ = ["FileScheduleStore", "MemoryScheduleStore", "ScheduleStore"]
