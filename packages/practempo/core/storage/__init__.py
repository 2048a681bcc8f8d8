"""Persistence of the last committed schedule."""

from practempo.core.storage.store import FileScheduleStore, MemoryScheduleStore, ScheduleStore

__all__ = ["FileScheduleStore", "MemoryScheduleStore", "ScheduleStore"]
