"""Per-interval settings objects.

Each category supplies one concrete ``IntervalSettings`` subclass holding
configuration that is not part of the positional argument list (for the
guitar category, the metronome tempo). Nested-block schema arguments address
fields of this object by name.
"""

from __future__ import annotations

import logging
from typing import Any, Self

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class IntervalSettings(BaseModel):
    """Base class for per-interval, per-category settings.

    Subclasses declare their fields with defaults; a settings object is
    "default" when every field equals its declared default, in which case it
    is omitted from JSON output and from the text DSL.
    """

    model_config = ConfigDict(validate_assignment=True, populate_by_name=True)

    @classmethod
    def create_default(cls) -> Self:
        return cls()

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> Self:
        """Build an instance from its JSON shape; ``None`` yields defaults."""
        settings = cls()
        for key, value in (data or {}).items():
            name = settings._resolve_field(key)
            if name is None:
                logger.warning(f"Ignoring unknown {cls.__name__} field '{key}'")
                continue
            try:
                setattr(settings, name, value)
            except ValueError as e:
                logger.warning(f"Invalid {cls.__name__} value {key}={value!r}, using default: {e}")
        return settings

    def to_json(self) -> dict[str, Any] | None:
        """Serialize non-default fields; None when everything is default."""
        data = self.model_dump(by_alias=True, exclude_defaults=True)
        return data or None

    def is_default(self) -> bool:
        return not self.model_dump(exclude_defaults=True)

    def to_literal(self) -> str:
        """Text DSL token for these settings; empty string when default."""
        return ""

    def get_value(self, name: str) -> Any:
        """Read a field by attribute name or JSON alias; None when unknown."""
        resolved = self._resolve_field(name)
        return getattr(self, resolved) if resolved else None

    def set_value(self, name: str, value: Any) -> None:
        """Assign a field by attribute name or JSON alias.

        Raises:
            KeyError: If the field does not exist.
            ValueError: If validation of the new value fails.
        """
        resolved = self._resolve_field(name)
        if resolved is None:
            raise KeyError(f"{type(self).__name__} has no field '{name}'")
        setattr(self, resolved, value)

    def copy_settings(self) -> Self:
        return self.model_copy(deep=True)

    def _resolve_field(self, name: str) -> str | None:
        fields = type(self).model_fields
        if name in fields:
            return name
        for field_name, info in fields.items():
            if info.alias == name:
                return field_name
        return None


class EmptyIntervalSettings(IntervalSettings):
    """Settings for categories without per-interval configuration."""

    pass
