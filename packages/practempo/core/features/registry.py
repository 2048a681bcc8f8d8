"""Feature category registry.

Maps category names to ``Category`` entries, and through them feature type
names to ``FeatureTypeDescriptor``. Absence is a normal runtime state (a
schedule may reference a feature type that was since removed), so every
lookup returns None or an empty list instead of raising.

The registry is populated once during bootstrap and then frozen; the frozen
instance is passed explicitly to the codecs, the editor and the builder.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from practempo.core.errors import RegistryFrozenError
from practempo.core.features.descriptor import FeatureTypeDescriptor
from practempo.core.features.settings import IntervalSettings

if TYPE_CHECKING:
    from practempo.core.schedule.models import ScheduleRow

logger = logging.getLogger(__name__)

SettingsFactory = Callable[[], IntervalSettings]
SettingsParser = Callable[[dict[str, Any] | None], IntervalSettings]
SettingsLiteralParser = Callable[[str], IntervalSettings | None]


@dataclass(frozen=True)
class Category:
    """A domain of related feature types (e.g. one instrument).

    Attributes:
        name: Registry key, stored on interval rows as ``categoryName``.
        display_name: Label for selectors.
        feature_types: Descriptors keyed by type name.
        settings_factory: Creates a default IntervalSettings instance.
        settings_parser: Restores IntervalSettings from its JSON shape.
        settings_literal_parser: Parses a text DSL settings token
            (e.g. ``@BPM:120``); None when the category has no literal form.
        default_global_settings: Category-wide defaults (tuning, ...).
        default_rows_factory: Starter rows for a new schedule.
    """

    name: str
    display_name: str
    settings_factory: SettingsFactory
    settings_parser: SettingsParser
    feature_types: Mapping[str, FeatureTypeDescriptor] = field(default_factory=dict)
    settings_literal_parser: SettingsLiteralParser | None = None
    default_global_settings: Mapping[str, Any] = field(default_factory=dict)
    default_rows_factory: Callable[[], list[ScheduleRow]] | None = None

    def __post_init__(self) -> None:
        for type_name, descriptor in self.feature_types.items():
            if descriptor.category != self.name:
                raise ValueError(
                    f"Feature type '{type_name}' belongs to category "
                    f"'{descriptor.category}', not '{self.name}'"
                )
            if descriptor.type_name != type_name:
                raise ValueError(
                    f"Feature type registered as '{type_name}' is named '{descriptor.type_name}'"
                )
        object.__setattr__(self, "feature_types", MappingProxyType(dict(self.feature_types)))
        object.__setattr__(
            self, "default_global_settings", MappingProxyType(dict(self.default_global_settings))
        )

    @classmethod
    def from_descriptors(
        cls,
        name: str,
        display_name: str,
        descriptors: Iterable[FeatureTypeDescriptor],
        **kwargs: Any,
    ) -> Category:
        """Build a category keyed by each descriptor's type name."""
        return cls(
            name=name,
            display_name=display_name,
            feature_types={d.type_name: d for d in descriptors},
            **kwargs,
        )


class FeatureRegistry:
    """Lookup from category and feature type names to their descriptors.

    Re-registering a category logs a warning and overwrites the previous
    entry (last writer wins, never merges). After ``freeze()`` any further
    registration raises ``RegistryFrozenError``.

    Example:
        >>> registry = FeatureRegistry()
        >>> registry.register(guitar_category)
        >>> registry.freeze()
        >>> registry.get_feature_type_descriptor("Guitar", "Scale")
    """

    def __init__(self) -> None:
        self._categories: dict[str, Category] = {}
        self._frozen = False

    def register(self, category: Category) -> None:
        """Register a category.

        Args:
            category: Category to register.

        Raises:
            RegistryFrozenError: If the registry has been frozen.
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register category '{category.name}': registry is frozen"
            )
        if category.name in self._categories:
            logger.warning(f"Category '{category.name}' is already registered. Overwriting.")
        self._categories[category.name] = category
        logger.debug(
            f"Registered feature category '{category.name}' "
            f"with {len(category.feature_types)} feature types"
        )

    def freeze(self) -> FeatureRegistry:
        """Disallow further registration and return self."""
        self._frozen = True
        return self

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def get_category(self, name: str) -> Category | None:
        return self._categories.get(name)

    def get_available_categories(self) -> list[Category]:
        return list(self._categories.values())

    def get_feature_type_descriptor(
        self, category_name: str, type_name: str
    ) -> FeatureTypeDescriptor | None:
        category = self._categories.get(category_name)
        return category.feature_types.get(type_name) if category else None

    def get_available_feature_types(self, category_name: str) -> list[FeatureTypeDescriptor]:
        category = self._categories.get(category_name)
        return list(category.feature_types.values()) if category else []

    def get_settings_factory(self, category_name: str) -> SettingsFactory | None:
        category = self._categories.get(category_name)
        return category.settings_factory if category else None

    def get_settings_parser(self, category_name: str) -> SettingsParser | None:
        category = self._categories.get(category_name)
        return category.settings_parser if category else None

    def get_settings_literal_parser(self, category_name: str) -> SettingsLiteralParser | None:
        category = self._categories.get(category_name)
        return category.settings_literal_parser if category else None

    def get_default_global_settings(self, category_name: str) -> dict[str, Any] | None:
        """Return a copy of a category's global defaults, or None."""
        category = self._categories.get(category_name)
        return dict(category.default_global_settings) if category else None

    def get_all_default_global_settings(self) -> dict[str, dict[str, Any]]:
        return {name: dict(c.default_global_settings) for name, c in self._categories.items()}

    def __contains__(self, category_name: str) -> bool:
        return category_name in self._categories

    def __len__(self) -> int:
        return len(self._categories)


__all__ = [
    "Category",
    "FeatureRegistry",
    "SettingsFactory",
    "SettingsLiteralParser",
    "SettingsParser",
]
