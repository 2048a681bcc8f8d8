"""Feature type descriptors and the feature instance protocol."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from practempo.core.features.schema import ConfigurationSchema
from practempo.core.features.settings import IntervalSettings


@runtime_checkable
class Feature(Protocol):
    """A configured exercise bound to one interval.

    Rendering and lifecycle (prepare/start/stop) belong to the runtime that
    executes a built schedule; the data model only needs identity and the raw
    positional config the feature was created from.
    """

    category: str
    type_name: str
    config: tuple[str, ...]

    @property
    def header_text(self) -> str:
        """Title shown above the feature while its interval runs."""
        ...


@dataclass(frozen=True)
class FeatureContext:
    """Runtime collaborators handed to feature factories.

    Attributes:
        interval_settings: Settings of the interval being built.
        global_settings: Category-wide settings (e.g. guitar tuning).
        extras: Opaque runtime handles (audio controller, canvas size, ...).
    """

    interval_settings: IntervalSettings
    global_settings: Mapping[str, Any] = field(default_factory=dict)
    extras: Mapping[str, Any] = field(default_factory=dict)


FeatureFactory = Callable[[tuple[str, ...], FeatureContext], Feature]


@dataclass(frozen=True)
class FeatureTypeDescriptor:
    """Immutable description of one selectable feature type.

    Attributes:
        category: Owning category name.
        type_name: Name used in schedules (``featureTypeName``).
        display_name: Label for selectors.
        description: Help text.
        schema: Argument schema, or None when the type takes opaque args.
        factory: ``(args, context) -> Feature``.
    """

    category: str
    type_name: str
    display_name: str
    factory: FeatureFactory
    schema: ConfigurationSchema | None = None
    description: str = ""

    def create_feature(self, args: list[str] | tuple[str, ...], context: FeatureContext) -> Feature:
        """Invoke the factory with an immutable copy of the positional args."""
        return self.factory(tuple(args), context)
