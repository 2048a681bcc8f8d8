"""Declarative configuration schemas for feature types.

A schema is an ordered list of ``ArgSpec``. The order defines how the flat
positional argument list of an interval is read (see ``features.codec``).
Schemas are validated on construction, so an ambiguous schema fails when its
feature type is defined, long before any row is decoded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from practempo.core.errors import SchemaDefinitionError


class ArgType(str, Enum):
    """Base type of a schema argument."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"
    ELLIPSIS = "ellipsis"  # nested block stored in IntervalSettings


class UIComponent(str, Enum):
    """Rendering hint for the editor; never changes the encoding contract."""

    INPUT = "input"
    TOGGLE_BUTTON_SELECTOR = "toggle_button_selector"
    ELLIPSIS = "ellipsis"


@dataclass(frozen=True)
class ArgSpec:
    """One named argument of a feature type.

    Attributes:
        name: Argument name, unique within its schema.
        type: Base type.
        required: Whether a value must be supplied.
        enum_values: Closed label set for ``ArgType.ENUM``.
        description: Help text.
        example: Example value.
        is_variadic: Consumes all remaining positional values.
        nested_schema: Fields of a nested block (``ArgType.ELLIPSIS`` only).
        ui_component: Editor hint.
        button_labels: Label set for ``UIComponent.TOGGLE_BUTTON_SELECTOR``.
    """

    name: str
    type: ArgType = ArgType.STRING
    required: bool = False
    enum_values: tuple[str, ...] | None = None
    description: str = ""
    example: str | None = None
    is_variadic: bool = False
    nested_schema: tuple[ArgSpec, ...] | None = None
    ui_component: UIComponent = UIComponent.INPUT
    button_labels: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Accept lists from callers but store tuples
        if self.enum_values is not None:
            object.__setattr__(self, "enum_values", tuple(self.enum_values))
        if self.nested_schema is not None:
            object.__setattr__(self, "nested_schema", tuple(self.nested_schema))
        object.__setattr__(self, "button_labels", tuple(self.button_labels))

        if not self.name:
            raise SchemaDefinitionError("Argument name must not be empty")
        if self.type == ArgType.ENUM and not self.enum_values:
            raise SchemaDefinitionError(f'Enum argument "{self.name}" has no enum values')
        if self.type == ArgType.ELLIPSIS:
            if not self.nested_schema:
                raise SchemaDefinitionError(
                    f'Nested-block argument "{self.name}" has no nested schema'
                )
            if self.is_variadic:
                raise SchemaDefinitionError(
                    f'Nested-block argument "{self.name}" cannot be variadic'
                )
            for nested in self.nested_schema:
                if nested.type == ArgType.ELLIPSIS or nested.is_variadic:
                    raise SchemaDefinitionError(
                        f'Nested field "{nested.name}" of "{self.name}" must be single-valued'
                    )
        if self.ui_component == UIComponent.TOGGLE_BUTTON_SELECTOR and not self.button_labels:
            raise SchemaDefinitionError(f'Toggle selector "{self.name}" has no button labels')

    @property
    def is_nested_block(self) -> bool:
        """True when the argument lives in IntervalSettings, not the positional list."""
        return self.type == ArgType.ELLIPSIS

    @property
    def is_toggle_selector(self) -> bool:
        return self.ui_component == UIComponent.TOGGLE_BUTTON_SELECTOR


@dataclass(frozen=True)
class ConfigurationSchema:
    """Ordered argument list of a feature type.

    Invariants (checked on construction):
    - argument names are unique;
    - at most one argument is variadic;
    - no single-valued positional argument follows the variadic one, since
      the variadic argument consumes every remaining value. Nested-block
      arguments may follow it because they consume nothing.

    Example:
        >>> schema = ConfigurationSchema(
        ...     description="Chord, Chord...",
        ...     args=(
        ...         ArgSpec("ChordNames", ArgType.ENUM, enum_values=("C", "G"), is_variadic=True),
        ...     ),
        ... )
        >>> schema.expected_arity()
        (0, None)
    """

    description: str = ""
    args: tuple[ArgSpec, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

        seen: set[str] = set()
        for arg in self.args:
            if arg.name in seen:
                raise SchemaDefinitionError(f'Duplicate argument name "{arg.name}" in schema')
            seen.add(arg.name)

        variadic = [a for a in self.args if a.is_variadic]
        if len(variadic) > 1:
            names = ", ".join(a.name for a in variadic)
            raise SchemaDefinitionError(f"Schema declares more than one variadic argument: {names}")

        positional = self.positional_args()
        if variadic and positional[-1] is not variadic[0]:
            raise SchemaDefinitionError(
                f'Variadic argument "{variadic[0].name}" must be the last positional argument'
            )

    def positional_args(self) -> tuple[ArgSpec, ...]:
        """Arguments that occupy slots in the positional list."""
        return tuple(a for a in self.args if not a.is_nested_block)

    def nested_args(self) -> tuple[ArgSpec, ...]:
        """Nested-block arguments (stored in IntervalSettings)."""
        return tuple(a for a in self.args if a.is_nested_block)

    def variadic_arg(self) -> ArgSpec | None:
        return next((a for a in self.args if a.is_variadic), None)

    def get_arg(self, name: str) -> ArgSpec | None:
        return next((a for a in self.args if a.name == name), None)

    def expected_arity(self) -> tuple[int, int | None]:
        """Return (minimum, maximum) positional value counts.

        The minimum counts required single-valued arguments up to the last
        required one; the maximum is None when a variadic argument exists.
        """
        positional = self.positional_args()
        single = [a for a in positional if not a.is_variadic]
        last_required = max(
            (i + 1 for i, a in enumerate(single) if a.required),
            default=0,
        )
        variadic = self.variadic_arg()
        minimum = last_required
        if variadic is not None and variadic.required:
            minimum = len(single) + 1
        maximum = None if variadic is not None else len(single)
        return minimum, maximum
