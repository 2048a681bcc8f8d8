"""Argument codec: schema-driven conversion of positional argument lists.

An interval stores its feature arguments as a flat, ordered list of strings
(``featureArgsList``). This module is the only place those strings are
interpreted. Walking the schema left to right with a cursor into the list:

- nested-block args consume nothing; their values live in IntervalSettings,
  addressed by field name;
- the variadic arg (at most one, always the last positional arg) consumes
  every remaining value;
- every other arg consumes exactly one value ("" when the list is short).

``encode_args(schema, decode_args(schema, values)) == values`` holds for any
``values`` previously produced by ``encode_args`` from decoded values, except
that scalars are normalised on decode: number text comes back in its
canonical spelling (``"007"`` as ``"7"``, ``"1e3"`` as ``"1000.0"``) and
boolean text in lower case.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from practempo.core.features.schema import ArgSpec, ArgType, ConfigurationSchema
from practempo.core.features.settings import IntervalSettings

logger = logging.getLogger(__name__)

TOGGLE_SEPARATOR = "-"
_TRUE = "true"
_FALSE = "false"

ScalarValue = str | int | float | bool | None
ArgValue = ScalarValue | list[Any]


@dataclass
class DecodedArgs:
    """Structured view of a positional argument list.

    Attributes:
        values: Positional arg name -> decoded value. Single-valued args map
            to a scalar (None for an empty slot); variadic and toggle args
            map to a list.
        nested: Nested-block arg name -> {field name: value}.
        extra: Values beyond the schema's capacity (no variadic arg), kept
            verbatim so they survive re-encoding.
    """

    values: dict[str, ArgValue] = field(default_factory=dict)
    nested: dict[str, dict[str, Any]] = field(default_factory=dict)
    extra: list[str] = field(default_factory=list)

    def __getitem__(self, name: str) -> ArgValue:
        return self.values[name]

    def get(self, name: str, default: ArgValue = None) -> ArgValue:
        return self.values.get(name, default)


def decode_args(
    schema: ConfigurationSchema | None,
    values: Sequence[str],
    settings: IntervalSettings | None = None,
) -> DecodedArgs:
    """Decode a positional list into structured values.

    Args:
        schema: Feature type schema; None treats every value as opaque.
        values: Positional argument strings.
        settings: Interval settings used to read nested-block fields.

    Returns:
        DecodedArgs for the given schema.

    Example:
        >>> decoded = decode_args(progression_schema, ["C", "I", "V", "vi"])
        >>> decoded["RootNote"], decoded["Progression"]
        ('C', ['I', 'V', 'vi'])
    """
    if schema is None:
        return DecodedArgs(extra=list(values))

    decoded = DecodedArgs()
    i = 0
    for arg in schema.args:
        if arg.is_nested_block:
            decoded.nested[arg.name] = _read_nested(arg, settings)
            continue

        if arg.is_variadic:
            remaining = list(values[i:])
            i = len(values)
            if arg.is_toggle_selector:
                decoded.values[arg.name] = _decode_toggle(arg, remaining)
            else:
                decoded.values[arg.name] = [_decode_scalar(arg, v) for v in remaining]
            continue

        raw = values[i] if i < len(values) else ""
        i += 1
        if arg.is_toggle_selector:
            decoded.values[arg.name] = _decode_toggle(arg, [raw] if raw else [])
        else:
            decoded.values[arg.name] = _decode_scalar(arg, raw)

    if i < len(values):
        decoded.extra = list(values[i:])
        logger.debug(f"Kept {len(decoded.extra)} value(s) beyond schema capacity verbatim")
    return decoded


def encode_args(
    schema: ConfigurationSchema | None,
    decoded: DecodedArgs,
    settings: IntervalSettings | None = None,
) -> list[str]:
    """Flatten structured values back into a positional list.

    Nested-block values present in ``decoded.nested`` are written into
    ``settings`` (when given) instead of the list.

    Args:
        schema: Feature type schema; None emits ``decoded.extra`` only.
        decoded: Structured values, typically from ``decode_args``.
        settings: Interval settings receiving nested-block values.

    Returns:
        Positional argument strings.
    """
    if schema is None:
        return list(decoded.extra)

    out: list[str] = []
    for arg in schema.args:
        if arg.is_nested_block:
            if settings is not None:
                _write_nested(arg, decoded.nested.get(arg.name, {}), settings)
            continue

        value = decoded.values.get(arg.name)
        if arg.is_variadic:
            items = _as_list(value)
            if arg.is_toggle_selector:
                items = _order_selection(arg, [str(v) for v in items if v not in (None, "")])
            encoded = (_encode_scalar(arg, v) for v in items)
            out.extend(v for v in encoded if v != "")
        elif arg.is_toggle_selector:
            selection = [str(v) for v in _as_list(value) if v not in (None, "")]
            out.append(TOGGLE_SEPARATOR.join(_order_selection(arg, selection)))
        else:
            out.append(_encode_scalar(arg, value))

    out.extend(decoded.extra)
    return out


def validate_args(schema: ConfigurationSchema | None, values: Sequence[str]) -> list[str]:
    """Check a positional list against a schema without raising.

    Returns:
        Human readable problems; empty when the list is valid.
    """
    if schema is None:
        return []

    problems: list[str] = []
    minimum, maximum = schema.expected_arity()
    if len(values) < minimum:
        problems.append(f"expected at least {minimum} argument(s), got {len(values)}")
    if maximum is not None and len(values) > maximum:
        problems.append(f"expected at most {maximum} argument(s), got {len(values)}")

    i = 0
    for arg in schema.positional_args():
        if arg.is_variadic:
            slot_values = [v for v in values[i:] if v != ""]
            i = len(values)
            if arg.required and not slot_values:
                problems.append(f"'{arg.name}' requires at least one value")
            if arg.is_toggle_selector:
                slot_values = _split_toggle(slot_values)
        else:
            raw = values[i] if i < len(values) else ""
            i += 1
            if raw == "":
                if arg.required:
                    problems.append(f"'{arg.name}' is required")
                continue
            slot_values = _split_toggle([raw]) if arg.is_toggle_selector else [raw]

        for raw_value in slot_values:
            problem = _check_scalar(arg, raw_value)
            if problem:
                problems.append(problem)
    return problems


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


def _decode_scalar(arg: ArgSpec, raw: str) -> ScalarValue:
    if raw == "":
        return None
    if arg.type == ArgType.NUMBER:
        return _parse_number(arg, raw)
    if arg.type == ArgType.BOOLEAN:
        lowered = raw.strip().lower()
        if lowered not in (_TRUE, _FALSE):
            logger.warning(f"Invalid boolean for '{arg.name}': {raw!r}, using false")
        return lowered == _TRUE
    if arg.type == ArgType.ENUM and arg.enum_values and raw not in arg.enum_values:
        logger.warning(f"Value {raw!r} for '{arg.name}' is not one of its enum values")
    return raw


def _encode_scalar(arg: ArgSpec, value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return _TRUE if value else _FALSE
    if arg.type == ArgType.BOOLEAN and isinstance(value, str):
        return _TRUE if value.strip().lower() == _TRUE else _FALSE
    return str(value)


def _parse_number(arg: ArgSpec, raw: str) -> int | float:
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Invalid number for '{arg.name}': {raw!r}, using 0")
        return 0


def _check_scalar(arg: ArgSpec, raw: str) -> str | None:
    if arg.type == ArgType.NUMBER:
        try:
            float(raw)
        except ValueError:
            return f"'{arg.name}' must be a number, got {raw!r}"
    elif arg.type == ArgType.BOOLEAN:
        if raw.strip().lower() not in (_TRUE, _FALSE):
            return f"'{arg.name}' must be true or false, got {raw!r}"
    elif arg.type == ArgType.ENUM and arg.enum_values and raw not in arg.enum_values:
        return f"'{arg.name}' has unknown value {raw!r}"
    if arg.is_toggle_selector and raw not in arg.button_labels:
        return f"'{arg.name}' has unknown selection {raw!r}"
    return None


# ---------------------------------------------------------------------------
# Toggle selectors
# ---------------------------------------------------------------------------


def _split_toggle(values: list[str]) -> list[str]:
    """A single hyphen-joined token is the legacy encoding of a selection."""
    if len(values) == 1 and TOGGLE_SEPARATOR in values[0]:
        return [v for v in values[0].split(TOGGLE_SEPARATOR) if v]
    return [v for v in values if v]


def _decode_toggle(arg: ArgSpec, values: list[str]) -> list[str]:
    return _order_selection(arg, _split_toggle(values))


def _order_selection(arg: ArgSpec, selection: Iterable[str]) -> list[str]:
    """Order a selection by label order; unknown labels follow in input order."""
    selected = list(dict.fromkeys(selection))
    known = [label for label in arg.button_labels if label in selected]
    unknown = [v for v in selected if v not in arg.button_labels]
    if unknown:
        logger.warning(f"Unknown selection(s) for '{arg.name}': {unknown}")
    return known + unknown


# ---------------------------------------------------------------------------
# Nested blocks
# ---------------------------------------------------------------------------


def _read_nested(arg: ArgSpec, settings: IntervalSettings | None) -> dict[str, Any]:
    fields = arg.nested_schema or ()
    if settings is None:
        return {f.name: None for f in fields}
    return {f.name: settings.get_value(f.name) for f in fields}


def _write_nested(arg: ArgSpec, values: dict[str, Any], settings: IntervalSettings) -> None:
    for nested in arg.nested_schema or ():
        if nested.name not in values or values[nested.name] is None:
            continue
        value = values[nested.name]
        if isinstance(value, str):
            value = _decode_scalar(nested, value)
        try:
            settings.set_value(nested.name, value)
        except (KeyError, ValueError) as e:
            logger.warning(f"Could not set '{nested.name}' on {type(settings).__name__}: {e}")


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


__all__ = [
    "ArgValue",
    "DecodedArgs",
    "TOGGLE_SEPARATOR",
    "decode_args",
    "encode_args",
    "validate_args",
]
