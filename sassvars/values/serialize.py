"""Serialize native libsass values into source-compatible strings."""

from __future__ import annotations

from typing import Callable, Dict

import sass

from .colors import color_hex, hex_to_keyword
from .kinds import (
    NativeKind,
    classify,
    format_number,
    is_comma_separated,
    round_half_up,
)

# Alphas at or above this are treated as fully opaque.
OPAQUE_THRESHOLD = 0.999


def serialize(value: object, nested: bool = False) -> str:
    """Return the flat string form of a native value.

    ``nested`` is set while serializing list members so inner lists are wrapped
    in parentheses and re-parse as nested lists.
    """
    return _SERIALIZERS[classify(value)](value, nested)


def serialize_color(color: sass.SassColor) -> str:
    """Return a keyword like ``white``, an ``rgba(r,g,b,a)`` or a ``#rrggbb`` string."""
    red = round_half_up(color.r)
    green = round_half_up(color.g)
    blue = round_half_up(color.b)

    if color.a < OPAQUE_THRESHOLD:
        alpha = round_half_up(color.a * 100) / 100
        return f"rgba({red},{green},{blue},{format_number(alpha)})"

    hex_value = color_hex(red, green, blue)
    return hex_to_keyword(hex_value) or hex_value


def _serialize_boolean(value: bool, nested: bool) -> str:
    return "true" if value else "false"


def _serialize_string(value: str, nested: bool) -> str:
    return value


def _serialize_number(value: sass.SassNumber, nested: bool) -> str:
    return f"{format_number(value.value)}{value.unit}"


def _serialize_color(value: sass.SassColor, nested: bool) -> str:
    return serialize_color(value)


def _serialize_null(value: None, nested: bool) -> str:
    return "null"


def _serialize_list(value: sass.SassList, nested: bool) -> str:
    separator = "," if is_comma_separated(value) else " "
    joined = separator.join(serialize(item, True) for item in value.items)
    if getattr(value, "bracketed", False):
        return f"[{joined}]"
    if nested:
        return f"({joined})"
    return joined


def _serialize_map(value: sass.SassMap, nested: bool) -> str:
    pairs: Dict[str, str] = {}
    for key, item in value.items():
        pairs[serialize(key)] = serialize(item)
    return "(" + ",".join(f"{key}: {item}" for key, item in pairs.items()) + ")"


_SERIALIZERS: Dict[NativeKind, Callable[[object, bool], str]] = {
    NativeKind.BOOLEAN: _serialize_boolean,
    NativeKind.STRING: _serialize_string,
    NativeKind.NUMBER: _serialize_number,
    NativeKind.COLOR: _serialize_color,
    NativeKind.NULL: _serialize_null,
    NativeKind.LIST: _serialize_list,
    NativeKind.MAP: _serialize_map,
}


__all__ = ["OPAQUE_THRESHOLD", "serialize", "serialize_color"]
