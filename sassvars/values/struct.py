"""Structured, JSON-safe value trees built from native libsass values."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Mapping, Tuple

import sass

from .colors import color_hex
from .kinds import NativeKind, classify, is_comma_separated, plain_number, round_half_up
from .serialize import serialize


class Separator(str, Enum):
    """List separator as written in the source."""

    COMMA = ","
    SPACE = " "


class StructuredValue(ABC):
    """Base for every structured value variant."""

    type_name: ClassVar[str] = ""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-safe ``{"type", "value", ...}`` form."""

    def to_plain(self) -> Any:
        """Return the bare ``value`` field without type metadata."""
        return self.to_dict()["value"]


@dataclass(frozen=True)
class BooleanValue(StructuredValue):
    value: bool
    type_name: ClassVar[str] = NativeKind.BOOLEAN.value

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type_name, "value": self.value}


@dataclass(frozen=True)
class StringValue(StructuredValue):
    value: str
    type_name: ClassVar[str] = NativeKind.STRING.value

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type_name, "value": self.value}


@dataclass(frozen=True)
class NumberValue(StructuredValue):
    value: int | float
    unit: str = ""
    type_name: ClassVar[str] = NativeKind.NUMBER.value

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type_name, "value": self.value, "unit": self.unit}


@dataclass(frozen=True)
class ColorValue(StructuredValue):
    r: int
    g: int
    b: int
    a: float
    hex: str
    type_name: ClassVar[str] = NativeKind.COLOR.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type_name,
            "value": {"r": self.r, "g": self.g, "b": self.b, "a": self.a, "hex": self.hex},
        }


@dataclass(frozen=True)
class NullValue(StructuredValue):
    type_name: ClassVar[str] = NativeKind.NULL.value

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type_name, "value": None}


@dataclass(frozen=True)
class ListValue(StructuredValue):
    items: Tuple[StructuredValue, ...]
    separator: Separator = Separator.SPACE
    type_name: ClassVar[str] = NativeKind.LIST.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type_name,
            "value": [item.to_dict() for item in self.items],
            "separator": self.separator.value,
        }

    def to_plain(self) -> Any:
        return [item.to_plain() for item in self.items]


@dataclass(frozen=True)
class MapValue(StructuredValue):
    entries: Tuple[Tuple[str, StructuredValue], ...]
    type_name: ClassVar[str] = NativeKind.MAP.value

    @property
    def mapping(self) -> Mapping[str, StructuredValue]:
        return dict(self.entries)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type_name,
            "value": {key: item.to_dict() for key, item in self.entries},
        }

    def to_plain(self) -> Any:
        return {key: item.to_plain() for key, item in self.entries}


@dataclass(frozen=True)
class SerializedValue(StructuredValue):
    """A value flattened to its source text, keeping the original type tag."""

    kind: str
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, "value": self.text}


def structure(value: object) -> StructuredValue:
    """Create a structured value from a native libsass value."""
    return _STRUCTURERS[classify(value)](value)


def _structure_boolean(value: bool) -> StructuredValue:
    return BooleanValue(value)


def _structure_string(value: str) -> StructuredValue:
    return StringValue(value)


def _structure_number(value: sass.SassNumber) -> StructuredValue:
    return NumberValue(plain_number(value.value), value.unit)


def _structure_color(value: sass.SassColor) -> StructuredValue:
    red = round_half_up(value.r)
    green = round_half_up(value.g)
    blue = round_half_up(value.b)
    return ColorValue(
        r=red,
        g=green,
        b=blue,
        a=plain_number(value.a),
        hex=color_hex(red, green, blue),
    )


def _structure_null(value: None) -> StructuredValue:
    return NullValue()


def _structure_list(value: sass.SassList) -> StructuredValue:
    separator = Separator.COMMA if is_comma_separated(value) else Separator.SPACE
    return ListValue(tuple(structure(item) for item in value.items), separator)


def _structure_map(value: sass.SassMap) -> StructuredValue:
    entries: Dict[str, StructuredValue] = {}
    for key, item in value.items():
        # Map keys may be any sass type; they are linearized to strings.
        entries[serialize(key)] = structure(item)
    return MapValue(tuple(entries.items()))


_STRUCTURERS: Dict[NativeKind, Callable[[Any], StructuredValue]] = {
    NativeKind.BOOLEAN: _structure_boolean,
    NativeKind.STRING: _structure_string,
    NativeKind.NUMBER: _structure_number,
    NativeKind.COLOR: _structure_color,
    NativeKind.NULL: _structure_null,
    NativeKind.LIST: _structure_list,
    NativeKind.MAP: _structure_map,
}


__all__ = [
    "BooleanValue",
    "ColorValue",
    "ListValue",
    "MapValue",
    "NullValue",
    "NumberValue",
    "Separator",
    "SerializedValue",
    "StringValue",
    "StructuredValue",
    "structure",
]
