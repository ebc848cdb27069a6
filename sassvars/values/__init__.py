"""Conversion of native compiler values into strings and structured trees."""

from .colors import hex_to_keyword
from .kinds import NativeKind, classify
from .serialize import serialize
from .struct import (
    BooleanValue,
    ColorValue,
    ListValue,
    MapValue,
    NullValue,
    NumberValue,
    Separator,
    SerializedValue,
    StringValue,
    StructuredValue,
    structure,
)

__all__ = [
    "BooleanValue",
    "ColorValue",
    "ListValue",
    "MapValue",
    "NativeKind",
    "NullValue",
    "NumberValue",
    "Separator",
    "SerializedValue",
    "StringValue",
    "StructuredValue",
    "classify",
    "hex_to_keyword",
    "serialize",
    "structure",
]
