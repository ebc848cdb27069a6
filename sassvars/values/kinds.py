"""Classification of native libsass values into a closed set of kinds."""

from __future__ import annotations

import math
from enum import Enum

import sass

from ..errors import UnsupportedType


class NativeKind(str, Enum):
    """Every value type a captured variable may resolve to."""

    BOOLEAN = "SassBoolean"
    STRING = "SassString"
    NUMBER = "SassNumber"
    COLOR = "SassColor"
    NULL = "SassNull"
    LIST = "SassList"
    MAP = "SassMap"


def classify(value: object) -> NativeKind:
    """Return the kind of a native value or raise UnsupportedType."""
    # bool must be checked before anything numeric-looking.
    if isinstance(value, bool):
        return NativeKind.BOOLEAN
    if isinstance(value, str):
        return NativeKind.STRING
    if value is None:
        return NativeKind.NULL
    if isinstance(value, sass.SassNumber):
        return NativeKind.NUMBER
    if isinstance(value, sass.SassColor):
        return NativeKind.COLOR
    if isinstance(value, sass.SassList):
        return NativeKind.LIST
    if isinstance(value, sass.SassMap):
        return NativeKind.MAP
    raise UnsupportedType(type(value).__name__)


def is_comma_separated(value: sass.SassList) -> bool:
    # The separator singletons are empty namedtuples and compare equal to each other.
    return value.separator is sass.SASS_SEPARATOR_COMMA


def plain_number(value: float) -> int | float:
    """Collapse integral floats to ints so `10px` does not become `10.0px`."""
    number = float(value)
    if math.isfinite(number) and number.is_integer():
        return int(number)
    return number


def format_number(value: float) -> str:
    return repr(plain_number(value))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


__all__ = [
    "NativeKind",
    "classify",
    "format_number",
    "is_comma_separated",
    "plain_number",
    "round_half_up",
]
