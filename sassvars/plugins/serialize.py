"""Replace structured values with their source-syntax strings."""

from __future__ import annotations

from ..values import SerializedValue, StructuredValue, serialize
from .base import Plugin


class SerializePlugin(Plugin):
    name = "serialize"

    def post_value(self, value: StructuredValue, native: object) -> StructuredValue:
        return SerializedValue(kind=value.type_name, text=serialize(native))
