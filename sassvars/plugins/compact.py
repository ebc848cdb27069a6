"""Strip type tags and provenance, leaving plain values."""

from __future__ import annotations

from typing import Any, Dict

from .base import Plugin
from .serialize import SerializePlugin


def plain_value(entry: Any) -> Any:
    """Reduce one ``{"type", "value", ...}`` entry to its bare value, recursively."""
    if not isinstance(entry, dict) or "value" not in entry:
        return entry
    value = entry["value"]
    kind = entry.get("type")
    if kind == "SassList" and isinstance(value, list):
        return [plain_value(item) for item in value]
    if kind == "SassMap" and isinstance(value, dict):
        return {key: plain_value(item) for key, item in value.items()}
    return value


class CompactPlugin(Plugin):
    name = "compact"

    def post_extract(self, payload: Dict[str, Any]) -> Any:
        return {
            scope: {name: plain_value(entry) for name, entry in variables.items()}
            for scope, variables in payload.items()
        }


class MinimalPlugin(CompactPlugin, SerializePlugin):
    """Serialized strings without metadata: ``{"global": {"$name": "text"}}``."""

    name = "minimal"
