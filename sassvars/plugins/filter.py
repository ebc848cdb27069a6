"""Keep or drop variables by name and type."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Set

from .base import Plugin


def _names(values: Any) -> Set[str]:
    return {value if value.startswith("$") else f"${value}" for value in _as_list(values)}


def _types(values: Any) -> Set[str]:
    return {_normalize_type(value) for value in _as_list(values)}


def _normalize_type(value: str) -> str:
    lowered = value.lower()
    return lowered[4:] if lowered.startswith("sass") else lowered


def _as_list(values: Any) -> List[str]:
    if values is None:
        return []
    if isinstance(values, str):
        return [values]
    return [str(value) for value in values]


class FilterPlugin(Plugin):
    """Options: ``only`` and ``except``, each with ``props`` and ``types`` lists.

    Type filters need the type tags, so this plugin must run before ``compact``.
    """

    name = "filter"

    def __init__(self, options: Mapping[str, Any] | None = None) -> None:
        super().__init__(options)
        only = self.options.get("only") or {}
        excluded = self.options.get("except") or {}
        self.only_props = _names(only.get("props"))
        self.only_types = _types(only.get("types"))
        self.except_props = _names(excluded.get("props"))
        self.except_types = _types(excluded.get("types"))

    def keep(self, name: str, entry: Any) -> bool:
        kind = entry.get("type") if isinstance(entry, dict) else None
        kind = _normalize_type(kind) if isinstance(kind, str) else None
        if self.only_props and name not in self.only_props:
            return False
        if self.only_types and kind not in self.only_types:
            return False
        if name in self.except_props:
            return False
        if kind is not None and kind in self.except_types:
            return False
        return True

    def post_extract(self, payload: Dict[str, Any]) -> Any:
        return {
            scope: {name: entry for name, entry in variables.items() if self.keep(name, entry)}
            for scope, variables in payload.items()
        }
