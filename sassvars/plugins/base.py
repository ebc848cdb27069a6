"""Base class for extraction plugins."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..values import StructuredValue


class Plugin:
    """Observes or transforms extracted values.

    ``post_value`` runs for every captured value while the instrumented source
    compiles; ``post_extract`` runs once on the merged payload. Both default to
    returning their input unchanged.
    """

    name = "plugin"

    def __init__(self, options: Optional[Mapping[str, Any]] = None) -> None:
        self.options: Dict[str, Any] = dict(options or {})

    def post_value(self, value: StructuredValue, native: object) -> StructuredValue:
        return value

    def post_extract(self, payload: Dict[str, Any]) -> Any:
        return payload
