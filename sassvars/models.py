"""Core data models shared across sassvars components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .values.struct import StructuredValue


@dataclass(frozen=True)
class Position:
    """Location of a declaration in its source text."""

    line: int
    column: int
    cursor: int

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "column": self.column, "cursor": self.cursor}


@dataclass(frozen=True)
class DeclarationFlags:
    default: bool = False
    global_: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {"default": self.default, "global": self.global_}


@dataclass(frozen=True)
class Declaration:
    """One textual variable assignment."""

    name: str
    expression: str
    flags: DeclarationFlags
    position: Position
    source_file: Optional[str] = None


@dataclass(frozen=True)
class ImportTarget:
    """One path of an ``@import`` statement.

    ``path`` is None for plain-CSS imports that the compiler passes through.
    """

    raw: str
    path: Optional[str]


@dataclass(frozen=True)
class ImportStatement:
    """An ``@import`` statement and the span of source text it occupies."""

    targets: Tuple[ImportTarget, ...]
    start: int
    end: int


@dataclass(frozen=True)
class CapturedValue:
    """Resolved value of one declaration, captured during recompilation."""

    declaration: Declaration
    value: StructuredValue


@dataclass
class FileExtraction:
    """Per-file instrumentation and the values captured while it ran."""

    source_file: str
    declarations: List[Declaration]
    injected_source: str
    injected_functions: Dict[str, Callable[..., Any]] = field(default_factory=dict)
    slots: Dict[int, CapturedValue] = field(default_factory=dict)
    failure: Optional[BaseException] = None

    @property
    def captured_values(self) -> Dict[str, List[CapturedValue]]:
        """Captured values grouped by variable name, in declaration order."""
        grouped: Dict[str, List[CapturedValue]] = {}
        for index in sorted(self.slots):
            captured = self.slots[index]
            grouped.setdefault(captured.declaration.name, []).append(captured)
        return grouped


@dataclass(frozen=True)
class DeclarationSite:
    """Provenance entry for one declaration of a merged variable."""

    expression: str
    flags: DeclarationFlags
    in_file: str
    position: Position

    def to_dict(self) -> Dict[str, Any]:
        return {
            "expression": self.expression,
            "flags": self.flags.to_dict(),
            "in": self.in_file,
            "position": self.position.to_dict(),
        }


@dataclass(frozen=True)
class GlobalVariable:
    """Final merged variable: winning value plus provenance."""

    value: StructuredValue
    sources: Tuple[str, ...] = ()
    declarations: Tuple[DeclarationSite, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        payload = self.value.to_dict()
        payload["sources"] = list(self.sources)
        payload["declarations"] = [site.to_dict() for site in self.declarations]
        return payload
