"""Error taxonomy for variable extraction."""

from __future__ import annotations

from typing import Sequence

from sass import CompileError


class ExtractionError(RuntimeError):
    """Base class for failures raised by sassvars itself."""


class UnsupportedType(ExtractionError, TypeError):
    """Raised when a compiler value has no serialization or structuring rule."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"Unsupported sass variable type '{type_name}'")
        self.type_name = type_name


class UnsupportedSyntax(ExtractionError):
    """Raised when an included file uses the indented `.sass` syntax."""

    def __init__(self, filename: str) -> None:
        super().__init__(
            f"Cannot extract variables from indented-syntax stylesheet '{filename}'"
        )
        self.filename = filename


class CyclicImport(ExtractionError):
    """Raised when a file re-enters its own import resolution chain."""

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = tuple(chain)
        super().__init__("Cyclic import detected: " + " -> ".join(self.chain))


__all__ = [
    "CompileError",
    "CyclicImport",
    "ExtractionError",
    "UnsupportedSyntax",
    "UnsupportedType",
]
