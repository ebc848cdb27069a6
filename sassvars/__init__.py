"""Extract resolved Sass variable values with provenance."""

from .compiler import CompileOptions, CompileResult, CompileStats, LibsassCompiler
from .errors import (
    CompileError,
    CyclicImport,
    ExtractionError,
    UnsupportedSyntax,
    UnsupportedType,
)
from .extractor import ExtractOptions, Extractor, extract, extract_async
from .plugins import Plugin
from .render import render, render_async
from .values import serialize, structure

__all__ = [
    "CompileError",
    "CompileOptions",
    "CompileResult",
    "CompileStats",
    "CyclicImport",
    "ExtractOptions",
    "ExtractionError",
    "Extractor",
    "LibsassCompiler",
    "Plugin",
    "UnsupportedSyntax",
    "UnsupportedType",
    "extract",
    "extract_async",
    "render",
    "render_async",
    "serialize",
    "structure",
]
