"""Combine per-file captured values into one global variable map."""

from __future__ import annotations

from functools import reduce
from typing import Any, Dict, Mapping, Optional, Sequence

from .models import CapturedValue, DeclarationSite, FileExtraction, GlobalVariable

GlobalVariableMap = Mapping[str, GlobalVariable]


def merge(
    ordered_files: Sequence[str], extractions: Mapping[str, FileExtraction]
) -> Dict[str, GlobalVariable]:
    """Fold every file's captured values, in dependency order, into one map."""
    return reduce(
        lambda variables, filename: merge_file(variables, filename, extractions[filename]),
        ordered_files,
        {},
    )


def merge_file(
    variables: GlobalVariableMap, filename: str, extraction: FileExtraction
) -> Dict[str, GlobalVariable]:
    """Return a new map with one file's captured values applied."""
    merged = dict(variables)
    for name, captured_values in extraction.captured_values.items():
        for captured in captured_values:
            merged[name] = merge_value(merged.get(name), filename, captured)
    return merged


def merge_value(
    current: Optional[GlobalVariable], filename: str, captured: CapturedValue
) -> GlobalVariable:
    """Apply one declaration to the current state of a variable.

    A non-default declaration always takes over. A default declaration only
    takes over while every earlier declaration was a default too.
    """
    declaration = captured.declaration
    site = DeclarationSite(
        expression=declaration.expression,
        flags=declaration.flags,
        in_file=filename,
        position=declaration.position,
    )
    if current is None:
        return GlobalVariable(value=captured.value, sources=(filename,), declarations=(site,))

    only_defaults = all(existing.flags.default for existing in current.declarations)
    value = current.value
    if not declaration.flags.default or only_defaults:
        value = captured.value

    sources = current.sources if filename in current.sources else (*current.sources, filename)
    return GlobalVariable(
        value=value,
        sources=sources,
        declarations=(*current.declarations, site),
    )


def to_payload(variables: GlobalVariableMap) -> Dict[str, Any]:
    """Render the merged map into the JSON-safe shape handed to plugins and callers."""
    return {"global": {name: variable.to_dict() for name, variable in variables.items()}}


__all__ = ["GlobalVariableMap", "merge", "merge_file", "merge_value", "to_payload"]
