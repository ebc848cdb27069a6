"""Instrument file sources with capture hooks for each declaration."""

from __future__ import annotations

from typing import Any, Callable, Sequence

import sass

from .errors import UnsupportedType
from .models import CapturedValue, Declaration, FileExtraction
from .plugins import Pluggable
from .values import structure

HOOK_PREFIX = "sassvars-capture"
HOOK_VARIABLE = "$sassvars-capture"


def hook_name(file_index: int, declaration_index: int) -> str:
    return f"{HOOK_PREFIX}-f{file_index}-d{declaration_index}"


def build_extraction(
    source_file: str,
    file_index: int,
    source: str,
    declarations: Sequence[Declaration],
    pluggable: Pluggable,
) -> FileExtraction:
    """Append one hook call per declaration to ``source`` and register the hooks."""
    extraction = FileExtraction(
        source_file=source_file,
        declarations=list(declarations),
        injected_source=source,
    )
    calls = []
    for index, declaration in enumerate(declarations):
        name = hook_name(file_index, index)
        extraction.injected_functions[f"{name}($value)"] = _make_capture(
            extraction, index, declaration, pluggable
        )
        calls.append(f"{HOOK_VARIABLE}: {name}({declaration.name});")

    if calls:
        # A trailing `//` comment would otherwise swallow the first call.
        separator = "" if source.endswith("\n") else "\n"
        extraction.injected_source = f"{source}{separator}" + "\n".join(calls) + "\n"
    return extraction


def _make_capture(
    extraction: FileExtraction,
    index: int,
    declaration: Declaration,
    pluggable: Pluggable,
) -> Callable[[Any], Any]:
    def _capture(value: Any) -> Any:
        try:
            structured = pluggable.run_post_value(structure(value), value)
        except UnsupportedType as exc:
            if extraction.failure is None:
                extraction.failure = exc
            return sass.SassError(str(exc))
        # A file imported twice runs its hooks twice; the last run is the final value.
        extraction.slots[index] = CapturedValue(declaration=declaration, value=structured)
        return None

    return _capture


__all__ = ["HOOK_PREFIX", "HOOK_VARIABLE", "build_extraction", "hook_name"]
