"""Inline instrumented imports into one self-contained extraction source."""

from __future__ import annotations

import posixpath
from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple

from .compiler import Importer, ImportResult
from .errors import CyclicImport
from .logging import get_logger
from .models import FileExtraction, ImportStatement
from .parser import is_plain_css_import, parse_imports
from .paths import base_directory, resolve_import, strip_sass_extension

logger = get_logger("imports")


def normalize_import(path: str) -> str:
    """Reduce an import path to the form ``dir/name`` without partial prefix or extension."""
    cleaned = path.strip()
    while cleaned.startswith("./"):
        cleaned = cleaned[2:]
    cleaned = posixpath.normpath(strip_sass_extension(cleaned))
    directory, name = posixpath.split(cleaned)
    if name.startswith("_"):
        name = name[1:]
    return posixpath.join(directory, name) if directory else name


def import_keys(filename: str, base_dir: str) -> Set[str]:
    """Every import path, relative to ``base_dir``, that refers to ``filename``.

    A file ``_foo.scss`` may be imported as ``foo``; ``dir/_index.scss`` may
    also be imported as ``dir``.
    """
    relative = normalize_import(posixpath.relpath(filename, base_dir))
    keys = {relative}
    directory, name = posixpath.split(relative)
    if name == "index" and directory:
        keys.add(directory)
    return keys


class ImportGraph:
    """Import edges between known files, resolved by import-relative names."""

    def __init__(
        self,
        extractions: Mapping[str, FileExtraction],
        include_paths: Sequence[str] = (),
    ) -> None:
        self.extractions = extractions
        self.include_paths = list(include_paths)
        self._imports: Dict[str, List[ImportStatement]] = {}

    def imports_of(self, filename: str) -> List[ImportStatement]:
        if filename not in self._imports:
            self._imports[filename] = parse_imports(self.extractions[filename].injected_source)
        return self._imports[filename]

    def resolve_target(self, importer: str, path: str) -> Optional[str]:
        wanted = normalize_import(path)
        for base in [posixpath.dirname(importer), *self.include_paths]:
            for candidate in self.extractions:
                if candidate == importer:
                    continue
                if wanted in import_keys(candidate, base):
                    return candidate
        return None


def resolve_imports(
    extractions: Mapping[str, FileExtraction],
    entry_file: str,
    include_paths: Sequence[str] = (),
) -> str:
    """Return the entry's injected source with every known import inlined.

    Imports that match no known file are left in place for the compiler's
    importer chain.
    """
    graph = ImportGraph(extractions, include_paths)
    return _resolve(graph, entry_file, ())


def _resolve(graph: ImportGraph, filename: str, chain: Tuple[str, ...]) -> str:
    if filename in chain:
        raise CyclicImport((*chain, filename))
    chain = (*chain, filename)

    source = graph.extractions[filename].injected_source
    pieces: List[str] = []
    cursor = 0
    for statement in graph.imports_of(filename):
        pieces.append(source[cursor : statement.start])
        pieces.append(_replace_statement(graph, filename, statement, chain))
        cursor = statement.end
    pieces.append(source[cursor:])
    return "".join(pieces)


def _replace_statement(
    graph: ImportGraph,
    filename: str,
    statement: ImportStatement,
    chain: Tuple[str, ...],
) -> str:
    blocks: List[str] = []
    pending: List[str] = []

    def _flush() -> None:
        if pending:
            blocks.append(f"@import {', '.join(pending)};")
            pending.clear()

    for target in statement.targets:
        resolved = graph.resolve_target(filename, target.path) if target.path else None
        if resolved is None:
            logger.debug("Leaving import %s in %s to the compiler", target.raw, filename)
            pending.append(target.raw)
            continue
        _flush()
        logger.debug("Inlining %s into %s", resolved, filename)
        blocks.append(_resolve(graph, resolved, chain))
    _flush()
    return "\n".join(blocks)


def make_importer(
    extractions: Mapping[str, FileExtraction],
    entry_file: str,
    include_paths: Sequence[str] = (),
) -> Importer:
    """Importer serving instrumented sources for imports left in the extraction source."""

    def _importer(path: str, prev: str) -> Optional[ImportResult]:
        if is_plain_css_import(path):
            return None
        target = resolve_import(path, base_directory(prev, entry_file), include_paths)
        if target is None or target not in extractions:
            return None
        return [(target, extractions[target].injected_source)]

    return _importer


__all__ = [
    "ImportGraph",
    "import_keys",
    "make_importer",
    "normalize_import",
    "resolve_imports",
]
