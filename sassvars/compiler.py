"""Compiler boundary backed by libsass."""

from __future__ import annotations

import asyncio
import inspect
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

import sass

from .logging import get_logger
from .paths import STDIN, base_directory, is_indented_syntax, normalize_path, resolve_import

ImportResult = Sequence[Tuple[str, ...]]
Importer = Callable[..., Optional[ImportResult]]

_SIGNATURE = re.compile(r"^\s*([A-Za-z_-][\w-]*)\s*(?:\((.*)\))?\s*$", re.DOTALL)


@dataclass
class CompileOptions:
    """Options for one compilation.

    When both ``file`` and ``data`` are set, ``data`` is compiled and ``file``
    is used as its identity for import resolution and reporting.
    """

    file: Optional[str] = None
    data: Optional[str] = None
    include_paths: List[str] = field(default_factory=list)
    output_style: str = "nested"
    precision: int = 5
    importers: List[Importer] = field(default_factory=list)
    functions: Dict[str, Callable[..., Any]] = field(default_factory=dict)

    def entry_file(self) -> str:
        if self.file:
            return normalize_path(self.file)
        return normalize_path(Path.cwd() / STDIN)

    def copy(self, **changes: Any) -> "CompileOptions":
        return replace(self, **changes)


@dataclass
class CompileStats:
    """Dependency metadata reported for a compilation."""

    entry: str
    included_files: List[str] = field(default_factory=list)
    loaded_sources: Dict[str, str] = field(default_factory=dict)


@dataclass
class CompileResult:
    css: str
    stats: CompileStats
    vars: Optional[Dict[str, Any]] = None


class Compiler(Protocol):
    def compile(self, options: CompileOptions) -> CompileResult:
        ...

    async def compile_async(self, options: CompileOptions) -> CompileResult:
        ...


class LibsassCompiler:
    """Runs libsass and reports the files each compilation included."""

    def __init__(self) -> None:
        self.logger = get_logger("compiler")

    def compile(self, options: CompileOptions) -> CompileResult:
        if options.data is None and not options.file:
            raise ValueError("Compile options require either 'file' or 'data'")

        entry = options.entry_file()
        include_paths = [normalize_path(path) for path in options.include_paths]
        recorder = _ImportRecorder(entry, include_paths)

        chain: List[Importer] = [recorder.wrap(importer) for importer in options.importers]
        chain.append(recorder.resolve)

        kwargs: Dict[str, Any] = {
            "output_style": options.output_style,
            "precision": options.precision,
            "importers": [(len(chain) - index, importer) for index, importer in enumerate(chain)],
            "custom_functions": build_custom_functions(options.functions),
        }
        if options.data is not None:
            entry_dir = base_directory(STDIN, entry)
            kwargs["include_paths"] = [entry_dir, *include_paths]
            self.logger.debug("Compiling source data for %s", entry)
            css = sass.compile(string=options.data, **kwargs)
        else:
            kwargs["include_paths"] = include_paths
            self.logger.debug("Compiling file %s", entry)
            css = sass.compile(filename=entry, **kwargs)

        stats = CompileStats(
            entry=entry,
            included_files=recorder.included_files,
            loaded_sources=dict(recorder.sources),
        )
        return CompileResult(css=css, stats=stats)

    async def compile_async(self, options: CompileOptions) -> CompileResult:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.compile, options)


def function_name(signature: str) -> str:
    """Return the normalized function name of a call signature.

    Sass treats ``-`` and ``_`` in names as the same character.
    """
    match = _SIGNATURE.match(signature)
    if not match:
        raise ValueError(f"Invalid custom function signature '{signature}'")
    return match.group(1).replace("_", "-")


def build_custom_functions(functions: Mapping[str, Callable[..., Any]]) -> List[sass.SassFunction]:
    """Convert ``signature -> callable`` entries into libsass function objects."""
    built: List[sass.SassFunction] = []
    for signature, callable_ in functions.items():
        if isinstance(callable_, sass.SassFunction):
            built.append(callable_)
            continue
        match = _SIGNATURE.match(signature)
        if not match:
            raise ValueError(f"Invalid custom function signature '{signature}'")
        name, arguments = match.group(1), match.group(2)
        if arguments is None:
            built.append(sass.SassFunction.from_lambda(name, callable_))
            continue
        parsed = tuple(part.strip() for part in arguments.split(",") if part.strip())
        built.append(sass.SassFunction(name, parsed, callable_))
    return built


def call_importer(importer: Importer, path: str, prev: str) -> Optional[ImportResult]:
    """Call an importer with ``(path, prev)`` or ``(path)`` depending on its arity."""
    try:
        parameters = inspect.signature(importer).parameters.values()
    except (TypeError, ValueError):  # pragma: no cover - builtins without signatures
        return importer(path, prev)
    positional = [
        parameter
        for parameter in parameters
        if parameter.kind
        in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    variadic = any(parameter.kind == inspect.Parameter.VAR_POSITIONAL for parameter in parameters)
    if variadic or len(positional) >= 2:
        return importer(path, prev)
    return importer(path)


class _ImportRecorder:
    """Resolves imports from disk and records every file a compilation loads."""

    def __init__(self, entry: str, include_paths: Sequence[str]) -> None:
        self.entry = entry
        self.include_paths = list(include_paths)
        self.included_files: List[str] = [entry]
        self.sources: Dict[str, str] = {}

    def record(self, filename: str, source: Optional[str] = None) -> None:
        if filename not in self.included_files:
            self.included_files.append(filename)
        if source is not None:
            self.sources[filename] = source

    def resolve(self, path: str, prev: str) -> Optional[ImportResult]:
        target = resolve_import(path, base_directory(prev, self.entry), self.include_paths)
        if target is None:
            return None
        if is_indented_syntax(target):
            # Indented sources must be read and converted by libsass itself.
            self.record(target)
            return [(target,)]
        source = Path(target).read_text(encoding="utf-8")
        self.record(target, source)
        return [(target, source)]

    def wrap(self, importer: Importer) -> Importer:
        def _recording_importer(path: str, prev: str) -> Optional[ImportResult]:
            result = call_importer(importer, path, prev)
            if not result:
                return result
            base_dir = base_directory(prev, self.entry)
            for entry in result:
                filename = entry[0]
                if not Path(filename).is_absolute():
                    filename = str(Path(base_dir) / filename)
                source = entry[1] if len(entry) > 1 else None
                self.record(normalize_path(filename), source)
            return result

        return _recording_importer


__all__ = [
    "CompileOptions",
    "CompileResult",
    "CompileStats",
    "Compiler",
    "Importer",
    "LibsassCompiler",
    "build_custom_functions",
    "call_importer",
    "function_name",
]
