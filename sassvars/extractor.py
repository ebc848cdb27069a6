"""Two-pass variable extraction built on an instrumented recompilation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .compiler import CompileOptions, CompileResult, Compiler, LibsassCompiler, function_name
from .errors import CompileError, UnsupportedSyntax
from .imports import make_importer, resolve_imports
from .inject import build_extraction
from .loader import load_compiled_files, rendered_files
from .logging import get_logger
from .merge import merge, to_payload
from .models import Declaration, FileExtraction
from .parser import parse_declarations
from .paths import is_indented_syntax, normalize_path
from .plugins import Pluggable

DeclarationParser = Callable[[str, Optional[str]], List[Declaration]]


@dataclass
class ExtractOptions:
    """Extraction settings independent of compilation."""

    plugins: List[Any] = field(default_factory=list)


@dataclass
class ExtractionPlan:
    """Everything prepared between the two compile passes of one call."""

    ordered_files: List[str]
    extractions: Dict[str, FileExtraction]
    options: CompileOptions
    pluggable: Pluggable


class Extractor:
    """Extracts resolved variable values from an already compiled stylesheet."""

    def __init__(
        self,
        compiler: Compiler | None = None,
        parser: DeclarationParser | None = None,
    ) -> None:
        self.compiler = compiler or LibsassCompiler()
        self.parse = parser or parse_declarations
        self.logger = get_logger("extractor")

    def extract(
        self,
        compiled: CompileResult,
        compile_options: CompileOptions | None = None,
        extract_options: ExtractOptions | None = None,
    ) -> Any:
        """Recompile with capture hooks and return the (plugin-transformed) variables."""
        plan = self.plan(compiled, compile_options, extract_options)
        try:
            self.compiler.compile(plan.options)
        except CompileError as exc:
            _raise_capture_failure(plan, exc)
            raise
        return plan.pluggable.run_post_extract(self._collect(plan))

    async def extract_async(
        self,
        compiled: CompileResult,
        compile_options: CompileOptions | None = None,
        extract_options: ExtractOptions | None = None,
    ) -> Any:
        """Asynchronous form of :meth:`extract` with identical results."""
        plan = self.plan(compiled, compile_options, extract_options)
        try:
            await self.compiler.compile_async(plan.options)
        except CompileError as exc:
            _raise_capture_failure(plan, exc)
            raise
        return await plan.pluggable.run_post_extract_async(self._collect(plan))

    def plan(
        self,
        compiled: CompileResult,
        compile_options: CompileOptions | None = None,
        extract_options: ExtractOptions | None = None,
    ) -> ExtractionPlan:
        """Load, parse and instrument every included file for the second pass."""
        compile_options = compile_options or CompileOptions()
        extract_options = extract_options or ExtractOptions()
        pluggable = Pluggable.from_specs(extract_options.plugins)

        entry, included_files = rendered_files(compiled.stats)
        self.logger.info("Extracting variables from %s", entry)
        for filename in included_files:
            if is_indented_syntax(filename):
                raise UnsupportedSyntax(filename)
        loaded = load_compiled_files(
            included_files,
            entry,
            compile_options.data,
            compiled.stats.loaded_sources,
        )

        extractions: Dict[str, FileExtraction] = {}
        for index, filename in enumerate(loaded.ordered_files):
            source = loaded.sources[filename]
            declarations = self.parse(source, filename)
            self.logger.debug("Parsed %d declarations from %s", len(declarations), filename)
            extractions[filename] = build_extraction(
                filename, index, source, declarations, pluggable
            )

        include_paths = [normalize_path(path) for path in compile_options.include_paths]
        data = resolve_imports(extractions, entry, include_paths)
        options = compile_options.copy(
            file=entry,
            data=data,
            functions=merge_functions(extractions, compile_options.functions),
            importers=[
                *compile_options.importers,
                make_importer(extractions, entry, include_paths),
            ],
        )
        return ExtractionPlan(
            ordered_files=loaded.ordered_files,
            extractions=extractions,
            options=options,
            pluggable=pluggable,
        )

    def _collect(self, plan: ExtractionPlan) -> Dict[str, Any]:
        variables = merge(plan.ordered_files, plan.extractions)
        self.logger.info(
            "Extracted %d variables from %d files", len(variables), len(plan.ordered_files)
        )
        return to_payload(variables)


def merge_functions(
    extractions: Mapping[str, FileExtraction],
    custom: Mapping[str, Callable[..., Any]] | None,
) -> Dict[str, Callable[..., Any]]:
    """Combine capture hooks with caller functions; caller functions win on name clashes."""
    merged: Dict[str, Tuple[str, Callable[..., Any]]] = {}
    for extraction in extractions.values():
        for signature, callable_ in extraction.injected_functions.items():
            merged[function_name(signature)] = (signature, callable_)
    for signature, callable_ in (custom or {}).items():
        merged[function_name(signature)] = (signature, callable_)
    return {signature: callable_ for signature, callable_ in merged.values()}


def _raise_capture_failure(plan: ExtractionPlan, exc: CompileError) -> None:
    for extraction in plan.extractions.values():
        if extraction.failure is not None:
            raise extraction.failure from exc


def extract(
    compiled: CompileResult,
    compile_options: CompileOptions | None = None,
    extract_options: ExtractOptions | None = None,
) -> Any:
    return Extractor().extract(compiled, compile_options, extract_options)


async def extract_async(
    compiled: CompileResult,
    compile_options: CompileOptions | None = None,
    extract_options: ExtractOptions | None = None,
) -> Any:
    return await Extractor().extract_async(compiled, compile_options, extract_options)


__all__ = [
    "DeclarationParser",
    "ExtractOptions",
    "ExtractionPlan",
    "Extractor",
    "extract",
    "extract_async",
    "merge_functions",
]
