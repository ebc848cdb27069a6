"""Compile a stylesheet and attach its extracted variables to the result."""

from __future__ import annotations

from .compiler import CompileOptions, CompileResult
from .extractor import ExtractOptions, Extractor


def render(
    compile_options: CompileOptions,
    extract_options: ExtractOptions | None = None,
    *,
    extractor: Extractor | None = None,
) -> CompileResult:
    """Compile with the given options and set ``vars`` on the compile result."""
    extractor = extractor or Extractor()
    rendered = extractor.compiler.compile(compile_options)
    rendered.vars = extractor.extract(rendered, compile_options, extract_options)
    return rendered


async def render_async(
    compile_options: CompileOptions,
    extract_options: ExtractOptions | None = None,
    *,
    extractor: Extractor | None = None,
) -> CompileResult:
    """Asynchronous form of :func:`render`."""
    extractor = extractor or Extractor()
    rendered = await extractor.compiler.compile_async(compile_options)
    rendered.vars = await extractor.extract_async(rendered, compile_options, extract_options)
    return rendered


__all__ = ["render", "render_async"]
