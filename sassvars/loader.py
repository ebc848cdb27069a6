"""Load the sources of every file a compilation included."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from .compiler import CompileStats
from .logging import get_logger
from .paths import normalize_path

logger = get_logger("loader")


@dataclass
class LoadedFiles:
    """Included files in dependency order and their source text."""

    entry: str
    ordered_files: List[str]
    sources: Dict[str, str]


def rendered_files(stats: CompileStats) -> tuple[str, List[str]]:
    """Return the normalized entry and included files of a compile result.

    The entry always comes first; the compiler's order is otherwise kept as-is.
    """
    entry = normalize_path(stats.entry)
    ordered: List[str] = [entry]
    for filename in stats.included_files:
        normalized = normalize_path(filename)
        if normalized not in ordered:
            ordered.append(normalized)
    return entry, ordered


def load_compiled_files(
    included_files: Sequence[str],
    entry: str,
    data: Optional[str] = None,
    loaded_sources: Mapping[str, str] | None = None,
) -> LoadedFiles:
    """Read each included file, preferring sources the compiler already loaded."""
    known = {normalize_path(name): text for name, text in (loaded_sources or {}).items()}
    sources: Dict[str, str] = {}
    for filename in included_files:
        if filename == entry and data is not None:
            sources[filename] = data
        elif filename in known:
            sources[filename] = known[filename]
        else:
            sources[filename] = Path(filename).read_text(encoding="utf-8")
    logger.debug("Loaded %d included files for %s", len(sources), entry)
    return LoadedFiles(entry=entry, ordered_files=list(included_files), sources=sources)


__all__ = ["LoadedFiles", "load_compiled_files", "rendered_files"]
