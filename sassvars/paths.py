"""Path normalization and Sass import lookup on disk."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional

from .parser import is_plain_css_import

# Identity used by libsass for sources compiled from a string.
STDIN = "stdin"

_SASS_EXTENSIONS = (".scss", ".sass", ".css")
INDENTED_EXTENSION = ".sass"


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Return an absolute, normalized POSIX path string."""
    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        candidate = Path.cwd() / candidate
    return Path(os.path.normpath(candidate)).as_posix()


def base_directory(prev: str, entry_file: str) -> str:
    """Directory against which imports found in ``prev`` are resolved."""
    if not prev or prev == STDIN:
        return str(PurePosixPath(entry_file).parent)
    return str(PurePosixPath(normalize_path(prev)).parent)


def import_candidates(path: str) -> List[PurePosixPath]:
    """Relative file names Sass tries for ``@import "path"``, in lookup order."""
    target = PurePosixPath(path)
    if target.suffix in (".scss", INDENTED_EXTENSION):
        return [target.parent / f"_{target.name}", target]
    candidates: List[PurePosixPath] = []
    for extension in _SASS_EXTENSIONS:
        candidates.append(target.parent / f"_{target.name}{extension}")
        candidates.append(target.parent / f"{target.name}{extension}")
    for extension in _SASS_EXTENSIONS:
        candidates.append(target / f"_index{extension}")
        candidates.append(target / f"index{extension}")
    return candidates


def resolve_import(
    path: str, base_dir: str, include_paths: Iterable[str] = ()
) -> Optional[str]:
    """Locate the file an import refers to, or None when it is not on disk."""
    if is_plain_css_import(path):
        return None
    for base in [base_dir, *include_paths]:
        for candidate in import_candidates(path):
            location = Path(base) / candidate
            if location.is_file():
                return normalize_path(location)
    return None


def is_indented_syntax(path: str) -> bool:
    return path.endswith(INDENTED_EXTENSION)


def strip_sass_extension(path: str) -> str:
    for extension in _SASS_EXTENSIONS:
        if path.endswith(extension):
            return path[: -len(extension)]
    return path


__all__ = [
    "INDENTED_EXTENSION",
    "STDIN",
    "base_directory",
    "import_candidates",
    "is_indented_syntax",
    "normalize_path",
    "resolve_import",
    "strip_sass_extension",
]
