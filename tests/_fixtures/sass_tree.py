"""Helper for writing throwaway stylesheet trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from sassvars.paths import normalize_path


class SassTreeBuilder:
    """Writes `path -> contents` stylesheets under a temporary root."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "styles"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def path(self, relative: str) -> str:
        """Return the normalized absolute path of a file in the tree."""
        return normalize_path(self.root / relative)


__all__ = ["SassTreeBuilder"]
