from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.sass_tree import SassTreeBuilder


@pytest.fixture
def sass_tree(tmp_path: Path) -> SassTreeBuilder:
    """Provide a stylesheet tree builder rooted at the pytest tmp_path."""
    return SassTreeBuilder(tmp_path)
