from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

import pytest


class GrammarBuilder:
    """Writes grammar files into a throwaway directory."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "grammars"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries below the root."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")

    def path(self, relative: str = "") -> Path:
        return self.root / relative if relative else self.root


@pytest.fixture
def grammar_builder(tmp_path: Path) -> GrammarBuilder:
    """Provide a grammar directory rooted at the pytest tmp_path."""
    return GrammarBuilder(tmp_path)
