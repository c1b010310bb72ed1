"""Core data models shared across grammardeps components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

VOCAB_FILE_EXTENSION = ".tokens"


class GrammarType(Enum):
    """Kind of grammar declared in the file header."""

    LEXER = "lexer"
    PARSER = "parser"
    COMBINED = "combined"


GRAMMAR_TYPE_SUFFIXES: Dict[GrammarType, str] = {
    GrammarType.LEXER: "Lexer",
    GrammarType.PARSER: "Parser",
    # a combined grammar names its parser; the implicit lexer uses the LEXER suffix
    GrammarType.COMBINED: "Parser",
}


def file_name_suffix(grammar_type: GrammarType) -> str:
    """Return the recognizer suffix used in generated file names for a grammar type."""
    return GRAMMAR_TYPE_SUFFIXES[grammar_type]


@dataclass
class Grammar:
    """Header-level view of a grammar: name, kind, options and imports."""

    name: str
    file_name: str
    type: GrammarType
    options: Dict[str, str] = field(default_factory=dict)
    imports: List["Grammar"] = field(default_factory=list)
    path: Optional[str] = None

    def is_combined(self) -> bool:
        return self.type is GrammarType.COMBINED

    def get_option(self, key: str) -> Optional[str]:
        return self.options.get(key)

    @property
    def recognizer_name(self) -> str:
        """Name of the generated recognizer class, e.g. ``TParser`` for combined ``T``."""
        if self.is_combined():
            return self.name + file_name_suffix(self.type)
        return self.name

    def all_imported_grammars(self) -> Optional[List["Grammar"]]:
        """Return direct and transitive imports, depth first, unique by file name.

        ``None`` means the grammar declares no imports at all.
        """
        if not self.imports:
            return None
        delegates: Dict[str, Grammar] = {}
        for imported in self.imports:
            delegates.setdefault(imported.file_name, imported)
            nested = imported.all_imported_grammars()
            for grammar in nested or []:
                delegates.setdefault(grammar.file_name, grammar)
        return list(delegates.values())


@dataclass(frozen=True)
class DependencyResult:
    """Files a grammar reads and writes; ``None`` marks an absent list."""

    grammar_file_name: str
    inputs: Optional[Tuple[str, ...]]
    outputs: Optional[Tuple[str, ...]]

    def as_dict(self) -> Dict[str, object]:
        return {
            "grammar": self.grammar_file_name,
            "inputs": list(self.inputs) if self.inputs is not None else None,
            "outputs": list(self.outputs) if self.outputs is not None else None,
        }
