"""Reads the header of a grammar file: declaration, options and imports.

Only the prequel of the grammar is inspected; rules are never parsed. Imports
are loaded recursively the way the grammar compiler finds them: the name as
given, then next to the importing grammar, then inside the library directory.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from .logging import get_logger
from .models import Grammar, GrammarType

GRAMMAR_EXTENSIONS: Tuple[str, ...] = (".g4", ".g")

_LOGGER = get_logger("grammar")

_COMMENT_OR_LITERAL = re.compile(
    r"'(?:\\.|[^'\\])*'|\"(?:\\.|[^\"\\])*\"|//[^\n]*|/\*.*?\*/",
    re.DOTALL,
)
_DECLARATION = re.compile(
    r"^\s*(?:(lexer|parser)\s+)?grammar\s+([A-Za-z_][A-Za-z0-9_]*)\s*;",
    re.MULTILINE,
)
_RULE_START = re.compile(r"^\s*(?:fragment\s+)?[A-Za-z_][A-Za-z0-9_]*\s*(?:\[[^\]]*\]\s*)?:", re.MULTILINE)
_NAMED_ACTION = re.compile(r"@\s*(?:[A-Za-z_]\w*\s*::\s*)?[A-Za-z_]\w*\s*\{")
_OPTIONS = re.compile(r"\boptions\s*\{(.*?)\}", re.DOTALL)
_OPTION = re.compile(r"([A-Za-z_][A-Za-z0-9_]*)\s*=\s*([^;]+?)\s*;")
_IMPORT = re.compile(r"\bimport\s+([^;]+);")
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_TYPES = {
    None: GrammarType.COMBINED,
    "lexer": GrammarType.LEXER,
    "parser": GrammarType.PARSER,
}


class GrammarError(RuntimeError):
    """Raised when a grammar file cannot be read or its imports cannot be resolved."""


def load_grammar(path: str | Path, lib_directory: str = ".") -> Grammar:
    """Load ``path`` and every grammar it imports, directly or transitively."""
    loader = _GrammarLoader(lib_directory)
    return loader.load(str(path), file_name=str(path), stack=())


def parse_header(text: str) -> Tuple[GrammarType, str, Dict[str, str], List[str]]:
    """Return ``(type, name, options, imported grammar names)`` for grammar source text."""
    cleaned = _strip_actions(_strip_comments(text))
    declaration = _DECLARATION.search(cleaned)
    if declaration is None:
        raise GrammarError("No grammar declaration found")
    grammar_type = _TYPES[declaration.group(1)]
    name = declaration.group(2)

    prequel = cleaned[declaration.end():]
    rule = _RULE_START.search(prequel)
    if rule is not None:
        prequel = prequel[: rule.start()]

    options: Dict[str, str] = {}
    block = _OPTIONS.search(prequel)
    if block is not None:
        for key, value in _OPTION.findall(block.group(1)):
            options[key] = _unquote(value)

    imports: List[str] = []
    for statement in _IMPORT.findall(prequel):
        for entry in statement.split(","):
            entry = entry.strip()
            if not entry:
                continue
            # `import alias = Name;` loads Name
            imported = entry.split("=", 1)[-1].strip()
            if not _IDENTIFIER.match(imported):
                raise GrammarError(f"Invalid import in grammar {name}: {entry!r}")
            imports.append(imported)

    return grammar_type, name, options, imports


class _GrammarLoader:
    def __init__(self, lib_directory: str) -> None:
        self.lib_directory = lib_directory
        self._cache: Dict[str, Grammar] = {}

    def load(self, path: str, *, file_name: str, stack: Sequence[str]) -> Grammar:
        key = os.path.abspath(path)
        if key in stack:
            chain = " -> ".join(os.path.basename(item) for item in (*stack, key))
            raise GrammarError(f"Grammar imports itself: {chain}")
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise GrammarError(f"Cannot read grammar file {path}: {exc}") from exc

        try:
            grammar_type, name, options, import_names = parse_header(text)
        except GrammarError as exc:
            raise GrammarError(f"{path}: {exc}") from exc

        grammar = Grammar(
            name=name,
            file_name=file_name,
            type=grammar_type,
            options=options,
            path=path,
        )
        _LOGGER.debug("Loaded %s grammar %s from %s", grammar_type.value, name, path)

        for imported_name in import_names:
            imported_path = self._find_import(path, imported_name)
            if imported_path is None:
                raise GrammarError(
                    f"Cannot find grammar {imported_name} imported by {name} "
                    f"(library directory {self.lib_directory!r})"
                )
            grammar.imports.append(
                self.load(
                    imported_path,
                    file_name=os.path.basename(imported_path),
                    stack=(*stack, key),
                )
            )

        self._cache[key] = grammar
        return grammar

    def _find_import(self, importer_path: str, name: str) -> Optional[str]:
        parent = os.path.dirname(importer_path)
        for extension in GRAMMAR_EXTENSIONS:
            file_name = name + extension
            candidates = [file_name]
            if parent:
                candidates.append(os.path.join(parent, file_name))
            candidates.append(os.path.join(self.lib_directory, file_name))
            for candidate in candidates:
                if os.path.isfile(candidate):
                    return candidate
        return None


def _strip_comments(text: str) -> str:
    def _replace(match: re.Match[str]) -> str:
        token = match.group(0)
        if token.startswith(("//", "/*")):
            return ""
        return token

    return _COMMENT_OR_LITERAL.sub(_replace, text)


def _strip_actions(text: str) -> str:
    """Drop ``@header { ... }`` style blocks, honouring nested braces."""
    pieces: List[str] = []
    position = 0
    for match in _NAMED_ACTION.finditer(text):
        if match.start() < position:
            continue
        pieces.append(text[position:match.start()])
        depth = 1
        index = match.end()
        while index < len(text) and depth:
            if text[index] == "{":
                depth += 1
            elif text[index] == "}":
                depth -= 1
            index += 1
        position = index
    pieces.append(text[position:])
    return "".join(pieces)


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


__all__ = ["GRAMMAR_EXTENSIONS", "GrammarError", "load_grammar", "parse_header"]
