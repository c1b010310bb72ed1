"""File naming conventions of the code generator for a grammar and target."""

from __future__ import annotations

from typing import Optional

from ..logging import get_logger
from ..models import VOCAB_FILE_EXTENSION, Grammar
from .targets import TargetDescriptor, get_target

DEFAULT_LANGUAGE = "Java"

_LOGGER = get_logger("codegen")


class CodeGenerator:
    """Answers which file names generation would produce for one grammar."""

    def __init__(self, grammar: Grammar, language: str | None = None) -> None:
        self.grammar = grammar
        self.language = language or grammar.get_option("language") or DEFAULT_LANGUAGE
        self._target = get_target(self.language)
        if self._target is None:
            _LOGGER.warning(
                "No code generation target for language %r (grammar %s)",
                self.language,
                grammar.file_name,
            )

    @property
    def target(self) -> Optional[TargetDescriptor]:
        return self._target

    def recognizer_file_name(self, header: bool = False) -> str:
        return self.grammar.recognizer_name + self._extension(header)

    def vocab_file_name(self) -> str:
        return self.grammar.name + VOCAB_FILE_EXTENSION

    def listener_file_name(self, header: bool = False) -> str:
        return self.grammar.name + "Listener" + self._extension(header)

    def base_listener_file_name(self, header: bool = False) -> str:
        return self.grammar.name + "BaseListener" + self._extension(header)

    def visitor_file_name(self, header: bool = False) -> str:
        return self.grammar.name + "Visitor" + self._extension(header)

    def base_visitor_file_name(self, header: bool = False) -> str:
        return self.grammar.name + "BaseVisitor" + self._extension(header)

    def _extension(self, header: bool) -> str:
        if self._target is None:
            raise RuntimeError(f"No code generation target for language {self.language!r}")
        template = "headerFileExtension" if header else "codeFileExtension"
        return self._target.templates.render(template)
