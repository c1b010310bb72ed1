"""Build dependencies of a grammar: the files it reads and the files it generates.

For a combined grammar ``T.g4`` with no token vocabulary import the report is::

    TParser.java : T.g4
    T.tokens : T.g4
    TLexer.java : T.g4
    TLexer.tokens : T.g4
    TListener.java : T.g4
    TBaseListener.java : T.g4

With ``tokenVocab = A`` and a library directory the inputs come first::

    T.g4: libdir/A.tokens

and an output directory is honoured on every generated file::

    out/TParser.java : T.g4

Build tools read this make-compatible output; the order of lines carries no
meaning for them but is kept stable for reproducible reports.
"""

from __future__ import annotations

import os
import re
import threading
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, Template, TemplateError, TemplateNotFound

from .codegen.generator import CodeGenerator
from .config import CURRENT_DIRECTORY, ToolConfig
from .logging import get_logger
from .models import (
    VOCAB_FILE_EXTENSION,
    DependencyResult,
    Grammar,
    GrammarType,
    file_name_suffix,
)

REPORT_TEMPLATE = "dependencies"

_LOGGER = get_logger("dependencies")
_UNESCAPED_SPACE = re.compile(r"(?<!\\) ")


class ReportError(RuntimeError):
    """Raised when the dependency report template cannot be loaded or rendered."""


def groom_qualified_file_name(directory: str, file_name: str) -> str:
    """Qualify ``file_name`` with ``directory`` in a form build tools can consume.

    ``.`` is dropped entirely, a trailing ``.`` component is cut off and spaces
    in a directory whose last component contains one are escaped as ``\\ ``.
    """
    if directory == CURRENT_DIRECTORY:
        return file_name

    if os.path.basename(directory) == CURRENT_DIRECTORY:
        directory = directory[: directory.rfind(".")]

    if " " in os.path.basename(directory.rstrip(os.sep)):
        directory = _UNESCAPED_SPACE.sub(r"\\ ", directory)

    return os.path.join(directory, file_name)


class DependencyResolver:
    """Computes inputs, outputs and the dependency report for one grammar."""

    def __init__(
        self,
        grammar: Grammar,
        config: ToolConfig | None = None,
        generator: CodeGenerator | None = None,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        self.grammar = grammar
        self.config = config or ToolConfig()
        self.generator = generator or CodeGenerator(grammar, self.config.language)
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._report_template: Template | None = None
        self._template_lock = threading.Lock()

    def compute_outputs(self) -> Optional[List[str]]:
        """Files generation writes for the grammar, in generation order."""
        target = self.generator.target
        if target is None:
            _LOGGER.info("No target for %s; nothing will be generated", self.grammar.file_name)
            return []

        generator = self.generator
        grammar = self.grammar
        needs_header = target.needs_header()
        files: List[str] = []

        if needs_header:
            files.append(self.output_file(generator.recognizer_file_name(True)))
        files.append(self.output_file(generator.recognizer_file_name(False)))
        # always written to the base output directory
        files.append(self.output_file(generator.vocab_file_name()))

        header_extension: Optional[str] = None
        code_extension = target.templates.render("codeFileExtension")
        if target.templates.is_defined("headerFile"):
            header_extension = target.templates.render("headerFileExtension")
            suffix = file_name_suffix(grammar.type)
            files.append(self.output_file(grammar.name + suffix + header_extension))

        if grammar.is_combined():
            # the implicit lexer: TLexer.java, TLexer.tokens and TLexer.h
            lexer = grammar.name + file_name_suffix(GrammarType.LEXER)
            files.append(self.output_file(lexer + code_extension))
            files.append(self.output_file(lexer + VOCAB_FILE_EXTENSION))
            if header_extension is not None:
                files.append(self.output_file(lexer + header_extension))

        if self.config.generate_listener:
            if needs_header:
                files.append(self.output_file(generator.listener_file_name(True)))
            files.append(self.output_file(generator.listener_file_name(False)))
            if needs_header:
                files.append(self.output_file(generator.base_listener_file_name(True)))
            files.append(self.output_file(generator.base_listener_file_name(False)))

        if self.config.generate_visitor:
            if needs_header:
                files.append(self.output_file(generator.visitor_file_name(True)))
            files.append(self.output_file(generator.visitor_file_name(False)))
            if needs_header:
                files.append(self.output_file(generator.base_visitor_file_name(True)))
            files.append(self.output_file(generator.base_visitor_file_name(False)))

        for imported in grammar.all_imported_grammars() or []:
            files.append(self.output_file(imported.file_name))

        if not files:
            return None
        return files

    def compute_inputs(self) -> Optional[List[str]]:
        """Files read for the grammar other than imported grammars: ``tokenVocab`` files."""
        files: List[str] = []

        token_vocab = self.grammar.get_option("tokenVocab")
        if token_vocab is not None:
            file_name = token_vocab + VOCAB_FILE_EXTENSION
            lib_directory = self.config.lib_directory
            if lib_directory == CURRENT_DIRECTORY:
                files.append(file_name)
            else:
                files.append(os.path.join(lib_directory, file_name))

        if not files:
            return None
        return files

    def compute_dependencies(self) -> Optional[List[str]]:
        """Every file read for the grammar: vocabulary files, then imported grammars."""
        files = self.compute_inputs() or []

        for imported in self.grammar.all_imported_grammars() or []:
            files.append(groom_qualified_file_name(self.config.lib_directory, imported.file_name))

        if not files:
            return None
        return files

    def output_file(self, file_name: str) -> str:
        """Path of a generated file, honouring the configured output directory."""
        output_directory = self.config.resolve_output_directory(self.grammar.file_name)
        if output_directory == CURRENT_DIRECTORY:
            # no directory for the grammar itself; -o may still apply to the file
            output_directory = self.config.resolve_output_directory(file_name)

        if output_directory == CURRENT_DIRECTORY:
            return file_name

        return groom_qualified_file_name(output_directory, file_name)

    def resolve(self) -> DependencyResult:
        inputs = self.compute_dependencies()
        outputs = self.compute_outputs()
        return DependencyResult(
            grammar_file_name=self.grammar.file_name,
            inputs=tuple(inputs) if inputs is not None else None,
            outputs=tuple(outputs) if outputs is not None else None,
        )

    def render_report(self) -> str:
        """Render the make-compatible dependency report for the grammar."""
        template = self._load_report_template()
        try:
            return template.render(
                in_files=self.compute_dependencies(),
                out_files=self.compute_outputs(),
                grammar_file_name=self.grammar.file_name,
            )
        except TemplateError as exc:
            raise ReportError(f"Failed to render dependency report: {exc}") from exc

    def _load_report_template(self) -> Template:
        if self._report_template is not None:
            return self._report_template
        with self._template_lock:
            if self._report_template is None:
                _LOGGER.debug("Loading %s template from %s", REPORT_TEMPLATE, self.templates_dir)
                env = Environment(
                    loader=FileSystemLoader(str(self.templates_dir)),
                    autoescape=False,
                    trim_blocks=True,
                    lstrip_blocks=True,
                )
                try:
                    self._report_template = env.get_template(f"{REPORT_TEMPLATE}.j2")
                except TemplateNotFound as exc:
                    raise ReportError(
                        f"Dependency report template not found in {self.templates_dir}"
                    ) from exc
                except (OSError, TemplateError) as exc:
                    raise ReportError(f"Failed to load dependency report template: {exc}") from exc
        return self._report_template


def compute_outputs(grammar: Grammar, config: ToolConfig | None = None) -> Optional[List[str]]:
    return DependencyResolver(grammar, config).compute_outputs()


def compute_inputs(grammar: Grammar, config: ToolConfig | None = None) -> Optional[List[str]]:
    return DependencyResolver(grammar, config).compute_inputs()


def compute_dependencies(grammar: Grammar, config: ToolConfig | None = None) -> Optional[List[str]]:
    return DependencyResolver(grammar, config).compute_dependencies()


def render_report(grammar: Grammar, config: ToolConfig | None = None) -> str:
    return DependencyResolver(grammar, config).render_report()


__all__ = [
    "DependencyResolver",
    "REPORT_TEMPLATE",
    "ReportError",
    "compute_dependencies",
    "compute_inputs",
    "compute_outputs",
    "groom_qualified_file_name",
    "render_report",
]
