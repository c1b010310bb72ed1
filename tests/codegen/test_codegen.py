"""Tests for grammardeps.codegen."""

from __future__ import annotations

import logging

import pytest
from jinja2 import TemplateNotFound

import grammardeps.codegen.targets as targets_module
from grammardeps.codegen import (
    CodeGenerator,
    TargetDescriptor,
    TemplateCatalog,
    available_targets,
    get_target,
    register_target,
)
from grammardeps.models import Grammar, GrammarType


def _grammar(grammar_type: GrammarType = GrammarType.COMBINED, **options: str) -> Grammar:
    return Grammar(name="T", file_name="T.g4", type=grammar_type, options=dict(options))


def test_template_catalog_renders_and_reports_definitions() -> None:
    catalog = TemplateCatalog({"codeFileExtension": ".java", "greeting": "Hello {{ name }}"})

    assert catalog.is_defined("codeFileExtension")
    assert not catalog.is_defined("headerFile")
    assert catalog.render("codeFileExtension") == ".java"
    assert catalog.render("greeting", name="T") == "Hello T"
    with pytest.raises(TemplateNotFound):
        catalog.render("headerFileExtension")


def test_get_target_accepts_aliases_and_rejects_unknown() -> None:
    assert get_target("Java").language == "Java"
    assert get_target("c++").language == "Cpp"
    assert get_target("python").language == "Python3"
    assert get_target("csharp").language == "CSharp"
    assert get_target("Klingon") is None
    assert get_target(None) is None


def test_only_header_targets_need_headers() -> None:
    cpp = get_target("Cpp")
    java = get_target("Java")

    assert cpp.needs_header()
    assert cpp.header_file_extension == ".h"
    assert cpp.code_file_extension == ".cpp"
    assert not java.needs_header()
    assert java.header_file_extension is None
    assert not java.templates.is_defined("headerFile")


def test_register_target_adds_language(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(targets_module, "_TARGETS", dict(targets_module._TARGETS))
    descriptor = TargetDescriptor("Rust", TemplateCatalog({"codeFileExtension": ".rs"}))
    register_target(descriptor)

    assert "Rust" in available_targets()
    assert CodeGenerator(_grammar(), "Rust").recognizer_file_name() == "TParser.rs"


def test_generator_defaults_to_java() -> None:
    generator = CodeGenerator(_grammar())

    assert generator.language == "Java"
    assert generator.target is get_target("Java")


def test_generator_uses_language_option() -> None:
    generator = CodeGenerator(_grammar(language="Python3"))

    assert generator.recognizer_file_name() == "TParser.py"


def test_generator_file_names_for_combined_grammar() -> None:
    generator = CodeGenerator(_grammar(), "Cpp")

    assert generator.recognizer_file_name(True) == "TParser.h"
    assert generator.recognizer_file_name(False) == "TParser.cpp"
    assert generator.vocab_file_name() == "T.tokens"
    assert generator.listener_file_name(True) == "TListener.h"
    assert generator.base_listener_file_name(False) == "TBaseListener.cpp"
    assert generator.visitor_file_name(False) == "TVisitor.cpp"
    assert generator.base_visitor_file_name(True) == "TBaseVisitor.h"


def test_generator_recognizer_name_for_parser_and_lexer_grammars() -> None:
    assert CodeGenerator(_grammar(GrammarType.PARSER)).recognizer_file_name() == "T.java"
    assert CodeGenerator(_grammar(GrammarType.LEXER)).recognizer_file_name() == "T.java"


def test_generator_without_target_logs_warning(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(logging.getLogger("grammardeps"), "propagate", True)
    with caplog.at_level("WARNING", logger="grammardeps.codegen"):
        generator = CodeGenerator(_grammar(), "Klingon")

    assert generator.target is None
    assert "Klingon" in caplog.text
    with pytest.raises(RuntimeError):
        generator.recognizer_file_name()
