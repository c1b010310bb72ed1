"""Tests for grammardeps.models."""

from __future__ import annotations

from grammardeps.models import (
    GRAMMAR_TYPE_SUFFIXES,
    DependencyResult,
    Grammar,
    GrammarType,
    file_name_suffix,
)


def test_suffix_table_covers_every_grammar_type() -> None:
    assert set(GRAMMAR_TYPE_SUFFIXES) == set(GrammarType)
    assert file_name_suffix(GrammarType.LEXER) == "Lexer"
    assert file_name_suffix(GrammarType.PARSER) == "Parser"
    assert file_name_suffix(GrammarType.COMBINED) == "Parser"


def test_recognizer_name_only_suffixes_combined_grammars() -> None:
    assert Grammar("T", "T.g4", GrammarType.COMBINED).recognizer_name == "TParser"
    assert Grammar("TParser", "TParser.g4", GrammarType.PARSER).recognizer_name == "TParser"
    assert Grammar("TLexer", "TLexer.g4", GrammarType.LEXER).recognizer_name == "TLexer"


def test_all_imported_grammars_is_none_without_imports() -> None:
    assert Grammar("T", "T.g4", GrammarType.COMBINED).all_imported_grammars() is None


def test_all_imported_grammars_keeps_first_occurrence() -> None:
    d = Grammar("D", "D.g4", GrammarType.PARSER)
    b = Grammar("B", "B.g4", GrammarType.PARSER, imports=[d])
    c = Grammar("C", "C.g4", GrammarType.PARSER, imports=[d])
    t = Grammar("T", "T.g4", GrammarType.COMBINED, imports=[b, c, d])

    assert [g.name for g in t.all_imported_grammars()] == ["B", "D", "C"]


def test_dependency_result_as_dict_keeps_absent_lists() -> None:
    result = DependencyResult("T.g4", inputs=None, outputs=("T.java",))

    assert result.as_dict() == {"grammar": "T.g4", "inputs": None, "outputs": ["T.java"]}
