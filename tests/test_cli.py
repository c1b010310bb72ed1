"""CLI behaviour tests."""

from __future__ import annotations

import json

import pytest

from grammardeps.cli import _build_parser, main


def test_cli_accepts_tool_flags() -> None:
    parser = _build_parser()
    args = parser.parse_args(["-o", "out", "-lib", "libs", "--visitor", "--no-listener", "T.g4", "U.g4"])

    assert args.output_directory == "out"
    assert args.lib_directory == "libs"
    assert args.generate_visitor is True
    assert args.generate_listener is False
    assert args.grammars == ["T.g4", "U.g4"]


def test_cli_leaves_unset_switches_to_config() -> None:
    args = _build_parser().parse_args(["T.g4"])

    assert args.generate_listener is None
    assert args.generate_visitor is None
    assert args.exact_output_dir is None
    assert args.verbose is False


def test_main_prints_dependency_report(grammar_builder, monkeypatch, capsys) -> None:
    grammar_builder.write(
        {
            "T.g4": """
                grammar T;
                options { tokenVocab = A; }
                r : 'a' ;
            """,
        }
    )
    monkeypatch.chdir(grammar_builder.path())

    main(["T.g4", "-lib", "libs", "--no-listener"])

    assert capsys.readouterr().out == (
        "T.g4: libs/A.tokens\n"
        "TParser.java : T.g4\n"
        "T.tokens : T.g4\n"
        "TLexer.java : T.g4\n"
        "TLexer.tokens : T.g4\n"
    )


def test_main_honours_output_directory_and_config_file(grammar_builder, monkeypatch, capsys) -> None:
    grammar_builder.write(
        {
            "P.g4": "parser grammar P;\nr : 'a' ;\n",
            ".grammardeps.yml": "listener: false\nvisitor: true\n",
        }
    )
    monkeypatch.chdir(grammar_builder.path())

    main(["P.g4", "-o", "gen"])

    assert capsys.readouterr().out == (
        "gen/P.java : P.g4\n"
        "gen/P.tokens : P.g4\n"
        "gen/PVisitor.java : P.g4\n"
        "gen/PBaseVisitor.java : P.g4\n"
    )


def test_main_emits_json(grammar_builder, monkeypatch, capsys) -> None:
    grammar_builder.write({"P.g4": "parser grammar P;\nr : 'a' ;\n"})
    monkeypatch.chdir(grammar_builder.path())

    main(["P.g4", "--json", "--no-listener", "--language", "Python3"])

    assert json.loads(capsys.readouterr().out) == [
        {"grammar": "P.g4", "inputs": None, "outputs": ["P.py", "P.tokens"]}
    ]


def test_main_exits_on_missing_grammar(grammar_builder, monkeypatch, capsys) -> None:
    monkeypatch.chdir(grammar_builder.path())

    with pytest.raises(SystemExit) as excinfo:
        main(["Missing.g4"])

    assert excinfo.value.code == 1
    assert "Missing.g4" in capsys.readouterr().err


def test_main_exits_on_invalid_config(grammar_builder, monkeypatch, capsys) -> None:
    grammar_builder.write({".grammardeps.yml": "- not\n- a mapping\n"})
    monkeypatch.chdir(grammar_builder.path())

    with pytest.raises(SystemExit) as excinfo:
        main(["T.g4"])

    assert excinfo.value.code == 1
    assert "mapping" in capsys.readouterr().err
