"""CLI entrypoint for grammardeps."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .dependencies import DependencyResolver, ReportError
from .grammar import GrammarError, load_grammar
from .logging import configure_logging, get_logger

_LOGGER = get_logger("cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grammardeps",
        description="List the files a grammar depends on and the files generated from it.",
    )
    parser.add_argument(
        "grammars",
        nargs="+",
        help="Grammar files (.g4 or .g) to report on.",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        dest="output_directory",
        default=None,
        help="Directory generated files are written to.",
    )
    parser.add_argument(
        "-lib",
        "--lib-dir",
        dest="lib_directory",
        default=None,
        help="Directory searched for token vocabularies and imported grammars.",
    )
    parser.add_argument(
        "--listener",
        dest="generate_listener",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Include listener sources (default: on).",
    )
    parser.add_argument(
        "--visitor",
        dest="generate_visitor",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Include visitor sources (default: off).",
    )
    parser.add_argument(
        "--exact-output-dir",
        dest="exact_output_dir",
        action="store_const",
        const=True,
        default=None,
        help="Write every generated file directly into the output directory.",
    )
    parser.add_argument(
        "--language",
        default=None,
        help="Target language, overriding the grammar's language option.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path.cwd(),
        help="Path to .grammardeps.yml or the directory holding it.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit results as JSON instead of make-style dependency lines.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for grammardeps."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        config = load_config(args.config).merged(
            output_directory=args.output_directory,
            lib_directory=args.lib_directory,
            generate_listener=args.generate_listener,
            generate_visitor=args.generate_visitor,
            exact_output_dir=args.exact_output_dir,
            language=args.language,
        )
    except ConfigError as exc:
        parser.exit(1, f"grammardeps: {exc}\n")

    results = []
    for grammar_path in args.grammars:
        try:
            grammar = load_grammar(grammar_path, config.lib_directory)
        except GrammarError as exc:
            parser.exit(1, f"grammardeps: {exc}\n")
        resolver = DependencyResolver(grammar, config)
        if args.json:
            results.append(resolver.resolve().as_dict())
            continue
        try:
            report = resolver.render_report()
        except ReportError as exc:
            parser.exit(1, f"grammardeps: {exc}\nRun with --verbose for more details.\n")
        _LOGGER.debug("Rendered dependencies for %s", grammar.file_name)
        sys.stdout.write(report)

    if args.json:
        print(json.dumps(results, indent=2))


if __name__ == "__main__":
    main(sys.argv[1:])
