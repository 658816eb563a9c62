"""Command-line interface: compile dictionaries and check text files."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from ._errors import NosynError
from ._types import Options


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nosyn",
        description="Report mixed synonyms in Japanese text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Compile the Sudachi synonym dictionary once
  nosyn compile synonyms.txt data/

  # Check plain-text files, preferring one surface form
  nosyn check notes.txt --dict data/ --prefer ユーザー

  # Rewrite files in place
  nosyn check drafts/*.txt --dict data/ --fix
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_parser = subparsers.add_parser(
        "compile", help="Compile synonyms.txt into a data directory"
    )
    compile_parser.add_argument("source", type=Path, help="Sudachi synonyms.txt")
    compile_parser.add_argument("data_dir", type=Path, help="Output directory")
    compile_parser.add_argument(
        "--force", action="store_true", help="Recompile even if up to date"
    )

    check_parser = subparsers.add_parser(
        "check", help="Check plain-text files (markup is read as raw text)"
    )
    check_parser.add_argument("files", type=Path, nargs="+")
    check_parser.add_argument(
        "--dict", dest="dictionary", type=Path, default=None,
        help="synonyms.txt or compiled data directory (default: $NOSYN_DATA)",
    )
    check_parser.add_argument(
        "--config", type=Path, help="JSON file with rule options"
    )
    check_parser.add_argument(
        "--allow", action="append", default=[], metavar="WORD",
        help="Surface form allowed to coexist with its synonyms",
    )
    check_parser.add_argument(
        "--prefer", action="append", default=[], metavar="WORD",
        help="Surface form every synonym should be replaced with",
    )
    for flag in ("alphabet", "number", "lexeme"):
        check_parser.add_argument(
            f"--no-allow-{flag}", dest=f"allow_{flag}",
            action="store_const", const=False, default=None,
            help=f"Report {flag} variants as synonyms",
        )
    check_parser.add_argument(
        "--fix", action="store_true", help="Rewrite files with the fixes applied"
    )
    return parser


def build_options(args: argparse.Namespace) -> Options:
    """Options from ``--config`` with command-line overrides applied."""
    options = Options()
    if args.config is not None:
        with open(args.config, encoding="utf-8") as f:
            options = Options.from_mapping(json.load(f))

    overrides: dict[str, object] = {}
    if args.allow:
        overrides["allows"] = options.allows | frozenset(args.allow)
    if args.prefer:
        overrides["prefer_words"] = options.prefer_words + tuple(args.prefer)
    for name in ("allow_alphabet", "allow_number", "allow_lexeme"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    return dataclasses.replace(options, **overrides)


def line_column(text: str, position: int) -> tuple[int, int]:
    """1-based line and column of ``position``."""
    line = text.count("\n", 0, position) + 1
    column = position - (text.rfind("\n", 0, position) + 1) + 1
    return line, column


def run_compile(args: argparse.Namespace) -> int:
    from ._loader import compile_data

    compile_data(args.source, args.data_dir, force=args.force)
    return 0


def run_check(args: argparse.Namespace) -> int:
    from . import load
    from ._document import check_text
    from ._report import apply_fixes
    from ._tokenizers import default_tokenizers

    options = build_options(args)
    index = load(args.dictionary)
    tokenizers = default_tokenizers()

    n_reported = 0
    for path in args.files:
        text = path.read_text(encoding="utf-8")
        diagnostics = check_text(text, index, tokenizers, options)
        if args.fix:
            fixed = apply_fixes(text, diagnostics)
            if fixed != text:
                path.write_text(fixed, encoding="utf-8")
                logging.info("Fixed %s", path)
            continue
        for diagnostic in diagnostics:
            line, column = line_column(text, diagnostic.position)
            print(f"{path}:{line}:{column}: {diagnostic.message}")
        n_reported += len(diagnostics)

    return 1 if n_reported else 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.command == "compile":
            return run_compile(args)
        return run_check(args)
    except NosynError as exc:
        logging.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
