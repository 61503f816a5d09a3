#!/usr/bin/env python3
"""lollint/main.py - CLI entry-point for the lol-lint tool.

Usage examples
--------------
    # Lint a LOLCODE file
    lollint lint cat.lol

    # Machine-readable results with code statistics
    lollint lint cat.lol --json --stats

    # Show tokens and the AST before the results
    lollint lint cat.lol --debug

    # Dump the token stream
    lollint tokens cat.lol

    # Parse a file and pretty-print the AST as an S-expression
    lollint dump-sexp cat.lol --indent 4

    # Show version and exit
    lollint --version

Exit codes
----------
    0   Success (no lint errors; warnings allowed).
    1   One or more lint errors were reported.
    2   The file could not be read, or parsing failed.

The module doubles as ``python -m lollint`` via the companion
``lollint/__main__.py`` which simply calls :func:`main`.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import textwrap
import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from lollint import __version__
from lollint.ast_nodes import Program
from lollint.errors import ParseError
from lollint.lexer import tokenize
from lollint.linter import lint
from lollint.parser import parse
from lollint.report import (
    DiagnosticFormatter,
    ResultPrinter,
    SexpDumper,
    TokenDumper,
    get_colors,
    json_report,
)
from lollint.stats import collect_stats
from lollint.tokens import Token

_log = logging.getLogger("lollint")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_LINT_ERRORS: int = 1
EXIT_FAILURE: int = 2


# ===========================================================================
# Configuration
# ===========================================================================

@dataclass(frozen=True)
class OutputOptions:
    """Rendering switches collected from the command line."""

    json: bool = False
    stats: bool = False
    color: bool = True
    debug: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "OutputOptions":
        return cls(
            json=getattr(args, "json", False),
            stats=getattr(args, "stats", False),
            color=not getattr(args, "no_color", False),
            debug=getattr(args, "debug", False),
        )


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the root ``lollint`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    root = logging.getLogger("lollint")
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
                datefmt="%H:%M:%S",
            )
        )
        root.addHandler(handler)


def _read_source(path: str) -> str:
    """Read a LOLCODE file as UTF-8.

    Raises ``OSError`` or ``UnicodeDecodeError`` for the caller to report.
    """
    _log.info("Reading %s", path)
    return Path(path).expanduser().read_text(encoding="utf-8")


def _source_line(source: str, line: int) -> Optional[str]:
    lines = source.split("\n")
    if 0 < line <= len(lines):
        return lines[line - 1]
    return None


def _load_and_parse(
    path: str, formatter: DiagnosticFormatter, quiet: bool = False,
) -> Optional[Tuple[str, List[Token], Program]]:
    """Read, tokenize and parse *path*, reporting failures on stderr.

    Returns ``None`` when the file is unreadable or does not parse.
    """
    try:
        source = _read_source(path)
    except (OSError, UnicodeDecodeError) as exc:
        if not quiet:
            formatter.error(f"Could not read file '{path}': {exc}")
        return None

    tokens = tokenize(source)
    _log.info("Lexed %d tokens", len(tokens))

    try:
        program = parse(tokens)
    except ParseError as exc:
        _log.info("Parsing failed: %s", exc)
        if not quiet:
            line = _source_line(source, exc.pos.line) if exc.pos is not None else None
            message = exc.message if exc.pos is not None else f"{exc.message} (at end of file)"
            formatter.error(f"Parsing failed: {message}", exc.pos, line)
        return None

    return source, tokens, program


# ===========================================================================
# Command handlers
# ===========================================================================

def cmd_lint(args: argparse.Namespace) -> int:
    """Handle the 'lint' command: tokenize, parse, lint, report."""
    options = OutputOptions.from_args(args)
    formatter = DiagnosticFormatter(
        get_colors(sys.stderr, force_off=not options.color), filename=args.file,
    )

    # in JSON mode failures leave stdout empty; only the exit code reports them
    loaded = _load_and_parse(args.file, formatter, quiet=options.json)
    if loaded is None:
        return EXIT_FAILURE
    source, tokens, program = loaded

    printer = ResultPrinter(get_colors(sys.stdout, force_off=not options.color))
    if options.debug:
        # stdout carries only the JSON record in JSON mode
        debug_stream = sys.stderr if options.json else sys.stdout
        debug_printer = ResultPrinter(
            get_colors(debug_stream, force_off=not options.color), debug_stream,
        )
        debug_printer.print_heading("Tokens")
        TokenDumper(debug_stream).dump(tokens)
        debug_stream.write("\n")
        debug_printer.print_heading("AST")
        SexpDumper(debug_stream).dump(program)
        debug_stream.write("\n")

    result = lint(program)
    _log.info(
        "Lint complete: %d error(s), %d warning(s)",
        len(result.errors), len(result.warnings),
    )

    stats = collect_stats(program, source) if options.stats else None

    if options.json:
        sys.stdout.write(json_report(args.file, result, stats) + "\n")
    else:
        printer.print_result(result)
        if stats is not None:
            printer.print_stats(stats)

    return EXIT_LINT_ERRORS if result.has_errors() else EXIT_OK


def cmd_tokens(args: argparse.Namespace) -> int:
    """Handle the 'tokens' command."""
    formatter = DiagnosticFormatter(get_colors(sys.stderr), filename=args.file)
    try:
        source = _read_source(args.file)
    except (OSError, UnicodeDecodeError) as exc:
        formatter.error(f"Could not read file '{args.file}': {exc}")
        return EXIT_FAILURE

    TokenDumper().dump(tokenize(source))
    return EXIT_OK


def cmd_dump_sexp(args: argparse.Namespace) -> int:
    """Handle the 'dump-sexp' command."""
    formatter = DiagnosticFormatter(get_colors(sys.stderr), filename=args.file)
    loaded = _load_and_parse(args.file, formatter)
    if loaded is None:
        return EXIT_FAILURE
    _, _, program = loaded

    SexpDumper(indent=args.indent, line_width=args.width).dump(program)
    return EXIT_OK


# ===========================================================================
# Argument parser
# ===========================================================================

def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the lol-lint CLI."""

    parser = argparse.ArgumentParser(
        prog="lollint",
        description="A strict linter for LOLCODE",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              %(prog)s lint cat.lol
              %(prog)s lint cat.lol --json --stats
              %(prog)s tokens cat.lol
              %(prog)s dump-sexp cat.lol
        """),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Shared options
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "file",
        help="Input LOLCODE file",
    )
    common.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="available commands",
        metavar="<command>",
    )

    # ── lint ─────────────────────────────────────────────────────────────

    p_lint = subparsers.add_parser(
        "lint",
        parents=[common],
        help="Check a LOLCODE file for syntax and semantic problems",
        description=(
            "Parse a LOLCODE file and report undeclared and unused "
            "variables, redeclarations, constant comparisons and empty "
            "control-flow bodies."
        ),
    )
    p_lint.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output results as JSON for CI/CD integration",
    )
    p_lint.add_argument(
        "--stats",
        action="store_true",
        default=False,
        help="Show code statistics (lines, variables, loops, ...)",
    )
    p_lint.add_argument(
        "--no-color",
        action="store_true",
        default=False,
        help="Disable colored output",
    )
    p_lint.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Show tokens and AST before the results",
    )
    p_lint.set_defaults(func=cmd_lint)

    # ── tokens ───────────────────────────────────────────────────────────

    p_tokens = subparsers.add_parser(
        "tokens",
        parents=[common],
        help="Print the token stream of a LOLCODE file",
    )
    p_tokens.set_defaults(func=cmd_tokens)

    # ── dump-sexp ────────────────────────────────────────────────────────

    p_dump_sexp = subparsers.add_parser(
        "dump-sexp",
        parents=[common],
        help="Parse a file and dump the AST in S-expression form",
    )
    p_dump_sexp.add_argument(
        "--indent",
        type=int,
        default=2,
        help="Indentation width (default: 2)",
    )
    p_dump_sexp.add_argument(
        "--width",
        type=int,
        default=80,
        help="Line width for wrapping (default: 80)",
    )
    p_dump_sexp.set_defaults(func=cmd_dump_sexp)

    return parser


# ===========================================================================
# Main
# ===========================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the lol-lint CLI.

    Parameters
    ----------
    argv : sequence of str, optional
        Command-line arguments. Defaults to sys.argv[1:].

    Returns
    -------
    int
        Exit code (see module docstring).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    _configure_logging(args.verbose)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        sys.stderr.write("\nInterrupted.\n")
        return 130
    except BrokenPipeError:
        # Handle piping to head, etc.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return EXIT_OK
    except Exception as e:
        sys.stderr.write(f"\nInternal error: {e}\n")
        sys.stderr.write("This is a bug in lol-lint. Please report it.\n\n")
        traceback.print_exc()
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
