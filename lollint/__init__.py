"""lollint - a strict linter for LOLCODE.

The package is a three-stage pipeline: source text is tokenized, the
tokens are parsed into an immutable AST, and the AST is linted into
lists of errors and warnings.

Submodules
----------
tokens
    ``Token`` / ``TokenKind`` and the closed keyword table.

lexer
    ``tokenize(source)`` - total, never raises.

ast_nodes
    Frozen-dataclass AST: expressions, statements, ``Block``,
    ``Program``, and the ``Position`` every node carries.

parser
    ``parse(tokens)`` - recursive descent, raises ``ParseError`` on the
    first grammar violation.

linter
    ``lint(program)`` - variable tracking, control-flow shape checks and
    constant-comparison folding, returning a ``LintResult``.

errors
    ``ParseError`` hierarchy and the ``Diagnostic`` record.

visitor, stats, report, main
    Traversal helpers, code statistics, rendering and the CLI.

Usage
-----
Command-line::

    lollint lint cat.lol
    python -m lollint lint cat.lol --json

Programmatic::

    from lollint import analyze

    program, result = analyze(source)
    for line in result.errors + result.warnings:
        print(line)
"""

from __future__ import annotations

from typing import Tuple

__version__: str = "0.1.0"

from lollint.ast_nodes import Program  # noqa: E402
from lollint.errors import ParseError  # noqa: E402
from lollint.lexer import tokenize  # noqa: E402
from lollint.linter import LintResult, lint  # noqa: E402
from lollint.parser import parse  # noqa: E402


def analyze(source: str) -> Tuple[Program, LintResult]:
    """Tokenize, parse and lint *source*.

    Raises :class:`ParseError` when the source does not parse.
    """
    program = parse(tokenize(source))
    return program, lint(program)


__all__: list[str] = [
    "__version__",
    "LintResult",
    "ParseError",
    "Program",
    "analyze",
    "lint",
    "parse",
    "tokenize",
]
