#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
lollint/report.py
=================

Rendering of pipeline output.  Nothing here analyses code; every class
consumes tokens, a parsed :class:`~lollint.ast_nodes.Program`, a
:class:`~lollint.linter.LintResult` or :class:`~lollint.stats.Stats`
and writes text.

- ``ResultPrinter``      - coloured human-readable lint results
- ``DiagnosticFormatter`` - GCC-style ``file:line:col: error:`` messages
- ``json_report``         - structured record for CI consumption
- ``TokenDumper``         - one token per line
- ``SexpDumper``          - canonical S-expression form of the AST
"""

from __future__ import annotations

import json
import os
import sys
from typing import Any, Dict, Iterable, List, Optional, TextIO

import sexpdata
from sexpdata import Symbol

from lollint import ast_nodes as A
from lollint.linter import LintResult
from lollint.stats import Stats
from lollint.tokens import Token


# ═══════════════════════════════════════════════════════════════════════════
# TERMINAL COLORS
# ═══════════════════════════════════════════════════════════════════════════

class _Colors:
    """ANSI color codes, disabled when not writing to a TTY."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def _code(self, code: str) -> str:
        return code if self.enabled else ""

    @property
    def RESET(self) -> str:
        return self._code("\033[0m")

    @property
    def BOLD(self) -> str:
        return self._code("\033[1m")

    @property
    def RED(self) -> str:
        return self._code("\033[31m")

    @property
    def GREEN(self) -> str:
        return self._code("\033[32m")

    @property
    def YELLOW(self) -> str:
        return self._code("\033[33m")

    @property
    def CYAN(self) -> str:
        return self._code("\033[36m")


def get_colors(stream: Optional[TextIO] = None, force_off: bool = False) -> _Colors:
    """Get color codes appropriate for the given stream (stdout by default)."""
    if force_off:
        return _Colors(enabled=False)
    if stream is None:
        stream = sys.stdout
    try:
        is_tty = hasattr(stream, "isatty") and stream.isatty()
    except (AttributeError, ValueError):
        is_tty = False
    return _Colors(enabled=is_tty and os.environ.get("NO_COLOR") is None)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


# ═══════════════════════════════════════════════════════════════════════════
# DIAGNOSTIC FORMATTER
# ═══════════════════════════════════════════════════════════════════════════

class DiagnosticFormatter:
    """Format tool-level failures for terminal output.

    Produces GCC/Clang-style diagnostic messages:

        cat.lol:4:15: error: Expected 'OIC', but found keyword 'KTHXBYE'
          KTHXBYE
          ^
    """

    def __init__(self, colors: _Colors, stream: Optional[TextIO] = None,
                 filename: str = "<input>") -> None:
        self.colors = colors
        self.stream = stream if stream is not None else sys.stderr
        self.filename = filename

    def error(self, message: str, pos: Optional[A.Position] = None,
              source_line: Optional[str] = None) -> None:
        c = self.colors
        loc = self._format_location(pos)
        self.stream.write(
            f"{c.BOLD}{loc}{c.RED}error:{c.RESET}{c.BOLD} {message}{c.RESET}\n"
        )
        if source_line is not None and pos is not None:
            self._print_source_context(source_line, pos)

    def _format_location(self, pos: Optional[A.Position]) -> str:
        if pos is None:
            return f"{self.filename}: "
        return f"{self.filename}:{pos.line}:{pos.column}: "

    def _print_source_context(self, source_line: str, pos: A.Position) -> None:
        """Print source context with a caret."""
        c = self.colors
        self.stream.write(f"  {source_line.rstrip()}\n")
        padding = " " * (pos.column - 1 + 2)  # +2 for leading indent
        self.stream.write(f"{c.GREEN}{padding}^{c.RESET}\n")


# ═══════════════════════════════════════════════════════════════════════════
# LINT RESULTS
# ═══════════════════════════════════════════════════════════════════════════

class ResultPrinter:
    """Human-readable lint results: errors, warnings, summary, statistics."""

    def __init__(self, colors: _Colors, stream: Optional[TextIO] = None) -> None:
        self.colors = colors
        self.stream = stream if stream is not None else sys.stdout

    def print_result(self, result: LintResult) -> None:
        c = self.colors
        errors, warnings = result.errors, result.warnings
        for line in errors:
            self.stream.write(f"{c.RED}{line}{c.RESET}\n")
        for line in warnings:
            self.stream.write(f"{c.YELLOW}{line}{c.RESET}\n")

        if not errors and not warnings:
            self.stream.write(
                f"{c.GREEN}{c.BOLD}✓{c.RESET} No linting issues found\n"
            )
            return

        self.stream.write("\n")
        error_text = _plural(len(errors), "error")
        warning_text = _plural(len(warnings), "warning")
        if errors:
            error_text = f"{c.RED}{error_text}{c.RESET}"
        if warnings:
            warning_text = f"{c.YELLOW}{warning_text}{c.RESET}"
        self.stream.write(f"{error_text}, {warning_text}\n")

    def print_stats(self, stats: Stats) -> None:
        c = self.colors
        self.stream.write(f"\n{c.CYAN}{c.BOLD}--- Statistics ---{c.RESET}\n")
        self.stream.write(f"Lines of code:  {stats.lines_of_code}\n")
        self.stream.write(f"Variables:      {stats.variables}\n")
        self.stream.write(f"Loops:          {stats.loops}\n")
        self.stream.write(f"Conditionals:   {stats.conditionals}\n")
        self.stream.write(f"Expressions:    {stats.expressions}\n")

    def print_heading(self, title: str) -> None:
        c = self.colors
        self.stream.write(f"{c.CYAN}{c.BOLD}--- {title} ---{c.RESET}\n")


def json_report(filename: str, result: LintResult,
                stats: Optional[Stats] = None) -> str:
    """Structured lint record, pretty-printed JSON."""
    payload: Dict[str, Any] = {
        "file": filename,
        "errors": result.errors,
        "warnings": result.warnings,
        "stats": stats.to_dict() if stats is not None else None,
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


# ═══════════════════════════════════════════════════════════════════════════
# TOKEN DUMPER
# ═══════════════════════════════════════════════════════════════════════════

class TokenDumper:
    """Write one token per line as ``line:col KIND 'text'``."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def dump(self, tokens: Iterable[Token]) -> None:
        for tok in tokens:
            self.stream.write(f"{tok}\n")


# ═══════════════════════════════════════════════════════════════════════════
# S-EXPRESSION DUMPER
# ═══════════════════════════════════════════════════════════════════════════

def _op_symbol(op: A.BinOp) -> Symbol:
    return Symbol(op.value.lower().replace(" ", "-"))


def to_sexp(node: A.Node) -> Any:
    """Convert an AST node to a nested list (S-expression structure).

    Identifiers and numbers become symbols (numbers keep their raw
    text), string literals stay Python strings.
    """
    if isinstance(node, A.Program):
        return [Symbol("program"), node.version, to_sexp(node.body)]
    if isinstance(node, A.Block):
        return [Symbol("block")] + [to_sexp(s) for s in node.statements]
    if isinstance(node, A.Declaration):
        parts = [Symbol("declare"), Symbol(node.name)]
        if node.value is not None:
            parts.append(to_sexp(node.value))
        return parts
    if isinstance(node, A.Assignment):
        parts = [Symbol("assign"), Symbol(node.name)]
        if node.value is not None:
            parts.append(to_sexp(node.value))
        return parts
    if isinstance(node, A.Visible):
        return [Symbol("visible")] + [to_sexp(e) for e in node.expressions]
    if isinstance(node, A.ORly):
        parts = [Symbol("o-rly"), [Symbol("ya-rly")] + [to_sexp(s) for s in node.ya_rly]]
        if node.no_wai is not None:
            parts.append([Symbol("no-wai")] + [to_sexp(s) for s in node.no_wai])
        return parts
    if isinstance(node, A.Loop):
        return [Symbol("loop")] + [to_sexp(s) for s in node.body]
    if isinstance(node, A.ExpressionStatement):
        return [Symbol("it"), to_sexp(node.expression)]
    if isinstance(node, A.BinaryExpr):
        return [_op_symbol(node.op), to_sexp(node.left), to_sexp(node.right)]
    if isinstance(node, (A.NumberLiteral, A.Identifier)):
        return Symbol(node.text)
    if isinstance(node, A.StringLiteral):
        return node.text
    raise TypeError(f"not an AST node: {type(node).__name__}")


class SexpDumper:
    """Dump a program as a pretty-printed S-expression.

    Forms that fit in ``line_width`` stay on one line; longer forms put
    each child on its own indented line.
    """

    def __init__(self, stream: Optional[TextIO] = None,
                 indent: int = 2,
                 line_width: int = 80) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.indent = indent
        self.line_width = line_width

    def dump(self, node: A.Node) -> None:
        self.stream.write(self.format(node))
        self.stream.write("\n")

    def format(self, node: A.Node) -> str:
        return self._format_sexp(to_sexp(node), 0)

    def _format_sexp(self, sexp: Any, depth: int) -> str:
        indent_str = " " * (self.indent * depth)
        single = sexpdata.dumps(sexp)
        if not isinstance(sexp, list) or len(single) + len(indent_str) <= self.line_width:
            return f"{indent_str}{single}"

        lines: List[str] = [f"{indent_str}({sexpdata.dumps(sexp[0])}"]
        for item in sexp[1:]:
            lines.append(self._format_sexp(item, depth + 1))
        lines[-1] += ")"
        return "\n".join(lines)
