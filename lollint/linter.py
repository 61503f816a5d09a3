"""
LOLCODE semantic linter.

Performs one traversal of a parsed :class:`~lollint.ast_nodes.Program`
followed by a trailing sweep:

1. Variable tracking - redeclarations, assignments to and uses of
   undeclared names, declared-but-unused names
2. Control-flow shape - empty ``YA RLY`` bodies, ``O RLY?`` without
   ``NO WAI``, empty loop bodies
3. Constant folding - ``BOTH SAEM`` / ``DIFFRINT`` statements whose two
   operands are literals of the same kind

Variable tracking is flow-insensitive and whole-program: a name counts
as declared once any earlier statement in traversal order declared it,
regardless of branches or loops.  The ``declared``/``used`` sets live on
a :class:`Linter` built fresh for every :func:`lint` call.

The tree is never mutated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from lollint import ast_nodes as A
from lollint.errors import Diagnostic, Severity
from lollint.visitor import ASTVisitor

logger = logging.getLogger(__name__)

__all__ = ["LintResult", "Linter", "fold_comparison", "lint"]

# Identifiers treated as boolean constants by constant folding.
_TROOF_CONSTANTS = frozenset({"WIN", "FAIL"})


# ============================================================================
# RESULT
# ============================================================================


@dataclass
class LintResult:
    """Diagnostics from one linter run, in emission order."""

    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        return [str(d) for d in self.diagnostics if d.severity.is_error()]

    @property
    def warnings(self) -> List[str]:
        return [str(d) for d in self.diagnostics if not d.severity.is_error()]

    def has_errors(self) -> bool:
        return any(d.severity.is_error() for d in self.diagnostics)

    def to_dict(self) -> Dict[str, List[str]]:
        return {"errors": self.errors, "warnings": self.warnings}


# ============================================================================
# CONSTANT FOLDING
# ============================================================================


def _render_operand(expr: A.Expression) -> str:
    if isinstance(expr, A.StringLiteral):
        return f'"{expr.text}"'
    return expr.text


def _same_literal_kind(left: A.Expression, right: A.Expression) -> Optional[bool]:
    """Compare two operands if both are literals of one kind.

    Returns whether their texts are equal, or ``None`` when the pair is
    not foldable.
    """
    if isinstance(left, A.NumberLiteral) and isinstance(right, A.NumberLiteral):
        return left.text == right.text
    if isinstance(left, A.StringLiteral) and isinstance(right, A.StringLiteral):
        return left.text == right.text
    if (
        isinstance(left, A.Identifier)
        and isinstance(right, A.Identifier)
        and left.text == right.text
        and left.text in _TROOF_CONSTANTS
    ):
        return True
    return None


def fold_comparison(expr: A.Expression) -> Optional[Diagnostic]:
    """Warn when a comparison's outcome is fixed by its literal operands.

    Only the comparison node itself is inspected; operands are not
    folded recursively.
    """
    if not isinstance(expr, A.BinaryExpr) or not expr.op.is_comparison:
        return None
    equal = _same_literal_kind(expr.left, expr.right)
    if equal is None:
        return None
    outcome = equal if expr.op is A.BinOp.BOTH_SAEM else not equal
    message = (
        f"{expr.op.value} {_render_operand(expr.left)} AN "
        f"{_render_operand(expr.right)} is always {'true' if outcome else 'false'}"
    )
    return Diagnostic(Severity.WARNING, message, expr.pos)


# ============================================================================
# LINTER
# ============================================================================


class Linter(ASTVisitor):
    """Single-use analyzer context for one program."""

    def __init__(self) -> None:
        self.result = LintResult()
        # name -> declaration position; insertion order drives the unused sweep
        self.declared: Dict[str, A.Position] = {}
        self.used: Set[str] = set()

    def error(self, message: str, pos: A.Position) -> None:
        self.result.diagnostics.append(Diagnostic(Severity.ERROR, message, pos))

    def warning(self, message: str, pos: Optional[A.Position] = None) -> None:
        self.result.diagnostics.append(Diagnostic(Severity.WARNING, message, pos))

    def run(self, program: A.Program) -> LintResult:
        self.visit(program)
        self.check_unused_variables()
        logger.debug(
            "lint finished: %d declared, %d used, %d diagnostics",
            len(self.declared), len(self.used), len(self.result.diagnostics),
        )
        return self.result

    # --- Top-level ---

    def visit_program(self, node: A.Program) -> None:
        self.visit(node.body)

    def visit_block(self, node: A.Block) -> None:
        for stmt in node.statements:
            self.visit(stmt)

    # --- Statements ---

    def visit_declaration(self, node: A.Declaration) -> None:
        if node.name in self.declared:
            self.error(f"variable '{node.name}' declared twice", node.pos)
        else:
            self.declared[node.name] = node.pos
        if node.value is not None:
            self.visit(node.value)

    def visit_assignment(self, node: A.Assignment) -> None:
        if node.name not in self.declared:
            self.error(f"assignment to undeclared variable '{node.name}'", node.pos)
        else:
            self.used.add(node.name)
        if node.value is not None:
            self.visit(node.value)

    def visit_visible(self, node: A.Visible) -> None:
        for expr in node.expressions:
            self.visit(expr)

    def visit_o_rly(self, node: A.ORly) -> None:
        if node.ya_rly.is_empty:
            self.warning("YA RLY block is empty", node.pos)
        self.visit(node.ya_rly)
        if node.no_wai is not None:
            self.visit(node.no_wai)
        else:
            self.warning("O RLY? without NO WAI branch", node.pos)

    def visit_loop(self, node: A.Loop) -> None:
        if node.body.is_empty:
            self.warning("empty loop body", node.pos)
        self.visit(node.body)

    def visit_expression_statement(self, node: A.ExpressionStatement) -> None:
        self.visit(node.expression)
        folded = fold_comparison(node.expression)
        if folded is not None:
            self.result.diagnostics.append(folded)

    # --- Expressions ---

    def visit_identifier(self, node: A.Identifier) -> None:
        if node.text not in self.declared:
            self.error(f"use of undeclared variable '{node.text}'", node.pos)
        else:
            self.used.add(node.text)

    def visit_binary_expr(self, node: A.BinaryExpr) -> None:
        self.visit(node.left)
        self.visit(node.right)

    # literals are always valid; generic_visit ignores them

    # --- Trailing sweep ---

    def check_unused_variables(self) -> None:
        for name in self.declared:
            if name not in self.used:
                self.warning(f"variable '{name}' declared but never used")


def lint(program: A.Program) -> LintResult:
    """Run every lint rule over *program*.  Never raises on bad input."""
    return Linter().run(program)
