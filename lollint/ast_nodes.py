# lollint/ast_nodes.py
"""
LOLCODE Abstract Syntax Tree node definitions.

Design invariants
-----------------
* Every node is a frozen dataclass (immutable after construction).
* Nodes that carry children use tuples, never lists, so immutability
  holds through nesting.
* Every node records its source ``Position`` for diagnostics.
* The tree is strictly owning and acyclic: no node is shared or
  back-referenced.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Optional, Tuple, Union


# ── Source Position ──────────────────────────────────────────────

@dataclass(frozen=True, slots=True, order=True)
class Position:
    """1-based line/column of a token or node."""
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


# ── Base ─────────────────────────────────────────────────────────

class Node:
    """Common behaviour for AST nodes.

    ``visit_name`` selects the ``visit_<name>`` method a visitor
    dispatches to.
    """

    __slots__ = ()
    visit_name: str = "node"

    def accept(self, visitor: Any) -> Any:
        method = getattr(visitor, f"visit_{self.visit_name}", None)
        if method is None:
            return visitor.generic_visit(self)
        return method(self)

    def children(self) -> Iterator["Node"]:
        return iter(())


# ── Enums ────────────────────────────────────────────────────────

class BinOp(Enum):
    SUM = "SUM OF"
    DIFF = "DIFF OF"
    PRODUKT = "PRODUKT OF"
    QUOSHUNT = "QUOSHUNT OF"
    MOD = "MOD OF"
    BOTH_SAEM = "BOTH SAEM"
    DIFFRINT = "DIFFRINT"

    @property
    def is_comparison(self) -> bool:
        return self in (BinOp.BOTH_SAEM, BinOp.DIFFRINT)


# ── Expressions ──────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class NumberLiteral(Node):
    text: str
    pos: Position
    visit_name = "number_literal"


@dataclass(frozen=True, slots=True)
class StringLiteral(Node):
    text: str
    pos: Position
    visit_name = "string_literal"


@dataclass(frozen=True, slots=True)
class Identifier(Node):
    text: str
    pos: Position
    visit_name = "identifier"


@dataclass(frozen=True, slots=True)
class BinaryExpr(Node):
    """Prefix binary operation, e.g. ``SUM OF a AN b``."""
    op: BinOp
    left: "Expression"
    right: "Expression"
    pos: Position
    visit_name = "binary_expr"

    def children(self) -> Iterator[Node]:
        yield self.left
        yield self.right


Literal = Union[NumberLiteral, StringLiteral]
Expression = Union[NumberLiteral, StringLiteral, Identifier, BinaryExpr]


# ── Statements ───────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class Block(Node):
    statements: Tuple["Statement", ...]
    pos: Position
    visit_name = "block"

    def __iter__(self) -> Iterator["Statement"]:
        return iter(self.statements)

    @property
    def is_empty(self) -> bool:
        return not self.statements

    def children(self) -> Iterator[Node]:
        return iter(self.statements)


@dataclass(frozen=True, slots=True)
class Declaration(Node):
    """``I HAS A <name> [ITZ <value>]``"""
    name: str
    value: Optional[Expression]
    pos: Position
    visit_name = "declaration"

    def children(self) -> Iterator[Node]:
        if self.value is not None:
            yield self.value


@dataclass(frozen=True, slots=True)
class Assignment(Node):
    """``<name> R <value>``"""
    name: str
    value: Optional[Expression]
    pos: Position
    visit_name = "assignment"

    def children(self) -> Iterator[Node]:
        if self.value is not None:
            yield self.value


@dataclass(frozen=True, slots=True)
class Visible(Node):
    expressions: Tuple[Expression, ...]
    pos: Position
    visit_name = "visible"

    def children(self) -> Iterator[Node]:
        return iter(self.expressions)


@dataclass(frozen=True, slots=True)
class ORly(Node):
    """``O RLY?`` / ``YA RLY`` ... [``NO WAI`` ...] / ``OIC``"""
    ya_rly: Block
    no_wai: Optional[Block]
    pos: Position
    visit_name = "o_rly"

    def children(self) -> Iterator[Node]:
        yield self.ya_rly
        if self.no_wai is not None:
            yield self.no_wai


@dataclass(frozen=True, slots=True)
class Loop(Node):
    """``IM IN YR LOOP`` ... ``IM OUTTA YR LOOP``"""
    body: Block
    pos: Position
    visit_name = "loop"

    def children(self) -> Iterator[Node]:
        yield self.body


@dataclass(frozen=True, slots=True)
class ExpressionStatement(Node):
    """A bare expression; its value goes to the implicit ``IT`` variable."""
    expression: Expression
    pos: Position
    visit_name = "expression_statement"

    target = "IT"

    def children(self) -> Iterator[Node]:
        yield self.expression


Statement = Union[Declaration, Assignment, Visible, ORly, Loop, ExpressionStatement]


# ── Program ──────────────────────────────────────────────────────

DEFAULT_VERSION = "1.2"


@dataclass(frozen=True, slots=True)
class Program(Node):
    version: str
    body: Block
    pos: Position
    visit_name = "program"

    def children(self) -> Iterator[Node]:
        yield self.body
