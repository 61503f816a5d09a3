"""Code statistics derived from a parsed program and its source text."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict

from lollint import ast_nodes as A
from lollint.visitor import DepthFirstVisitor

__all__ = ["Stats", "collect_stats", "count_lines_of_code"]


@dataclass(frozen=True)
class Stats:
    lines_of_code: int = 0
    variables: int = 0
    loops: int = 0
    conditionals: int = 0
    expressions: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def count_lines_of_code(source: str) -> int:
    """Non-blank lines that do not start with a ``BTW``/``OBTW`` comment."""
    count = 0
    for line in source.split("\n"):
        stripped = line.strip()
        if stripped and not stripped.startswith(("BTW", "OBTW")):
            count += 1
    return count


class _StatsCollector(DepthFirstVisitor):

    def __init__(self) -> None:
        self.variables = 0
        self.loops = 0
        self.conditionals = 0
        self.expressions = 0

    def visit_declaration(self, node: A.Declaration) -> None:
        self.variables += 1

    def visit_assignment(self, node: A.Assignment) -> None:
        if node.value is not None:
            self.expressions += 1

    def visit_visible(self, node: A.Visible) -> None:
        self.expressions += len(node.expressions)

    def visit_expression_statement(self, node: A.ExpressionStatement) -> None:
        self.expressions += 1

    def visit_o_rly(self, node: A.ORly) -> None:
        self.conditionals += 1
        self.generic_visit(node)

    def visit_loop(self, node: A.Loop) -> None:
        self.loops += 1
        self.generic_visit(node)


def collect_stats(program: A.Program, source: str) -> Stats:
    collector = _StatsCollector()
    collector.visit(program)
    return Stats(
        lines_of_code=count_lines_of_code(source),
        variables=collector.variables,
        loops=collector.loops,
        conditionals=collector.conditionals,
        expressions=collector.expressions,
    )
