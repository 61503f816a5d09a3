#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
lollint/visitor.py
==================

Visitor pattern infrastructure for LOLCODE AST traversal.

Provides:
- ``ASTVisitor`` - base with one ``visit_X`` hook per node type
- ``DepthFirstVisitor`` - generic traversal that visits all children
"""

from __future__ import annotations

from typing import Any

from lollint import ast_nodes as A

__all__ = [
    "ASTVisitor",
    "DepthFirstVisitor",
]


class ASTVisitor:
    """Base class for LOLCODE AST visitors.

    Each ``visit_X`` method corresponds to an AST node type.  The default
    implementations call ``generic_visit``, which does nothing.  Subclasses
    override the methods they care about.
    """

    def visit(self, node: A.Node) -> Any:
        """Dispatch to the appropriate visit method."""
        return node.accept(self)

    def generic_visit(self, node: A.Node) -> Any:
        """Called when no specific visitor method exists.

        Default: return None.  Override for catch-all behavior.
        """
        return None

    # --- Top-level ---

    def visit_program(self, node: A.Program) -> Any:
        return self.generic_visit(node)

    def visit_block(self, node: A.Block) -> Any:
        return self.generic_visit(node)

    # --- Statements ---

    def visit_declaration(self, node: A.Declaration) -> Any:
        return self.generic_visit(node)

    def visit_assignment(self, node: A.Assignment) -> Any:
        return self.generic_visit(node)

    def visit_visible(self, node: A.Visible) -> Any:
        return self.generic_visit(node)

    def visit_o_rly(self, node: A.ORly) -> Any:
        return self.generic_visit(node)

    def visit_loop(self, node: A.Loop) -> Any:
        return self.generic_visit(node)

    def visit_expression_statement(self, node: A.ExpressionStatement) -> Any:
        return self.generic_visit(node)

    # --- Expressions ---

    def visit_number_literal(self, node: A.NumberLiteral) -> Any:
        return self.generic_visit(node)

    def visit_string_literal(self, node: A.StringLiteral) -> Any:
        return self.generic_visit(node)

    def visit_identifier(self, node: A.Identifier) -> Any:
        return self.generic_visit(node)

    def visit_binary_expr(self, node: A.BinaryExpr) -> Any:
        return self.generic_visit(node)


class DepthFirstVisitor(ASTVisitor):
    """Visitor that traverses all children in depth-first order.

    Override ``enter`` / ``leave`` for pre/post-order processing, or a
    ``visit_X`` method (calling ``generic_visit`` to keep descending).
    """

    def generic_visit(self, node: A.Node) -> Any:
        """Visit all children."""
        self.enter(node)
        for child in node.children():
            self.visit(child)
        self.leave(node)
        return None

    def enter(self, node: A.Node) -> None:
        """Called before visiting children."""
        pass

    def leave(self, node: A.Node) -> None:
        """Called after visiting children."""
        pass
