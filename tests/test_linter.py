# tests/test_linter.py
"""
Tests for the LOLCODE linter (lollint.linter).
"""

from __future__ import annotations

import pytest

from lollint import analyze
from lollint.ast_nodes import (
    BinaryExpr,
    BinOp,
    Identifier,
    NumberLiteral,
    Position,
    StringLiteral,
)
from lollint.errors import Diagnostic, Severity
from lollint.linter import LintResult, Linter, fold_comparison, lint
from lollint.parser import parse_source
from tests.conftest import (
    DECLARE_AND_PRINT_LOL,
    DOUBLE_DECLARE_LOL,
    EMPTY_ORLY_LOL,
    FULL_ORLY_LOL,
    KITCHEN_SINK_LOL,
    LOOP_LOL,
    MINIMAL_LOL,
    UNUSED_LOL,
    lint_source,
)


def wrap(*lines: str) -> str:
    return "HAI 1.2\n" + "\n".join(lines) + "\nKTHXBYE\n"


# ═══════════════════════════════════════════════════════════════════════
#  Clean programs
# ═══════════════════════════════════════════════════════════════════════

class TestCleanPrograms:

    @pytest.mark.parametrize("src", [
        MINIMAL_LOL,
        DECLARE_AND_PRINT_LOL,
        FULL_ORLY_LOL,
        LOOP_LOL,
        KITCHEN_SINK_LOL,
    ])
    def test_no_diagnostics(self, src):
        result = lint_source(src)
        assert result.errors == []
        assert result.warnings == []
        assert not result.has_errors()

    def test_analyze_returns_program_and_result(self):
        program, result = analyze(DECLARE_AND_PRINT_LOL)
        assert len(program.body.statements) == 2
        assert result.to_dict() == {"errors": [], "warnings": []}


# ═══════════════════════════════════════════════════════════════════════
#  Variable tracking
# ═══════════════════════════════════════════════════════════════════════

class TestVariables:

    def test_unused_variable(self):
        result = lint_source(UNUSED_LOL)
        assert result.errors == []
        assert result.warnings == ["warning: variable 'X' declared but never used"]

    def test_double_declaration(self):
        result = lint_source(DOUBLE_DECLARE_LOL)
        assert result.errors == ["error: variable 'X' declared twice (line 3, column 1)"]
        assert result.warnings == []

    def test_use_of_undeclared(self):
        result = lint_source(wrap("VISIBLE Y"))
        assert result.errors == ["error: use of undeclared variable 'Y' (line 2, column 9)"]
        assert result.has_errors()

    def test_assignment_to_undeclared(self):
        result = lint_source(wrap("Z R 4"))
        assert result.errors == ["error: assignment to undeclared variable 'Z' (line 2, column 1)"]

    def test_assignment_counts_as_use(self):
        result = lint_source(wrap("I HAS A X", "X R 4"))
        assert result.errors == []
        assert result.warnings == []

    def test_use_before_declaration(self):
        result = lint_source(wrap("VISIBLE X", "I HAS A X"))
        assert result.errors == ["error: use of undeclared variable 'X' (line 2, column 9)"]
        assert result.warnings == ["warning: variable 'X' declared but never used"]

    def test_initializer_sees_its_own_name(self):
        result = lint_source(wrap("I HAS A X ITZ X"))
        assert result.errors == []
        assert result.warnings == []

    def test_declarations_are_flow_insensitive(self):
        result = lint_source(wrap(
            "O RLY?", "YA RLY", "I HAS A X", "NO WAI", "VISIBLE 1", "OIC",
            "VISIBLE X",
        ))
        assert result.errors == []
        assert result.warnings == []

    def test_undeclared_inside_expression(self):
        result = lint_source(wrap("I HAS A X ITZ SUM OF Y AN 1", "VISIBLE X"))
        assert result.errors == ["error: use of undeclared variable 'Y' (line 2, column 22)"]

    def test_unused_warnings_follow_declaration_order(self):
        result = lint_source(wrap("I HAS A B", "I HAS A Z", "I HAS A C"))
        assert result.warnings == [
            "warning: variable 'B' declared but never used",
            "warning: variable 'Z' declared but never used",
            "warning: variable 'C' declared but never used",
        ]

    def test_unused_warnings_come_last(self):
        result = lint_source(wrap("I HAS A X", "BOTH SAEM 1 AN 1"))
        assert result.warnings == [
            "warning: BOTH SAEM 1 AN 1 is always true (line 3, column 1)",
            "warning: variable 'X' declared but never used",
        ]


# ═══════════════════════════════════════════════════════════════════════
#  Control-flow shape
# ═══════════════════════════════════════════════════════════════════════

class TestControlFlow:

    def test_empty_o_rly(self):
        result = lint_source(EMPTY_ORLY_LOL)
        assert result.errors == []
        assert result.warnings == [
            "warning: YA RLY block is empty (line 2, column 1)",
            "warning: O RLY? without NO WAI branch (line 2, column 1)",
        ]

    def test_empty_ya_rly_with_no_wai(self):
        result = lint_source(wrap("O RLY?", "YA RLY", "NO WAI", "VISIBLE 1", "OIC"))
        assert result.warnings == ["warning: YA RLY block is empty (line 2, column 1)"]

    def test_empty_loop(self):
        result = lint_source(wrap("IM IN YR LOOP", "IM OUTTA YR LOOP"))
        assert result.warnings == ["warning: empty loop body (line 2, column 1)"]

    def test_nested_findings_precede_missing_no_wai(self):
        result = lint_source(wrap(
            "O RLY?", "YA RLY",
            "IM IN YR LOOP", "IM OUTTA YR LOOP",
            "OIC",
        ))
        assert result.warnings == [
            "warning: empty loop body (line 4, column 1)",
            "warning: O RLY? without NO WAI branch (line 2, column 1)",
        ]

    def test_findings_inside_loop(self):
        result = lint_source(wrap("IM IN YR LOOP", "VISIBLE Q", "IM OUTTA YR LOOP"))
        assert result.errors == ["error: use of undeclared variable 'Q' (line 3, column 9)"]
        assert result.warnings == []


# ═══════════════════════════════════════════════════════════════════════
#  Constant folding
# ═══════════════════════════════════════════════════════════════════════

class TestConstantFolding:

    @pytest.mark.parametrize("stmt,expected", [
        ("BOTH SAEM 5 AN 5", "BOTH SAEM 5 AN 5 is always true"),
        ("BOTH SAEM 5 AN 6", "BOTH SAEM 5 AN 6 is always false"),
        ("DIFFRINT 5 AN 5", "DIFFRINT 5 AN 5 is always false"),
        ("DIFFRINT 1 AN 2", "DIFFRINT 1 AN 2 is always true"),
        ('BOTH SAEM "a" AN "b"', 'BOTH SAEM "a" AN "b" is always false'),
        ('DIFFRINT "a" AN "a"', 'DIFFRINT "a" AN "a" is always false'),
    ])
    def test_literal_comparisons(self, stmt, expected):
        result = lint_source(wrap(stmt))
        assert result.warnings == [f"warning: {expected} (line 2, column 1)"]

    def test_numbers_compare_as_text(self):
        result = lint_source(wrap("BOTH SAEM 1 AN 1.0"))
        assert result.warnings == ["warning: BOTH SAEM 1 AN 1.0 is always false (line 2, column 1)"]

    def test_troof_constants(self):
        result = lint_source(wrap("BOTH SAEM WIN AN WIN"))
        assert result.warnings == ["warning: BOTH SAEM WIN AN WIN is always true (line 2, column 1)"]
        # WIN is still an identifier for variable tracking
        assert len(result.errors) == 2

    def test_mixed_literal_kinds_are_not_folded(self):
        result = lint_source(wrap('BOTH SAEM 5 AN "5"'))
        assert result.warnings == []

    def test_variables_are_not_folded(self):
        result = lint_source(wrap("I HAS A X ITZ 1", "BOTH SAEM X AN 1"))
        assert result.warnings == []

    def test_only_statement_root_is_folded(self):
        result = lint_source(wrap("SUM OF 1 AN BOTH SAEM 1 AN 1"))
        assert result.warnings == []

    def test_comparisons_outside_expression_statements(self):
        result = lint_source(wrap("VISIBLE BOTH SAEM 1 AN 1", "I HAS A X ITZ DIFFRINT 2 AN 2", "VISIBLE X"))
        assert result.warnings == []

    def test_arithmetic_is_not_folded(self):
        result = lint_source(wrap("SUM OF 1 AN 1"))
        assert result.warnings == []


class TestFoldComparison:

    def test_direct_call(self):
        expr = BinaryExpr(
            BinOp.BOTH_SAEM,
            StringLiteral("x", Position(1, 11)),
            StringLiteral("x", Position(1, 19)),
            Position(1, 1),
        )
        diag = fold_comparison(expr)
        assert diag == Diagnostic(Severity.WARNING, 'BOTH SAEM "x" AN "x" is always true', Position(1, 1))

    def test_non_comparison(self):
        expr = BinaryExpr(
            BinOp.MOD, NumberLiteral("1", Position(1, 8)),
            NumberLiteral("1", Position(1, 13)), Position(1, 1),
        )
        assert fold_comparison(expr) is None

    def test_non_binary(self):
        assert fold_comparison(Identifier("X", Position(1, 1))) is None

    def test_different_troof_constants(self):
        expr = BinaryExpr(
            BinOp.BOTH_SAEM, Identifier("WIN", Position(1, 11)),
            Identifier("FAIL", Position(1, 18)), Position(1, 1),
        )
        assert fold_comparison(expr) is None


# ═══════════════════════════════════════════════════════════════════════
#  Result and analyzer context
# ═══════════════════════════════════════════════════════════════════════

class TestLintResult:

    def test_each_run_is_independent(self):
        program = parse_source(UNUSED_LOL)
        first = lint(program)
        second = lint(program)
        assert first.warnings == second.warnings
        assert len(second.warnings) == 1

    def test_program_is_not_mutated(self):
        program = parse_source(DOUBLE_DECLARE_LOL)
        before = repr(program)
        lint(program)
        assert repr(program) == before

    def test_linter_state(self):
        linter = Linter()
        linter.run(parse_source(wrap("I HAS A X", "I HAS A Y", "VISIBLE X")))
        assert list(linter.declared) == ["X", "Y"]
        assert linter.used == {"X"}

    def test_empty_result(self):
        result = LintResult()
        assert result.errors == []
        assert result.warnings == []
        assert not result.has_errors()

    def test_diagnostic_rendering(self):
        assert str(Diagnostic(Severity.ERROR, "boom", Position(2, 3))) == "error: boom (line 2, column 3)"
        assert str(Diagnostic(Severity.WARNING, "hmm")) == "warning: hmm"
        assert Diagnostic(Severity.WARNING, "hmm").to_dict() == {
            "severity": "warning", "message": "hmm",
        }
