# lollint/errors.py
"""
Error types and diagnostic records for the lol-lint pipeline.

Two tiers
─────────
┌──────────────────────────────────────────────────────────────────────┐
│  LolError (base)                                                     │
│  └── ParseError          - fatal grammar violation, aborts the parse │
│      ├── UnexpectedTokenError  - wrong token where another expected  │
│      └── UnexpectedEOFError    - input ended while a token expected  │
│                                                                      │
│  Diagnostic              - non-fatal linter error/warning record     │
└──────────────────────────────────────────────────────────────────────┘

A ``ParseError`` is raised by the parser on the first structural
violation and no partial tree is ever returned.  ``Diagnostic`` records
are collected by the linter; none of them halts analysis.

The lexer never fails, so there is no lexical error class.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Dict, Optional

from lollint.ast_nodes import Position


# ═══════════════════════════════════════════════════════════════════════════════
# SEVERITY
# ═══════════════════════════════════════════════════════════════════════════════

@unique
class Severity(Enum):
    """Severity of a linter diagnostic."""

    ERROR = "error"
    WARNING = "warning"

    def is_error(self) -> bool:
        return self is Severity.ERROR


# ═══════════════════════════════════════════════════════════════════════════════
# EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════════════

class LolError(Exception):
    """Base exception for all lol-lint errors."""

    def __init__(self, message: str, pos: Optional[Position] = None) -> None:
        super().__init__(message)
        self.message = message
        self.pos = pos

    @property
    def line(self) -> Optional[int]:
        return self.pos.line if self.pos is not None else None

    @property
    def column(self) -> Optional[int]:
        return self.pos.column if self.pos is not None else None

    def __str__(self) -> str:
        return self.message


class ParseError(LolError):
    """Fatal, unrecoverable grammar violation.

    ``pos`` is the offending token's position, or ``None`` when the
    input ran out first.
    """

    @property
    def at_end(self) -> bool:
        return self.pos is None

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "line": self.line, "column": self.column}

    def __str__(self) -> str:
        if self.pos is None:
            return f"Parse error: {self.message} (at end of file)"
        return (
            f"Parse error at line {self.pos.line}, "
            f"column {self.pos.column}: {self.message}"
        )


class UnexpectedTokenError(ParseError):
    """A token other than the expected one was found."""

    def __init__(self, expected: str, found: str, pos: Position) -> None:
        super().__init__(f"Expected {expected}, but found {found}", pos)
        self.expected = expected
        self.found = found


class UnexpectedEOFError(ParseError):
    """Input ended where a token was still required."""

    def __init__(self, expected: str) -> None:
        super().__init__(f"Expected {expected}, but reached end of file")
        self.expected = expected


# ═══════════════════════════════════════════════════════════════════════════════
# DIAGNOSTICS
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single linter finding.

    ``str(diag)`` is the stable text contract, e.g.::

        error: use of undeclared variable 'X' (line 3, column 9)
        warning: variable 'Y' declared but never used
    """

    severity: Severity
    message: str
    pos: Optional[Position] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.pos is not None:
            result["line"] = self.pos.line
            result["column"] = self.pos.column
        return result

    def __str__(self) -> str:
        text = f"{self.severity.value}: {self.message}"
        if self.pos is not None:
            text += f" (line {self.pos.line}, column {self.pos.column})"
        return text
