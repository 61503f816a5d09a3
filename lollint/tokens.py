# lollint/tokens.py
"""
LOLCODE token model.

Tokens are the output alphabet of :mod:`lollint.lexer` and the input
alphabet of :mod:`lollint.parser`.  Every token carries the 1-based
source position of its first character.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet

from lollint.ast_nodes import Position


# ── Token kinds ──────────────────────────────────────────────────

class TokenKind(Enum):
    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    NUMBER = "number"
    STRING = "string"
    COMMENT = "comment"
    NEWLINE = "newline"


# Closed keyword set.  ``OUTTA`` is not a member: the loop closer
# ``IM OUTTA YR LOOP`` reads it as an identifier.
KEYWORDS: FrozenSet[str] = frozenset({
    "HAI", "KTHXBYE",
    "VISIBLE", "GIMMEH",
    "I", "HAS", "A", "ITZ", "R", "AN",
    "SUM", "OF", "DIFF", "PRODUKT", "QUOSHUNT", "MOD",
    "BOTH", "SAEM", "DIFFRINT",
    "O", "RLY?", "YA", "RLY", "MEBBE", "NO", "WAI", "OIC",
    "IM", "IN", "YR", "LOOP", "UPPIN", "NERFIN", "TIL", "WILE",
    "HOW", "DUZ", "FOUND", "MKAY",
    "OBTW", "TLDR",
})

# Keywords that may open a bare expression statement.
OPERATOR_KEYWORDS: FrozenSet[str] = frozenset({
    "SUM", "DIFF", "PRODUKT", "QUOSHUNT", "MOD", "BOTH", "DIFFRINT",
})


def is_keyword(word: str) -> bool:
    """Return True if *word* belongs to the fixed keyword set."""
    return word in KEYWORDS


# ── Token ────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class Token:
    """A single lexeme with its kind and source position."""

    kind: TokenKind
    text: str
    pos: Position

    @property
    def line(self) -> int:
        return self.pos.line

    @property
    def column(self) -> int:
        return self.pos.column

    def is_keyword(self, *words: str) -> bool:
        """True if this is a keyword token spelling one of *words*."""
        return self.kind is TokenKind.KEYWORD and self.text in words

    def is_identifier(self, name: str) -> bool:
        return self.kind is TokenKind.IDENTIFIER and self.text == name

    @property
    def is_significant(self) -> bool:
        """False for newlines and comments, which never form statements."""
        return self.kind not in (TokenKind.NEWLINE, TokenKind.COMMENT)

    def describe(self) -> str:
        """Short human-readable form used in parse error messages."""
        if self.kind is TokenKind.NEWLINE:
            return "newline"
        if self.kind is TokenKind.STRING:
            return f'string "{self.text}"'
        if self.kind is TokenKind.COMMENT:
            return "comment"
        return f"{self.kind.value} '{self.text}'"

    def __str__(self) -> str:
        if self.kind is TokenKind.NEWLINE:
            return f"{self.pos} NEWLINE"
        return f"{self.pos} {self.kind.name} {self.text!r}"
