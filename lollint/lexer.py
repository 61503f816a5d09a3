# lollint/lexer.py
"""
LOLCODE lexer: source text → ordered list of :class:`~lollint.tokens.Token`.

Lexing is total: it never raises.  Characters outside the lexical
alphabet are dropped, and unterminated strings or ``OBTW`` comments
simply run to end of input.  No end-of-input token is emitted; the
parser treats list exhaustion as end of input.

Line breaks are significant (they terminate statements) and become
``NEWLINE`` tokens; all other whitespace is discarded.
"""

from __future__ import annotations

from typing import List, Optional

from lollint.ast_nodes import Position
from lollint.tokens import Token, TokenKind, is_keyword


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_alpha(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _is_alnum(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


class Lexer:
    """Single-use cursor over one source string."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1

    # ── cursor ───────────────────────────────────────────────────

    @property
    def current_char(self) -> Optional[str]:
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_n(self, n: int) -> Optional[str]:
        idx = self.pos + n
        if idx >= len(self.text):
            return None
        return self.text[idx]

    def advance(self) -> None:
        # column resets after a line break
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1

    def here(self) -> Position:
        return Position(self.line, self.column)

    # ── word matching ────────────────────────────────────────────

    def word_matches(self, word: str) -> bool:
        """Case-insensitive match of *word* at the cursor, on a word boundary."""
        end = self.pos + len(word)
        if self.text[self.pos:end].upper() != word:
            return False
        return end >= len(self.text) or not _is_alnum(self.text[end])

    def read_alpha_run(self) -> str:
        """Consume and return the alphabetic run starting at the cursor."""
        chars = []
        while self.current_char is not None and _is_alpha(self.current_char):
            chars.append(self.current_char)
            self.advance()
        return "".join(chars)

    # ── readers ──────────────────────────────────────────────────

    def read_string(self) -> Token:
        start = self.here()
        self.advance()  # opening quote
        chars = []
        while self.current_char is not None and self.current_char != '"':
            chars.append(self.current_char)
            self.advance()
        if self.current_char == '"':
            self.advance()
        return Token(TokenKind.STRING, "".join(chars), start)

    def read_number(self) -> Token:
        start = self.here()
        chars = []
        while self.current_char is not None and (
            _is_digit(self.current_char) or self.current_char == "."
        ):
            chars.append(self.current_char)
            self.advance()
        return Token(TokenKind.NUMBER, "".join(chars), start)

    def read_comment(self, start: Position) -> Token:
        chars = []
        while self.current_char is not None and self.current_char != "\n":
            chars.append(self.current_char)
            self.advance()
        return Token(TokenKind.COMMENT, "".join(chars), start)

    def read_multiline_comment(self, start: Position) -> Token:
        chars = []
        while self.current_char is not None:
            if not _is_alpha(self.current_char):
                chars.append(self.current_char)
                self.advance()
                continue
            # a letter run ending in TLDR closes the comment
            run = self.read_alpha_run()
            if run.upper().endswith("TLDR"):
                chars.append(run[:-4])
                break
            chars.append(run)
        return Token(TokenKind.COMMENT, "".join(chars), start)

    def read_word(self) -> Token:
        start = self.here()

        if self.word_matches("BTW"):
            for _ in range(3):
                self.advance()
            return self.read_comment(start)

        if self.word_matches("OBTW"):
            for _ in range(4):
                self.advance()
            return self.read_multiline_comment(start)

        chars = []
        while self.current_char is not None and (
            _is_alnum(self.current_char) or self.current_char == "?"
        ):
            chars.append(self.current_char)
            self.advance()
        word = "".join(chars)
        kind = TokenKind.KEYWORD if is_keyword(word) else TokenKind.IDENTIFIER
        return Token(kind, word, start)

    # ── driver ───────────────────────────────────────────────────

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        while self.current_char is not None:
            ch = self.current_char
            if ch == "\n":
                # positioned at the start of the following line
                self.advance()
                tokens.append(Token(TokenKind.NEWLINE, "\n", self.here()))
            elif ch == '"':
                tokens.append(self.read_string())
            elif ch.isspace():
                self.advance()
            elif _is_digit(ch):
                tokens.append(self.read_number())
            elif _is_alpha(ch):
                tokens.append(self.read_word())
            else:
                # unknown characters are dropped
                self.advance()
        return tokens


def tokenize(source: str) -> List[Token]:
    """Tokenize *source*.  Never raises."""
    return Lexer(source).tokenize()
