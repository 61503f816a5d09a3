# lollint/parser.py
"""lollint/parser.py – token list → LOLCODE AST.

Design principles
-----------------
* **Recursive descent** over one forward cursor with fixed-offset
  lookahead (``peek(n)``) and no backtracking.
* **Keyword dispatch** – every statement is recognised from its leading
  keyword sequence and handed to a dedicated ``_parse_<construct>``
  helper.
* **Fail-fast with position** – the first structural violation raises
  :class:`~lollint.errors.ParseError` carrying the offending token's
  position (or none at end of input).  There is no recovery and no
  partial tree.
* **Deliberate leniency** – a statement-starting token that begins no
  known construct is skipped silently, and a loop missing its closer
  ends at end of input.  Both differ from the fatal paths on purpose.

Public API
----------
``parse(tokens) -> Program``
    Parse a complete token list produced by :func:`lollint.lexer.tokenize`.

``parse_source(text) -> Program``
    Convenience: tokenize and parse in one step.

Grammar (overview)
------------------
::

    program     := HAI [NUMBER] stmt* KTHXBYE
    stmt        := o_rly | loop | visible | declaration
                 | assignment | expr_stmt
    o_rly       := O RLY? [YA RLY] stmt* [NO WAI stmt*] OIC
    loop        := IM IN YR LOOP stmt* [IM OUTTA YR LOOP]
    visible     := VISIBLE expr*
    declaration := I HAS A IDENT [ITZ expr]
    assignment  := IDENT R expr
    expr_stmt   := expr            (leading operator keyword only)
    expr        := NUMBER | STRING | IDENT
                 | (SUM|DIFF|PRODUKT|QUOSHUNT|MOD) OF expr AN expr
                 | BOTH SAEM expr AN expr
                 | DIFFRINT expr AN expr
"""

from __future__ import annotations

import logging
from typing import Final, List, Mapping, Optional, Sequence

from lollint import ast_nodes as A
from lollint.errors import ParseError, UnexpectedEOFError, UnexpectedTokenError
from lollint.lexer import tokenize
from lollint.tokens import OPERATOR_KEYWORDS, Token, TokenKind

logger = logging.getLogger(__name__)

__all__ = ["Parser", "parse", "parse_source"]


# Operators written ``<KW> OF a AN b``.
_ARITHMETIC_OPS: Final[Mapping[str, A.BinOp]] = {
    "SUM": A.BinOp.SUM,
    "DIFF": A.BinOp.DIFF,
    "PRODUKT": A.BinOp.PRODUKT,
    "QUOSHUNT": A.BinOp.QUOSHUNT,
    "MOD": A.BinOp.MOD,
}

_LOOP_OPENER: Final = ("IM", "IN", "YR", "LOOP")

_YA_RLY_TERMINATORS: Final = ("NO", "OIC", "MEBBE")
_NO_WAI_TERMINATORS: Final = ("OIC",)


class Parser:
    """Recursive-descent parser over a token list."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens = list(tokens)
        self.position = 0

    # ── cursor ───────────────────────────────────────────────────

    def current(self) -> Optional[Token]:
        return self.peek(0)

    def peek(self, n: int) -> Optional[Token]:
        idx = self.position + n
        if idx < len(self.tokens):
            return self.tokens[idx]
        return None

    def advance(self, count: int = 1) -> None:
        self.position = min(self.position + count, len(self.tokens))

    def at_end(self) -> bool:
        return self.position >= len(self.tokens)

    def _keyword_at(self, offset: int, word: str) -> bool:
        tok = self.peek(offset)
        return tok is not None and tok.is_keyword(word)

    def _keywords_ahead(self, words: Sequence[str]) -> bool:
        return all(self._keyword_at(i, w) for i, w in enumerate(words))

    # ── error helpers ────────────────────────────────────────────

    def error(self, message: str) -> ParseError:
        tok = self.current()
        return ParseError(message, tok.pos if tok is not None else None)

    def expect(self, keyword: str) -> Token:
        """Consume keyword *keyword* or raise."""
        tok = self.current()
        if tok is None:
            raise UnexpectedEOFError(f"'{keyword}'")
        if not tok.is_keyword(keyword):
            raise UnexpectedTokenError(f"'{keyword}'", tok.describe(), tok.pos)
        self.advance()
        return tok

    def expect_statement_end(self, what: str = "expression") -> None:
        """A statement must end at a newline or at end of input."""
        tok = self.current()
        if tok is not None and tok.kind is not TokenKind.NEWLINE:
            raise UnexpectedTokenError(f"newline after {what}", tok.describe(), tok.pos)

    # ── program / blocks ─────────────────────────────────────────

    def parse_program(self) -> A.Program:
        hai = self.expect("HAI")

        version = A.DEFAULT_VERSION
        tok = self.current()
        if tok is not None and tok.kind is TokenKind.NUMBER:
            version = tok.text
            self.advance()

        statements: List[A.Statement] = []
        while (tok := self.current()) is not None:
            if tok.is_keyword("KTHXBYE"):
                self.advance()
                logger.debug(
                    "parsed program version %s with %d top-level statements",
                    version, len(statements),
                )
                return A.Program(version, A.Block(tuple(statements), hai.pos), hai.pos)
            if not tok.is_significant:
                self.advance()
                continue
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)

        raise self.error("Expected 'KTHXBYE' at end of program")

    def _at_terminator(self, tok: Token, end_keywords: Sequence[str]) -> bool:
        if tok.kind is not TokenKind.KEYWORD:
            return False
        # A bare NO only closes a block as the first half of NO WAI.
        if tok.text == "NO" and "NO" in end_keywords:
            return self._keyword_at(1, "WAI")
        return tok.text in end_keywords

    def parse_block(self, end_keywords: Sequence[str], opener: A.Position) -> A.Block:
        """Parse statements up to (not including) a terminator keyword."""
        statements: List[A.Statement] = []
        while (tok := self.current()) is not None:
            if self._at_terminator(tok, end_keywords):
                break
            if not tok.is_significant:
                self.advance()
                continue
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
        return A.Block(tuple(statements), opener)

    def _at_loop_closer(self) -> bool:
        return (
            self._keyword_at(0, "IM")
            and (outta := self.peek(1)) is not None
            and outta.is_identifier("OUTTA")
            and self._keyword_at(2, "YR")
            and self._keyword_at(3, "LOOP")
        )

    def parse_loop_body(self, opener: A.Position) -> A.Block:
        """Statements up to ``IM OUTTA YR LOOP``, or to end of input."""
        statements: List[A.Statement] = []
        while (tok := self.current()) is not None:
            if self._at_loop_closer():
                self.advance(4)
                return A.Block(tuple(statements), opener)
            if not tok.is_significant:
                self.advance()
                continue
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
        logger.debug("loop opened at %s runs to end of input", opener)
        return A.Block(tuple(statements), opener)

    # ── statements ───────────────────────────────────────────────

    def parse_statement(self) -> Optional[A.Statement]:
        """Parse one statement, or skip one token and return ``None``."""
        tok = self.current()
        if tok is None:
            return None

        if tok.is_keyword("O") and self._keyword_at(1, "RLY?"):
            return self._parse_o_rly(tok.pos)
        if self._keywords_ahead(_LOOP_OPENER):
            return self._parse_loop(tok.pos)
        if tok.is_keyword("VISIBLE"):
            return self._parse_visible(tok.pos)
        if tok.is_keyword("I"):
            return self._parse_declaration(tok.pos)
        if tok.kind is TokenKind.IDENTIFIER:
            return self._parse_assignment(tok)
        if tok.kind is TokenKind.KEYWORD and tok.text in OPERATOR_KEYWORDS:
            return self._parse_expression_statement(tok.pos)

        logger.debug("skipping %s at %s", tok.describe(), tok.pos)
        self.advance()
        return None

    def _parse_o_rly(self, pos: A.Position) -> A.ORly:
        self.advance(2)  # O RLY?

        while (tok := self.current()) is not None and not tok.is_significant:
            self.advance()

        # Only a wrong keyword is fatal here; any other token opens the
        # YA RLY body directly.
        tok = self.current()
        ya_pos = tok.pos if tok is not None else pos
        if tok is not None and tok.kind is TokenKind.KEYWORD:
            if not tok.is_keyword("YA"):
                raise UnexpectedTokenError("'YA RLY' after 'O RLY?'", tok.describe(), tok.pos)
            self.advance()
            self.expect("RLY")

        ya_rly = self.parse_block(_YA_RLY_TERMINATORS, ya_pos)

        no_wai: Optional[A.Block] = None
        tok = self.current()
        if tok is not None and tok.is_keyword("NO") and self._keyword_at(1, "WAI"):
            self.advance(2)
            no_wai = self.parse_block(_NO_WAI_TERMINATORS, tok.pos)

        self.expect("OIC")
        return A.ORly(ya_rly, no_wai, pos)

    def _parse_loop(self, pos: A.Position) -> A.Loop:
        self.advance(len(_LOOP_OPENER))
        return A.Loop(self.parse_loop_body(pos), pos)

    def _parse_visible(self, pos: A.Position) -> A.Visible:
        self.advance()  # VISIBLE
        expressions: List[A.Expression] = []

        tok = self.current()
        if tok is not None and tok.kind is not TokenKind.NEWLINE:
            expressions.append(self.parse_expression())

        while (tok := self.current()) is not None and tok.kind is not TokenKind.NEWLINE:
            if tok.kind in (
                TokenKind.IDENTIFIER, TokenKind.NUMBER,
                TokenKind.STRING, TokenKind.KEYWORD,
            ):
                expressions.append(self.parse_expression())
            else:
                raise UnexpectedTokenError(
                    "expression or newline in VISIBLE", tok.describe(), tok.pos,
                )

        return A.Visible(tuple(expressions), pos)

    def _parse_declaration(self, pos: A.Position) -> A.Declaration:
        self.advance()  # I
        self.expect("HAS")
        self.expect("A")

        tok = self.current()
        if tok is None:
            raise UnexpectedEOFError("identifier after 'I HAS A'")
        if tok.kind is not TokenKind.IDENTIFIER:
            raise UnexpectedTokenError("identifier after 'I HAS A'", tok.describe(), tok.pos)
        name = tok.text
        self.advance()

        value: Optional[A.Expression] = None
        tok = self.current()
        if tok is not None and tok.is_keyword("ITZ"):
            self.advance()
            value = self.parse_expression()
            self.expect_statement_end()

        return A.Declaration(name, value, pos)

    def _parse_assignment(self, ident: Token) -> Optional[A.Assignment]:
        self.advance()  # identifier
        if not self._keyword_at(0, "R"):
            # a lone identifier is not a statement
            return None
        self.advance()
        value = self.parse_expression()
        self.expect_statement_end()
        return A.Assignment(ident.text, value, ident.pos)

    def _parse_expression_statement(self, pos: A.Position) -> A.ExpressionStatement:
        expression = self.parse_expression()
        self.expect_statement_end("expression statement")
        return A.ExpressionStatement(expression, pos)

    # ── expressions ──────────────────────────────────────────────

    def parse_expression(self) -> A.Expression:
        tok = self.current()
        if tok is None:
            raise UnexpectedEOFError("expression")
        pos = tok.pos

        if tok.kind is TokenKind.NUMBER:
            self.advance()
            return A.NumberLiteral(tok.text, pos)
        if tok.kind is TokenKind.STRING:
            self.advance()
            return A.StringLiteral(tok.text, pos)
        if tok.kind is TokenKind.IDENTIFIER:
            self.advance()
            return A.Identifier(tok.text, pos)

        if tok.kind is TokenKind.KEYWORD:
            if tok.text in _ARITHMETIC_OPS:
                self.advance()
                self.expect("OF")
                return self._parse_operands(_ARITHMETIC_OPS[tok.text], pos)
            if tok.text == "BOTH":
                self.advance()
                self.expect("SAEM")
                return self._parse_operands(A.BinOp.BOTH_SAEM, pos)
            if tok.text == "DIFFRINT":
                self.advance()
                return self._parse_operands(A.BinOp.DIFFRINT, pos)

        raise UnexpectedTokenError("expression", tok.describe(), pos)

    def _parse_operands(self, op: A.BinOp, pos: A.Position) -> A.BinaryExpr:
        left = self.parse_expression()
        self.expect("AN")
        right = self.parse_expression()
        return A.BinaryExpr(op, left, right, pos)


# ═══════════════════════════════════════════════════════════════════════
#  Public API
# ═══════════════════════════════════════════════════════════════════════

def parse(tokens: Sequence[Token]) -> A.Program:
    """Parse *tokens* into a :class:`~lollint.ast_nodes.Program`.

    Raises
    ------
    ParseError
        On the first grammar violation.  No partial tree is returned.
    """
    return Parser(tokens).parse_program()


def parse_source(text: str) -> A.Program:
    """Tokenize and parse LOLCODE source text."""
    return parse(tokenize(text))
