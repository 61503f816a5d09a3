# tests/conftest.py
"""
Shared LOLCODE sources and helpers for the lol-lint test-suite.
"""

from __future__ import annotations

import textwrap
from typing import List

from lollint.lexer import tokenize
from lollint.linter import LintResult, lint
from lollint.parser import parse
from lollint.tokens import Token


def lol(src: str) -> str:
    """Dedent a triple-quoted LOLCODE snippet."""
    return textwrap.dedent(src).lstrip("\n")


def significant(tokens: List[Token]) -> List[Token]:
    return [t for t in tokens if t.is_significant]


def lint_source(src: str) -> LintResult:
    return lint(parse(tokenize(src)))


# ── Sources ──────────────────────────────────────────────────────

MINIMAL_LOL = "HAI 1.2\nKTHXBYE\n"

DECLARE_AND_PRINT_LOL = lol("""
    HAI 1.2
    I HAS A X ITZ 5
    VISIBLE X
    KTHXBYE
""")

UNUSED_LOL = lol("""
    HAI 1.2
    I HAS A X
    KTHXBYE
""")

DOUBLE_DECLARE_LOL = lol("""
    HAI 1.2
    I HAS A X
    I HAS A X
    VISIBLE X
    KTHXBYE
""")

EMPTY_ORLY_LOL = lol("""
    HAI 1.2
    O RLY?
    YA RLY
    OIC
    KTHXBYE
""")

FULL_ORLY_LOL = lol("""
    HAI 1.2
    I HAS A ANIMAL ITZ "CAT"
    BOTH SAEM ANIMAL AN "CAT"
    O RLY?

      YA RLY
        VISIBLE "MEOW"
      NO WAI
        VISIBLE "WOOF"
    OIC
    KTHXBYE
""")

LOOP_LOL = lol("""
    HAI 1.2
    I HAS A COUNT ITZ 0
    IM IN YR LOOP
      COUNT R SUM OF COUNT AN 1
      VISIBLE COUNT
    IM OUTTA YR LOOP
    KTHXBYE
""")

STATS_LOL = lol("""
    HAI 1.2
    BTW counting things
    I HAS A X ITZ 1
    IM IN YR LOOP
      VISIBLE X "a"
    IM OUTTA YR LOOP
    O RLY?
    YA RLY
      X R 2
    NO WAI
      SUM OF X AN 1
    OIC

    KTHXBYE
""")

KITCHEN_SINK_LOL = lol("""
    HAI 1.2
    OBTW
      Prints a greeting and does
      a bit of arithmetic.
    TLDR
    I HAS A NAME ITZ "LOLCAT"
    I HAS A TOTAL ITZ PRODUKT OF 6 AN 7
    BTW greet
    VISIBLE "HAI " NAME
    TOTAL R QUOSHUNT OF TOTAL AN 2
    DIFFRINT TOTAL AN 21
    O RLY?
    YA RLY
      VISIBLE "MATHS IZ BROKEN"
    NO WAI
      VISIBLE MOD OF TOTAL AN 5
    OIC
    KTHXBYE
""")
