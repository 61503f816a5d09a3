# tests/test_stats.py
"""
Tests for code statistics (lollint.stats).
"""

from __future__ import annotations

from lollint.parser import parse_source
from lollint.stats import Stats, collect_stats, count_lines_of_code
from tests.conftest import MINIMAL_LOL, STATS_LOL


class TestLinesOfCode:

    def test_blank_and_comment_lines_are_skipped(self):
        src = "HAI\n\n   \nBTW note\n  OBTW\nVISIBLE 1\nKTHXBYE\n"
        assert count_lines_of_code(src) == 3

    def test_trailing_comment_still_counts(self):
        assert count_lines_of_code("VISIBLE 1 BTW hi") == 1

    def test_empty(self):
        assert count_lines_of_code("") == 0


class TestCollectStats:

    def test_counts(self):
        stats = collect_stats(parse_source(STATS_LOL), STATS_LOL)
        assert stats == Stats(
            lines_of_code=12,
            variables=1,
            loops=1,
            conditionals=1,
            expressions=4,
        )

    def test_minimal(self):
        stats = collect_stats(parse_source(MINIMAL_LOL), MINIMAL_LOL)
        assert stats.to_dict() == {
            "lines_of_code": 2,
            "variables": 0,
            "loops": 0,
            "conditionals": 0,
            "expressions": 0,
        }

    def test_nested_constructs_are_counted(self):
        src = (
            "HAI\n"
            "IM IN YR LOOP\n"
            "O RLY?\nYA RLY\nIM IN YR LOOP\nI HAS A X\nIM OUTTA YR LOOP\nOIC\n"
            "IM OUTTA YR LOOP\n"
            "KTHXBYE\n"
        )
        stats = collect_stats(parse_source(src), src)
        assert stats.loops == 2
        assert stats.conditionals == 1
        assert stats.variables == 1
