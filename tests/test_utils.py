"""
Tests for formatter utility functions.
"""

import pytest

from cobol_formatter.core.utils import (
    collapse_whitespace,
    ends_sentence,
    has_unbalanced_quotes,
    parse_level,
)


class TestCollapseWhitespace:
    """Tests for whitespace normalisation."""

    def test_collapses_runs(self):
        assert collapse_whitespace("05   WS-NAME    PIC X.") == "05 WS-NAME PIC X."

    def test_literal_contents_untouched(self):
        text = "05  WS-MSG  PIC X(6)  VALUE 'A    B'."
        assert collapse_whitespace(text) == "05 WS-MSG PIC X(6) VALUE 'A    B'."

    def test_double_quoted_literal_untouched(self):
        assert collapse_whitespace('DISPLAY   "X   Y"') == 'DISPLAY "X   Y"'

    def test_unterminated_literal_untouched(self):
        assert collapse_whitespace("VALUE   'OPEN   END") == "VALUE 'OPEN   END"


class TestUnbalancedQuotes:
    """Tests for literal balance checks."""

    @pytest.mark.parametrize("text", [
        "05 WS-X",
        "VALUE 'ABC'",
        "VALUE \"ABC\" 'DEF'",
        "VALUE 'IT''S'",
    ])
    def test_balanced(self, text):
        assert not has_unbalanced_quotes(text)

    @pytest.mark.parametrize("text", [
        "VALUE 'ABC",
        "VALUE \"ABC",
        "'",
        "VALUE 'A\"",
    ])
    def test_unbalanced(self, text):
        assert has_unbalanced_quotes(text)


class TestParseLevel:
    """Tests for level number extraction."""

    @pytest.mark.parametrize("text,expected", [
        ("01 WS-REC.", 1),
        ("05 WS-NAME PIC X.", 5),
        ("88 IS-VALID VALUE 'Y'.", 88),
        ("77  WS-COUNT PIC 9.", 77),
    ])
    def test_level_found(self, text, expected):
        assert parse_level(text) == expected

    @pytest.mark.parametrize("text", [
        "MOVE A TO B.",
        "5 WS-X PIC X.",
        "05WS-X PIC X.",
        "05",
        "",
    ])
    def test_no_level(self, text):
        assert parse_level(text) is None


class TestEndsSentence:
    """Tests for period detection."""

    def test_period(self):
        assert ends_sentence("STOP RUN.")

    def test_period_followed_by_spaces(self):
        assert ends_sentence("STOP RUN.   ")

    def test_no_period(self):
        assert not ends_sentence("IF A = 1")
        assert not ends_sentence("")
