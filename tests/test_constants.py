"""
Tests for COBOL layout constants and keyword tables.
"""

import pytest

from cobol_formatter.cobol.constants import (
    AREA_A_KEYWORDS,
    AREA_A_START,
    AREA_B_START,
    CASE_BRANCH_KEYWORDS,
    INDENT_ELSE_KEYWORDS,
    INDENT_END_KEYWORDS,
    INDENT_START_KEYWORDS,
    INDENT_SUB_CLAUSES,
    KeywordTable,
    SEQUENCE_AREA,
)


class TestColumnGeometry:
    """Tests for column constants."""

    def test_area_positions(self):
        assert AREA_A_START == 8
        assert AREA_B_START == 12

    def test_sequence_area_is_blank(self):
        assert SEQUENCE_AREA == "      "


class TestKeywordTable:
    """Tests for the longest-first keyword matcher."""

    def test_longest_keyword_wins(self):
        """WHEN OTHER is preferred over WHEN."""
        table = KeywordTable(["WHEN", "WHEN OTHER"])
        assert table.match("WHEN OTHER") == "WHEN OTHER"
        assert table.match("WHEN OTHER DISPLAY 'X'") == "WHEN OTHER"

    def test_shorter_keyword_still_matches(self):
        table = KeywordTable(["WHEN", "WHEN OTHER"])
        assert table.match("WHEN 1") == "WHEN"

    def test_keyword_followed_by_period(self):
        table = KeywordTable(["END-IF"])
        assert table.match("END-IF.") == "END-IF"

    def test_exact_line(self):
        table = KeywordTable(["ELSE"])
        assert table.match("ELSE") == "ELSE"

    def test_word_boundary_required(self):
        """A keyword that is only a prefix of a longer word does not match."""
        table = KeywordTable(["IF", "SELECT"])
        assert table.match("IFX = 1") is None
        assert table.match("SELECTED-ITEM PIC X.") is None

    def test_hyphen_is_part_of_word(self):
        table = KeywordTable(["READ"])
        assert table.match("READ-COUNT PIC 9.") is None

    def test_no_match(self):
        table = KeywordTable(["IF"])
        assert table.match("MOVE A TO B") is None
        assert table.match("") is None

    def test_duplicates_are_merged(self):
        table = KeywordTable(["if", "IF"])
        assert len(table) == 1

    def test_contains_is_case_insensitive(self):
        table = KeywordTable(["EVALUATE"])
        assert "evaluate" in table
        assert "EVAL" not in table

    def test_iteration_is_longest_first(self):
        table = KeywordTable(["AT END", "NOT AT END", "ELSE"])
        assert list(table) == ["NOT AT END", "AT END", "ELSE"]

    def test_repr(self):
        assert repr(KeywordTable(["A", "B"])) == "KeywordTable(2 keywords)"


class TestVocabularies:
    """Tests for the formatter's keyword vocabularies."""

    @pytest.mark.parametrize("line,expected", [
        ("IDENTIFICATION DIVISION.", "IDENTIFICATION DIVISION"),
        ("PROGRAM-ID. HELLO.", "PROGRAM-ID"),
        ("PROCEDURE DIVISION.", "PROCEDURE DIVISION"),
        ("PROCEDURE DIVISION USING LK-AREA.", "PROCEDURE DIVISION"),
        ("WORKING-STORAGE SECTION.", "WORKING-STORAGE SECTION"),
        ("LOCAL-STORAGE SECTION.", "LOCAL-STORAGE SECTION"),
        ("FD CUSTOMER-FILE.", "FD"),
        ("SELECT CUSTOMER-FILE ASSIGN TO CUSTIN", "SELECT"),
        ("END PROGRAM HELLO.", "END PROGRAM"),
    ])
    def test_area_a_headers(self, line, expected):
        assert AREA_A_KEYWORDS.match(line) == expected

    @pytest.mark.parametrize("line", [
        "01 WS-REC.",
        "MOVE A TO B.",
        "FDX PIC X.",
    ])
    def test_not_area_a_headers(self, line):
        assert AREA_A_KEYWORDS.match(line) is None

    @pytest.mark.parametrize("line,expected", [
        ("IF A = 1", "IF"),
        ("READ CUSTOMER-FILE", "READ"),
        ("EVALUATE TRUE", "EVALUATE"),
        ("STRING A DELIMITED BY SIZE", "STRING"),
    ])
    def test_block_openers(self, line, expected):
        assert INDENT_START_KEYWORDS.match(line) == expected

    @pytest.mark.parametrize("line", [
        "END-IF", "END-IF.", "END-PERFORM", "END-READ", "END-EVALUATE.", "END-STRING",
    ])
    def test_block_closers(self, line):
        assert INDENT_END_KEYWORDS.match(line) is not None

    def test_not_at_end_is_a_branch_not_a_sub_clause(self):
        assert INDENT_ELSE_KEYWORDS.match("NOT AT END") == "NOT AT END"
        assert INDENT_SUB_CLAUSES.match("NOT AT END") is None

    def test_at_end_is_a_sub_clause(self):
        assert INDENT_SUB_CLAUSES.match("AT END MOVE 'Y' TO WS-EOF") == "AT END"
        assert INDENT_ELSE_KEYWORDS.match("AT END") is None

    def test_case_branches(self):
        assert "WHEN" in CASE_BRANCH_KEYWORDS
        assert "WHEN OTHER" in CASE_BRANCH_KEYWORDS
        assert "ELSE" not in CASE_BRANCH_KEYWORDS
