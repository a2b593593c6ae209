"""
COBOL Layout Constants - Column geometry and keyword vocabularies.

COBOL fixed-column format:
- Columns 1-6:  Sequence number area (left blank by the formatter)
- Column 7:     Indicator area (*, /, D, -, or space)
- Columns 8-11: Area A (division/section headers, paragraph names, levels)
- Columns 12-72: Area B (statements)

Keyword vocabularies are matched through KeywordTable, which is built once
per vocabulary at import time and never mutated.
"""

from typing import Iterable, Optional

# Column position constants (1-based, as written in COBOL manuals)
SEQ_NUMBER_END = 6
INDICATOR_COL = 7
AREA_A_START = 8
AREA_A_END = 11
AREA_B_START = 12
CODE_END = 72

# Extra columns added after the longest pre-clause text of a depth group
ALIGNMENT_MARGIN = 4

# Minimum gap kept between a data name and its aligned clause
MIN_CLAUSE_GAP = 2

SEQUENCE_AREA = " " * SEQ_NUMBER_END
AREA_A_BLANK = " " * (AREA_A_END - AREA_A_START + 1)

COMMENT_INDICATORS = ("*", "/")
DEBUG_INDICATORS = ("D", "d")
CONTINUATION_INDICATOR = "-"

# Levels that start a new hierarchy (record start, RENAMES, independent
# item, constant)
STACK_RESET_LEVELS = frozenset({1, 66, 77, 78})

# Levels whose VALUE clause takes part in alignment
CONDITION_NAME_LEVELS = frozenset({78, 88})

# Condition names align with the siblings of their owning group
PARENT_KEYED_LEVEL = 88


class KeywordTable:
    """
    Immutable longest-first keyword matcher.

    A keyword matches when the line is exactly the keyword, or when the
    keyword is followed by a space or a period.

    Usage:
        table = KeywordTable(["WHEN", "WHEN OTHER"])
        table.match("WHEN OTHER")  # -> "WHEN OTHER"
    """

    def __init__(self, keywords: Iterable[str]):
        unique = {keyword.upper() for keyword in keywords}
        self._keywords: tuple[str, ...] = tuple(
            sorted(unique, key=lambda k: (-len(k), k))
        )

    def match(self, line: str) -> Optional[str]:
        """
        Find the longest keyword the line starts with.

        Args:
            line: Upper-cased line view with whitespace runs collapsed

        Returns:
            The matched keyword, or None
        """
        for keyword in self._keywords:
            if line == keyword:
                return keyword
            if line.startswith(keyword):
                follower = line[len(keyword)]
                if follower in (" ", "."):
                    return keyword
        return None

    def __contains__(self, word: str) -> bool:
        return word.upper() in self._keywords

    def __iter__(self):
        return iter(self._keywords)

    def __len__(self) -> int:
        return len(self._keywords)

    def __repr__(self) -> str:
        return f"KeywordTable({len(self._keywords)} keywords)"


# Structural headers placed flush at Area A
AREA_A_KEYWORDS = KeywordTable([
    "IDENTIFICATION DIVISION",
    "ID DIVISION",
    "PROGRAM-ID",
    "ENVIRONMENT DIVISION",
    "CONFIGURATION SECTION",
    "INPUT-OUTPUT SECTION",
    "FILE-CONTROL",
    "DATA DIVISION",
    "FILE SECTION",
    "WORKING-STORAGE SECTION",
    "LOCAL-STORAGE SECTION",
    "LINKAGE SECTION",
    "SCREEN SECTION",
    "PROCEDURE DIVISION",
    "DECLARATIVES",
    "END DECLARATIVES",
    "END PROGRAM",
    "SELECT",
    "SOURCE-COMPUTER",
    "OBJECT-COMPUTER",
    "SPECIAL-NAMES",
    "I-O-CONTROL",
    "AUTHOR",
    "DATE-WRITTEN",
    "DATE-COMPILED",
    "FD",
    "SD",
])

# Single-word statements that can never be paragraph labels
AREA_B_STATEMENTS = frozenset({
    "EXIT",
    "STOP",
    "GOBACK",
    "CONTINUE",
    "DISPLAY",
    "COMPUTE",
    "MOVE",
    "ADD",
    "SUBTRACT",
    "MULTIPLY",
    "DIVIDE",
    "COPY",
})

INDENT_START_KEYWORDS = KeywordTable(["IF", "READ", "EVALUATE", "STRING"])

INDENT_END_KEYWORDS = KeywordTable([
    "END-IF",
    "END-PERFORM",
    "END-READ",
    "END-EVALUATE",
    "END-STRING",
])

INDENT_ELSE_KEYWORDS = KeywordTable([
    "ELSE",
    "WHEN OTHER",
    "WHEN",
    "NOT AT END",
    "NOT INVALID KEY",
    "NOT ON SIZE ERROR",
    "NOT ON OVERFLOW",
    "NOT ON EXCEPTION",
])

# Branches of a multi-way selection
CASE_BRANCH_KEYWORDS = KeywordTable(["WHEN", "WHEN OTHER"])

# Positive-outcome clauses that open a branch body
INDENT_SUB_CLAUSES = KeywordTable([
    "AT END",
    "INVALID KEY",
    "ON SIZE ERROR",
    "ON OVERFLOW",
    "ON EXCEPTION",
])

PERFORM_KEYWORD = KeywordTable(["PERFORM"])

EXIT_MARKER = "EXIT."

# Data division subregion headers
FILE_SECTION = "FILE SECTION"
WORKING_STORAGE_SECTIONS = ("WORKING-STORAGE SECTION", "LOCAL-STORAGE SECTION")
LINKAGE_SECTION = "LINKAGE SECTION"
SCREEN_SECTION = "SCREEN SECTION"
