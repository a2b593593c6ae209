"""
COBOL Column Handler - Fixed-format line views and layout rendering.

COBOL fixed-column format:
- Columns 1-6:  Sequence number area
- Column 7:     Indicator area (*, /, D, -, or space)
- Columns 8-11: Area A (for division/section headers, 01/77 levels, paragraph names)
- Columns 12-72: Area B (code continuation)
- Columns 73-80: Identification area

The formatter never keeps the sequence area: every rendered line starts
with six blank columns, followed by the indicator and the code areas.
"""

import re
from dataclasses import dataclass

from cobol_formatter.cobol.constants import (
    AREA_A_BLANK,
    AREA_A_START,
    CODE_END,
    COMMENT_INDICATORS,
    CONTINUATION_INDICATOR,
    DEBUG_INDICATORS,
    INDICATOR_COL,
    SEQUENCE_AREA,
)
from cobol_formatter.cobol import patterns

LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class SourceLine:
    """
    One physical source line with its derived views.

    Attributes:
        raw: The original line content (without line ending)
        index: 0-based position of the line in the document
    """

    raw: str
    index: int

    @property
    def indicator(self) -> str:
        """Column 7 character, or a space for short lines."""
        if len(self.raw) >= INDICATOR_COL:
            return self.raw[INDICATOR_COL - 1]
        return " "

    @property
    def has_sequence_area(self) -> bool:
        """Check that columns 1-6 hold blanks or a sequence number."""
        sequence = self.raw[: INDICATOR_COL - 1]
        return sequence.strip() == "" or sequence.strip().isdigit()

    @property
    def is_comment(self) -> bool:
        """Check if this is a comment or page-eject line."""
        return self.indicator in COMMENT_INDICATORS

    @property
    def is_debug(self) -> bool:
        """Check if this is a debug line (D followed by a blank)."""
        if self.indicator not in DEBUG_INDICATORS or not self.has_sequence_area:
            return False
        return len(self.raw) == INDICATOR_COL or self.raw[INDICATOR_COL] in " \t"

    @property
    def is_literal_continuation(self) -> bool:
        """Check if this line continues a literal (hyphen indicator)."""
        return self.indicator == CONTINUATION_INDICATOR and self.has_sequence_area

    @property
    def is_passthrough(self) -> bool:
        """Comment and debug lines are emitted verbatim."""
        return self.is_comment or self.is_debug

    @property
    def indicator_text(self) -> str:
        """Everything after the indicator column."""
        return self.raw[INDICATOR_COL:]

    @property
    def text(self) -> str:
        """Trimmed, tab-normalised content."""
        return self.raw.strip().replace("\t", " ")

    @property
    def upper(self) -> str:
        return self.text.upper()

    @property
    def keyword_view(self) -> str:
        """Upper-cased content with whitespace runs collapsed."""
        return patterns.WHITESPACE_PATTERN.sub(" ", self.upper)

    @property
    def code_text(self) -> str:
        """Trimmed content without a trailing inline comment."""
        return patterns.INLINE_COMMENT_PATTERN.sub("", self.text).rstrip()

    @property
    def is_blank(self) -> bool:
        return self.text == ""


def split_lines(text: str) -> list[SourceLine]:
    """
    Split source text into lines, keeping every physical line.

    A trailing line break yields a final empty line, so joining the
    rendered lines with a single break restores the document shape.

    Args:
        text: The full document text

    Returns:
        Ordered list of SourceLine objects
    """
    return [
        SourceLine(raw=raw, index=index)
        for index, raw in enumerate(LINE_BREAK_PATTERN.split(text))
    ]


def detect_line_ending(text: str) -> str:
    """
    Detect the line ending style used in a text.

    Args:
        text: The document text

    Returns:
        Line ending string ("\\n", "\\r\\n", or "\\r")
    """
    if "\r\n" in text:
        return "\r\n"
    elif "\r" in text:
        return "\r"
    return "\n"


def render_indicator_line(indicator: str, text: str) -> str:
    """
    Render a line that keeps its own indicator and text verbatim.

    Args:
        indicator: The column 7 character
        text: Everything after column 7

    Returns:
        The rendered line with a blank sequence area, trailing spaces trimmed
    """
    return f"{SEQUENCE_AREA}{indicator}{text}".rstrip()


def render_area_a(text: str, indent: int = 0) -> str:
    """
    Render content starting in Area A.

    Args:
        text: The line content
        indent: Extra spaces after column 8

    Returns:
        The rendered line
    """
    return f"{SEQUENCE_AREA} {' ' * max(0, indent)}{text}".rstrip()


def render_area_b(text: str, indent: int = 0) -> str:
    """
    Render content starting in Area B.

    Args:
        text: The line content
        indent: Extra spaces after column 12

    Returns:
        The rendered line
    """
    return f"{SEQUENCE_AREA} {AREA_A_BLANK}{' ' * max(0, indent)}{text}".rstrip()


def render_at_column(indicator: str, text: str, column: int) -> str:
    """
    Render content with an explicit indicator at a 1-based column.

    The column is clamped so content never starts before Area A.

    Args:
        indicator: The column 7 character
        text: The line content
        column: 1-based column where the content starts

    Returns:
        The rendered line
    """
    padding = " " * (max(column, AREA_A_START) - AREA_A_START)
    return f"{SEQUENCE_AREA}{indicator}{padding}{text}".rstrip()


def content_start_column(rendered: str) -> int:
    """
    Get the 1-based column where code content begins in a rendered line.

    Args:
        rendered: A line produced by one of the render helpers

    Returns:
        Column of the first non-blank character after the indicator,
        or 0 for lines without code content
    """
    code = rendered[INDICATOR_COL:]
    stripped = code.lstrip()
    if not stripped:
        return 0
    return AREA_A_START + len(code) - len(stripped)


def exceeds_code_area(rendered: str) -> bool:
    """Check whether a rendered line runs past column 72."""
    return len(rendered.rstrip()) > CODE_END
