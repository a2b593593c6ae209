"""
Utility functions for the COBOL formatter.

This module provides helper functions for:
- Whitespace normalisation that leaves string literals untouched
- Literal balance checks used before clause alignment
- Level number parsing
"""

from typing import Optional

from cobol_formatter.cobol import patterns


def collapse_whitespace(text: str) -> str:
    """
    Collapse whitespace runs to single spaces outside string literals.

    Literal contents are copied unchanged, so a VALUE 'A  B' keeps its
    embedded spaces.

    Args:
        text: Line content

    Returns:
        Text with whitespace runs outside literals collapsed
    """
    parts = []
    position = 0
    for match in patterns.STRING_LITERAL_PATTERN.finditer(text):
        parts.append(patterns.WHITESPACE_PATTERN.sub(" ", text[position:match.start()]))
        parts.append(match.group(0))
        position = match.end()
    parts.append(patterns.WHITESPACE_PATTERN.sub(" ", text[position:]))
    return "".join(parts)


def has_unbalanced_quotes(text: str) -> bool:
    """
    Check whether text leaves a string literal open.

    Args:
        text: Text to inspect

    Returns:
        True if a quote opened in the text is never closed
    """
    for match in patterns.STRING_LITERAL_PATTERN.finditer(text):
        literal = match.group(0)
        if len(literal) < 2 or literal[-1] != literal[0]:
            return True
    return False


def parse_level(text: str) -> Optional[int]:
    """
    Extract the level number from a trimmed declaration line.

    Args:
        text: Trimmed line content

    Returns:
        The level as an integer, or None if the line has no level prefix
    """
    level_match = patterns.LEVEL_PATTERN.match(text)
    if not level_match:
        return None
    return int(level_match.group(1))


def ends_sentence(text: str) -> bool:
    """Check whether code text ends with a period."""
    return bool(patterns.PERIOD_PATTERN.search(text))
