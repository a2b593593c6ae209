"""
Core modules for the COBOL Formatter.

This package contains the core formatting logic:
- state: Structural state threaded through a formatting run
- alignment: PIC/VALUE alignment pre-pass
- line_formatter: Line classification and rendering
- formatter: Two-pass orchestration
- utils: Utility functions
"""

from cobol_formatter.core.utils import (
    collapse_whitespace,
    ends_sentence,
    has_unbalanced_quotes,
    parse_level,
)

__all__ = [
    "collapse_whitespace",
    "ends_sentence",
    "has_unbalanced_quotes",
    "parse_level",
]
