"""
Alignment Analyzer - Pre-pass deciding where descriptive clauses start.

Walks the DATA DIVISION once and computes, for every nesting depth, the
column at which PIC clauses (and VALUE clauses of level 78/88 items)
should begin. Condition names (level 88) are keyed on their parent's depth
so they line up with the siblings of the group that owns them.
"""

from dataclasses import dataclass
from typing import Optional

from cobol_formatter.cobol import patterns
from cobol_formatter.cobol.column_handler import SourceLine
from cobol_formatter.cobol.constants import (
    ALIGNMENT_MARGIN,
    AREA_A_KEYWORDS,
    AREA_A_START,
    CONDITION_NAME_LEVELS,
    PARENT_KEYED_LEVEL,
)
from cobol_formatter.core.state import StructuralState
from cobol_formatter.core.utils import collapse_whitespace, has_unbalanced_quotes, parse_level


@dataclass(frozen=True)
class ClauseSplit:
    """
    A declaration split at its descriptive clause.

    Attributes:
        pre_text: Text before the clause, whitespace collapsed and trimmed
        clause_text: The clause keyword and everything after it, trimmed
    """

    pre_text: str
    clause_text: str

    @property
    def is_anomalous(self) -> bool:
        """The clause keyword sits inside an unterminated literal."""
        return has_unbalanced_quotes(self.pre_text)


def split_descriptive_clause(
    text: str,
    level: int,
    in_data_subregion: bool,
) -> Optional[ClauseSplit]:
    """
    Locate the clause that takes part in alignment.

    Level 78/88 items align on VALUE; other items align on PIC, but only
    inside the FILE, WORKING-STORAGE and LINKAGE sections.

    Args:
        text: Trimmed, tab-normalised declaration line
        level: The declaration's level number
        in_data_subregion: Whether a data subregion is active

    Returns:
        ClauseSplit, or None when the line has no alignable clause
    """
    if level in CONDITION_NAME_LEVELS:
        clause_match = patterns.VALUE_CLAUSE_PATTERN.search(text)
    elif in_data_subregion:
        clause_match = patterns.PIC_CLAUSE_PATTERN.search(text)
    else:
        return None

    if not clause_match:
        return None

    return ClauseSplit(
        pre_text=collapse_whitespace(text[: clause_match.start()]).strip(),
        clause_text=text[clause_match.start():].strip(),
    )


def alignment_key(level: int, depth: int) -> int:
    """
    Get the alignment map key for a declaration.

    Args:
        level: The declaration's level number
        depth: The declaration's nesting depth

    Returns:
        The parent's depth for condition names, the own depth otherwise
    """
    if level == PARENT_KEYED_LEVEL:
        return max(depth - 1, 0)
    return depth


def analyze(lines: list[SourceLine], indent_spaces: int) -> dict[int, int]:
    """
    Compute the alignment column for each nesting depth.

    The pass uses its own StructuralState and stops at the PROCEDURE
    DIVISION header.

    Args:
        lines: All document lines
        indent_spaces: Spaces per nesting level

    Returns:
        Mapping of depth to alignment column (empty when nothing aligns)
    """
    state = StructuralState()
    max_end_columns: dict[int, int] = {}

    for line in lines:
        if line.is_blank or line.is_passthrough or line.is_literal_continuation:
            continue

        view = line.keyword_view
        if view.startswith("PROCEDURE DIVISION"):
            break

        state.update_regions(view)
        if not state.in_data_division:
            continue

        if AREA_A_KEYWORDS.match(view):
            state.nesting_stack.clear()
            continue

        level = parse_level(line.text)
        if level is None:
            continue

        depth = state.push_level(level)
        split = split_descriptive_clause(line.text, level, state.in_data_subregion)
        if split is None or split.is_anomalous:
            continue

        end_column = AREA_A_START - 1 + depth * indent_spaces + len(split.pre_text)
        key = alignment_key(level, depth)
        max_end_columns[key] = max(max_end_columns.get(key, 0), end_column)

    return {key: column + ALIGNMENT_MARGIN for key, column in max_end_columns.items()}
