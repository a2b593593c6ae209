"""
Line Formatter - Classifies one line and renders it into the column layout.

Dispatch order (first match wins):
- Comment and debug lines: emitted verbatim after the indicator
- Blank lines: emitted empty
- Literal continuation lines (hyphen indicator): re-anchored in Area B
- Header lines (divisions, sections, FD, ...): flush at Area A
- DATA DIVISION: COPY directives, declarations, declaration continuations
- PROCEDURE DIVISION: statements indented by the open control blocks
- Anything else: Area B without extra indentation

The renderer mutates the StructuralState it is handed; it keeps no state
of its own between lines.
"""

from typing import Optional

from cobol_formatter.cobol import patterns
from cobol_formatter.cobol.column_handler import (
    SourceLine,
    render_area_a,
    render_area_b,
    render_at_column,
    render_indicator_line,
)
from cobol_formatter.cobol.constants import (
    AREA_A_KEYWORDS,
    AREA_A_START,
    AREA_B_START,
    AREA_B_STATEMENTS,
    CASE_BRANCH_KEYWORDS,
    CONTINUATION_INDICATOR,
    INDENT_ELSE_KEYWORDS,
    INDENT_END_KEYWORDS,
    INDENT_START_KEYWORDS,
    INDENT_SUB_CLAUSES,
    MIN_CLAUSE_GAP,
    PERFORM_KEYWORD,
)
from cobol_formatter.config import Config
from cobol_formatter.core.alignment import alignment_key, split_descriptive_clause
from cobol_formatter.core.state import BlockFrame, StructuralState
from cobol_formatter.core.utils import collapse_whitespace, ends_sentence, parse_level
from cobol_formatter.warnings_log import WarningsLog

# Closing keyword -> keyword of the block it closes
BLOCK_CLOSERS = {
    "END-IF": "IF",
    "END-PERFORM": "PERFORM",
    "END-READ": "READ",
    "END-EVALUATE": "EVALUATE",
    "END-STRING": "STRING",
}


def is_continuation(index: int, all_lines: list[SourceLine]) -> bool:
    """
    Check whether a line continues the statement of the previous line.

    The nearest preceding line with code (skipping blank, comment and
    debug lines) decides: if it does not end with a period, the sentence
    is still open.

    Args:
        index: 0-based index of the current line
        all_lines: All document lines

    Returns:
        True if the line is a continuation
    """
    for position in range(index - 1, -1, -1):
        previous = all_lines[position]
        if previous.is_passthrough:
            continue
        code = previous.code_text
        if not code:
            continue
        return not ends_sentence(code)
    return False


def opens_perform_block(keyword_view: str) -> bool:
    """
    Check whether a PERFORM line opens an inline block.

    Args:
        keyword_view: Upper-cased line with whitespace collapsed

    Returns:
        True for PERFORM with UNTIL/VARYING/TIMES, or a bare PERFORM
    """
    if patterns.PERFORM_LOOP_PATTERN.search(keyword_view):
        return True
    return keyword_view.rstrip(". ") == "PERFORM"


class LineFormatter:
    """
    Renders single lines against a rolling StructuralState.

    Usage:
        line_formatter = LineFormatter(config)
        rendered = line_formatter.render(state, line, index, all_lines)
    """

    def __init__(self, config: Config, warnings_log: Optional[WarningsLog] = None):
        """
        Initialize the line formatter.

        Args:
            config: Formatting configuration
            warnings_log: Optional WarningsLog for recorded recoveries
        """
        self.config = config
        self.indent_spaces = config.indent_spaces
        self.warnings = warnings_log if warnings_log is not None else WarningsLog()

    def render(
        self,
        state: StructuralState,
        line: SourceLine,
        index: int,
        all_lines: list[SourceLine],
    ) -> str:
        """
        Classify and render one line, updating the state.

        Args:
            state: The run's StructuralState
            line: The line to render
            index: 0-based index of the line
            all_lines: All document lines, for continuation lookups

        Returns:
            The rendered line, trailing whitespace trimmed
        """
        if line.is_passthrough:
            return render_indicator_line(line.indicator, line.indicator_text)

        if line.is_blank:
            return ""

        if line.is_literal_continuation:
            return self._render_literal_continuation(state, line)

        view = line.keyword_view
        state.update_regions(view)

        if AREA_A_KEYWORDS.match(view):
            state.nesting_stack.clear()
            if state.in_procedure_division:
                state.reset_control()
            return render_area_a(line.text)

        if state.in_procedure_division and patterns.PROCEDURE_SECTION_PATTERN.match(view):
            state.nesting_stack.clear()
            state.reset_control()
            return render_area_a(line.text)

        if state.in_data_division:
            return self._render_data_line(state, line)

        if state.in_procedure_division:
            return self._render_procedure_line(state, line, index, all_lines)

        return render_area_b(line.text)

    # ------------------------------------------------------------------
    # DATA DIVISION

    def _render_data_line(self, state: StructuralState, line: SourceLine) -> str:
        text = line.text

        if line.keyword_view.startswith("COPY "):
            return render_area_b(text, len(state.nesting_stack) * self.indent_spaces)

        level = parse_level(text)
        if level is not None:
            return self._render_declaration(state, line, level)

        if state.last_decl_text_column > 0:
            indent = state.last_decl_text_column - AREA_A_START
        else:
            indent = self.indent_spaces
            self.warnings.add(
                "Continuation line without a preceding declaration",
                line.index + 1,
            )
        return render_area_a(text, indent)

    def _render_declaration(self, state: StructuralState, line: SourceLine, level: int) -> str:
        depth = state.push_level(level)
        indent = depth * self.indent_spaces
        body = self._align_clause(state, line, level, depth, indent)
        if body is None:
            body = collapse_whitespace(line.text)

        name_match = patterns.DATA_NAME_START_PATTERN.search(body)
        if name_match:
            state.last_decl_text_column = AREA_A_START + indent + name_match.start()
        else:
            state.last_decl_text_column = AREA_A_START + indent + self.indent_spaces

        return render_area_a(body, indent)

    def _align_clause(
        self,
        state: StructuralState,
        line: SourceLine,
        level: int,
        depth: int,
        indent: int,
    ) -> Optional[str]:
        """Pad the pre-clause text so the clause starts at the depth's column."""
        if not state.alignment_map:
            return None

        split = split_descriptive_clause(line.text, level, state.in_data_subregion)
        if split is None:
            return None
        if split.is_anomalous:
            self.warnings.add(
                "Clause keyword inside an unterminated literal, alignment skipped",
                line.index + 1,
            )
            return None

        column = state.alignment_map.get(alignment_key(level, depth))
        if not column:
            return None

        current_length = AREA_A_START - 1 + indent + len(split.pre_text)
        padding = max(MIN_CLAUSE_GAP, column - current_length)
        return f"{split.pre_text}{' ' * padding}{split.clause_text}"

    # ------------------------------------------------------------------
    # Literal continuation (hyphen indicator)

    def _render_literal_continuation(self, state: StructuralState, line: SourceLine) -> str:
        text = line.indicator_text.strip().replace("\t", " ")
        if state.in_procedure_division:
            column = state.continuation_column
            if ends_sentence(patterns.INLINE_COMMENT_PATTERN.sub("", text)):
                state.end_sentence()
        elif state.in_data_division:
            column = state.last_decl_text_column
        else:
            column = 0
        return render_at_column(CONTINUATION_INDICATOR, text, max(column, AREA_B_START))

    # ------------------------------------------------------------------
    # PROCEDURE DIVISION

    def _render_procedure_line(
        self,
        state: StructuralState,
        line: SourceLine,
        index: int,
        all_lines: list[SourceLine],
    ) -> str:
        text = line.text
        view = line.keyword_view
        continuation = is_continuation(index, all_lines)
        terminator = ends_sentence(line.code_text)

        start_keyword = INDENT_START_KEYWORDS.match(view)
        end_keyword = INDENT_END_KEYWORDS.match(view)
        branch_keyword = INDENT_ELSE_KEYWORDS.match(view)
        sub_clause = INDENT_SUB_CLAUSES.match(view)
        perform_keyword = PERFORM_KEYWORD.match(view)
        case_branch = branch_keyword is not None and branch_keyword in CASE_BRANCH_KEYWORDS

        if end_keyword:
            self._close_block(state, end_keyword)
        elif case_branch:
            self._enter_case_branch(state)
        elif branch_keyword:
            state.control_indent_level = max(
                state.paragraph_base_indent, state.control_indent_level - 1
            )
        elif sub_clause:
            frame = state.innermost_block
            if frame is not None and frame.branch_seen:
                state.control_indent_level = max(
                    state.paragraph_base_indent, frame.open_level + 1
                )

        is_label = False
        paragraph_match = patterns.PARAGRAPH_PATTERN.match(text)
        if paragraph_match and not continuation:
            name = paragraph_match.group(1).upper()
            if name not in AREA_B_STATEMENTS and not (
                start_keyword or end_keyword or branch_keyword or sub_clause or perform_keyword
            ):
                is_label = True
                state.reset_control()
                terminator = False

        indent = state.control_indent_level * self.indent_spaces
        if not continuation:
            anchor = AREA_A_START if is_label else AREA_B_START
            state.continuation_column = anchor + indent + self.indent_spaces

        if start_keyword:
            state.block_frames.append(BlockFrame(start_keyword, state.control_indent_level))
            state.control_indent_level += 1
        elif branch_keyword or sub_clause:
            frame = state.innermost_block
            if frame is not None:
                frame.branch_seen = True
            state.control_indent_level += 1
        elif perform_keyword and opens_perform_block(view):
            state.block_frames.append(BlockFrame(perform_keyword, state.control_indent_level))
            state.control_indent_level += 1

        if terminator:
            state.end_sentence()

        if is_label:
            return render_area_a(text, indent)
        return render_area_b(text, indent)

    def _close_block(self, state: StructuralState, end_keyword: str) -> None:
        """Return to the level of the block the terminator closes."""
        opener = BLOCK_CLOSERS.get(end_keyword)
        for position in range(len(state.block_frames) - 1, -1, -1):
            frame = state.block_frames[position]
            if frame.keyword == opener:
                del state.block_frames[position:]
                state.control_indent_level = max(state.paragraph_base_indent, frame.open_level)
                return
        state.control_indent_level = max(
            state.paragraph_base_indent, state.control_indent_level - 1
        )

    def _enter_case_branch(self, state: StructuralState) -> None:
        """Cascading WHEN clauses share the level of the first one."""
        for position in range(len(state.block_frames) - 1, -1, -1):
            frame = state.block_frames[position]
            if frame.keyword == "EVALUATE":
                del state.block_frames[position + 1:]
                if frame.branch_seen:
                    state.control_indent_level = max(
                        state.paragraph_base_indent, frame.open_level + 1
                    )
                return
