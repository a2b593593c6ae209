"""
Structural State - Mutable context for one formatting run.

The state is created fresh for every format call, owned by the
orchestrator and passed by reference to the line renderer. Nothing in
here is shared between documents.
"""

from dataclasses import dataclass, field
from typing import Optional

from cobol_formatter.cobol.constants import (
    FILE_SECTION,
    LINKAGE_SECTION,
    SCREEN_SECTION,
    STACK_RESET_LEVELS,
    WORKING_STORAGE_SECTIONS,
)


@dataclass
class BlockFrame:
    """
    An open control block in the current sentence.

    Attributes:
        keyword: The statement keyword that opened the block
        open_level: Control indent level of the opening line
        branch_seen: Whether a branch clause has been rendered in the block
    """

    keyword: str
    open_level: int
    branch_seen: bool = False


@dataclass
class StructuralState:
    """
    Rolling context threaded through the line renderer.

    Attributes:
        nesting_stack: Open data-hierarchy chain of level numbers
        control_indent_level: Depth of open control blocks
        paragraph_base_indent: Level a new paragraph or section resets to
        in_data_division: DATA DIVISION is the active region
        in_procedure_division: PROCEDURE DIVISION is the active region
        in_file_section: FILE SECTION subregion
        in_working_storage: WORKING-STORAGE or LOCAL-STORAGE subregion
        in_linkage_section: LINKAGE SECTION subregion
        last_decl_text_column: 1-based column of the previous data name (0 = none)
        alignment_map: Depth to alignment column, read-only while formatting
        block_frames: Open control blocks, innermost last
        continuation_column: 1-based anchor for wrapped literal lines (0 = none)
    """

    nesting_stack: list[int] = field(default_factory=list)
    control_indent_level: int = 0
    paragraph_base_indent: int = 0
    in_data_division: bool = False
    in_procedure_division: bool = False
    in_file_section: bool = False
    in_working_storage: bool = False
    in_linkage_section: bool = False
    last_decl_text_column: int = 0
    alignment_map: dict[int, int] = field(default_factory=dict)
    block_frames: list[BlockFrame] = field(default_factory=list)
    continuation_column: int = 0

    @property
    def in_data_subregion(self) -> bool:
        """Check if a FILE, WORKING-STORAGE or LINKAGE section is active."""
        return self.in_file_section or self.in_working_storage or self.in_linkage_section

    @property
    def innermost_block(self) -> Optional[BlockFrame]:
        return self.block_frames[-1] if self.block_frames else None

    @property
    def in_evaluate_block(self) -> bool:
        """Check if a multi-way selection is open in the current sentence."""
        return any(frame.keyword == "EVALUATE" for frame in self.block_frames)

    @property
    def is_first_branch_in_block(self) -> bool:
        """Check if the innermost block has not rendered a branch yet."""
        frame = self.innermost_block
        return frame is None or not frame.branch_seen

    def push_level(self, level: int) -> int:
        """
        Apply a declaration level to the nesting stack.

        Sentinel levels clear the stack; any other level pops every entry
        greater than or equal to itself. The level is pushed afterwards.

        Args:
            level: The declaration's level number

        Returns:
            Depth of the declaration (number of enclosing levels)
        """
        if level in STACK_RESET_LEVELS:
            self.nesting_stack.clear()
        else:
            while self.nesting_stack and level <= self.nesting_stack[-1]:
                self.nesting_stack.pop()
        depth = len(self.nesting_stack)
        self.nesting_stack.append(level)
        return depth

    def reset_control(self) -> None:
        """Return to column zero of a new paragraph or section."""
        self.paragraph_base_indent = 0
        self.control_indent_level = 0
        self.block_frames.clear()

    def end_sentence(self) -> None:
        """Close every block opened in the current sentence."""
        self.control_indent_level = self.paragraph_base_indent
        self.block_frames.clear()

    def _set_subregion(self, file: bool = False, working: bool = False, linkage: bool = False) -> None:
        self.in_file_section = file
        self.in_working_storage = working
        self.in_linkage_section = linkage

    def update_regions(self, keyword_view: str) -> None:
        """
        Update region flags from a header line.

        Args:
            keyword_view: Upper-cased line with whitespace runs collapsed
        """
        if keyword_view.startswith(("IDENTIFICATION DIVISION", "ID DIVISION", "ENVIRONMENT DIVISION")):
            self.in_data_division = False
            self.in_procedure_division = False
        elif keyword_view.startswith("DATA DIVISION"):
            self.in_data_division = True
            self.in_procedure_division = False
            self.nesting_stack.clear()
        elif keyword_view.startswith("PROCEDURE DIVISION"):
            self.in_data_division = False
            self.in_procedure_division = True
            self.last_decl_text_column = 0

        if self.in_data_division:
            if keyword_view.startswith(FILE_SECTION):
                self._set_subregion(file=True)
            elif keyword_view.startswith(WORKING_STORAGE_SECTIONS):
                self._set_subregion(working=True)
            elif keyword_view.startswith(LINKAGE_SECTION):
                self._set_subregion(linkage=True)
            elif keyword_view.startswith(SCREEN_SECTION):
                self._set_subregion()
        else:
            self._set_subregion()
