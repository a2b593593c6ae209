"""
COBOL Formatter - Orchestrates the two formatting passes.

This module handles:
- Splitting the document into lines
- Running the alignment pre-pass when clause alignment is enabled
- Rendering every line against a fresh StructuralState
- Post-format rules (blank line after EXIT.)
- Joining the rendered lines back into text
"""

from typing import Optional

from cobol_formatter.cobol.column_handler import (
    SourceLine,
    exceeds_code_area,
    split_lines,
)
from cobol_formatter.cobol.constants import CODE_END, EXIT_MARKER
from cobol_formatter.config import Config, create_default_config
from cobol_formatter.core.alignment import analyze
from cobol_formatter.core.line_formatter import LineFormatter
from cobol_formatter.core.state import StructuralState
from cobol_formatter.exceptions import ConfigError, FormattingError
from cobol_formatter.logging_config import get_logger
from cobol_formatter.warnings_log import WarningsLog

logger = get_logger("formatter")


class CobolFormatter:
    """
    Formats a complete COBOL source text.

    All mutable state lives inside a single format call, so one instance
    can format any number of documents, and separate instances can run
    concurrently.

    Usage:
        formatter = CobolFormatter(Config(align_descriptive_clauses=True))
        formatted = formatter.format(text)
    """

    def __init__(self, config: Optional[Config] = None, warnings_log: Optional[WarningsLog] = None):
        """
        Initialize the formatter.

        Args:
            config: Formatting configuration (uses defaults if not provided)
            warnings_log: Optional WarningsLog collecting recoveries

        Raises:
            ConfigError: If the configuration is invalid
        """
        self.config = config or create_default_config()
        errors = self.config.validate()
        if errors:
            raise ConfigError(errors)
        self.warnings = warnings_log if warnings_log is not None else WarningsLog()
        self.line_formatter = LineFormatter(self.config, self.warnings)

    def format(self, text: str) -> str:
        """
        Format the entire COBOL source text.

        Args:
            text: The raw COBOL source code

        Returns:
            The formatted COBOL source code, lines joined with "\\n"

        Raises:
            FormattingError: If any line cannot be rendered; nothing is returned
        """
        lines = split_lines(text)

        alignment_map: dict[int, int] = {}
        if self.config.align_descriptive_clauses:
            alignment_map = analyze(lines, self.config.indent_spaces)
            logger.debug("Alignment columns by depth: %s", alignment_map)

        state = StructuralState(alignment_map=alignment_map)
        final_lines: list[str] = []

        for index, line in enumerate(lines):
            try:
                rendered = self.line_formatter.render(state, line, index, lines)
            except Exception as e:
                raise FormattingError(index + 1, f"{type(e).__name__}: {e}") from e

            final_lines.append(rendered)

            if not line.is_passthrough and exceeds_code_area(rendered):
                self.warnings.add(f"Code extends past column {CODE_END}", index + 1)

            if self.config.blank_line_after_exit and self._needs_blank_after(rendered, index, lines):
                final_lines.append("")

        logger.debug("Formatted %d lines into %d lines", len(lines), len(final_lines))
        return "\n".join(final_lines)

    @staticmethod
    def _needs_blank_after(rendered: str, index: int, lines: list[SourceLine]) -> bool:
        """Check the blank-line-after-EXIT rule for a rendered line."""
        if rendered.strip().upper() != EXIT_MARKER:
            return False
        if index + 1 >= len(lines):
            return False
        return not lines[index + 1].is_blank


def format_source(text: str, config: Optional[Config] = None) -> str:
    """
    Format COBOL source text with a one-off formatter.

    Args:
        text: The raw COBOL source code
        config: Formatting configuration (uses defaults if not provided)

    Returns:
        The formatted source code
    """
    return CobolFormatter(config).format(text)
