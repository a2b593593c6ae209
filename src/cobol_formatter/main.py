"""
Main entry point for the COBOL Formatter.

This module is the host side of the formatter: it turns a document into a
whole-range replacement edit and applies that edit to files. The edit is
all-or-nothing; when formatting or verification fails, nothing is written.
"""

import os
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from cobol_formatter.cobol.column_handler import detect_line_ending
from cobol_formatter.config import Config, create_default_config
from cobol_formatter.core.formatter import CobolFormatter
from cobol_formatter.logging_config import get_logger
from cobol_formatter.output.validator import OutputValidator, ValidationResult
from cobol_formatter.warnings_log import WarningsLog

logger = get_logger("main")


@dataclass(frozen=True)
class TextEdit:
    """
    Replacement of a character range of a document.

    Attributes:
        start: Offset of the first replaced character
        end: Offset after the last replaced character
        new_text: Text replacing the range
    """
    start: int
    end: int
    new_text: str

    def apply(self, text: str) -> str:
        """Apply the edit to a document text."""
        return text[: self.start] + self.new_text + text[self.end:]


@dataclass
class FormatResult:
    """Result of formatting one file."""
    source_path: Path
    output_path: Optional[Path] = None
    original_length: int = 0
    total_lines: int = 0
    changed: bool = False
    written: bool = False
    formatted_text: str = ""
    warnings: list[str] = field(default_factory=list)
    validation_result: Optional[ValidationResult] = None
    processing_time: float = 0.0


def format_document(
    text: str,
    config: Optional[Config] = None,
    warnings_log: Optional[WarningsLog] = None,
) -> TextEdit:
    """
    Format a whole document and return the edit replacing it.

    Args:
        text: The full document text
        config: Formatting configuration (uses defaults if not provided)
        warnings_log: Optional WarningsLog collecting recoveries

    Returns:
        TextEdit covering the entire original text

    Raises:
        ConfigError: If the configuration is invalid
        FormattingError: If the document cannot be formatted; no edit exists
    """
    formatter = CobolFormatter(config, warnings_log)
    formatted = formatter.format(text)
    return TextEdit(start=0, end=len(text), new_text=formatted)


def verify_output(original: str, formatted: str, file_name: Optional[str] = None) -> ValidationResult:
    """
    Verify formatted text against its source.

    Args:
        original: The source text
        formatted: The formatted text
        file_name: Optional file name for error reporting

    Returns:
        ValidationResult (warnings only)

    Raises:
        ValidationError: If any check reports an error
    """
    result = OutputValidator().validate(original, formatted)
    result.raise_if_invalid(file_name)
    return result


def write_atomically(path: Path, text: str, encoding: str) -> None:
    """
    Replace a file's content in one step.

    The text is written to a temporary file next to the target and moved
    over it, so readers never observe a half-written file.

    Args:
        path: Target file
        text: New content
        encoding: Output encoding
    """
    directory = path.parent if str(path.parent) else Path(".")
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(text)
        os.replace(temp_name, path)
    except BaseException:
        if os.path.exists(temp_name):
            os.unlink(temp_name)
        raise


def format_file(
    source_path: Path,
    config: Optional[Config] = None,
    output_path: Optional[Path] = None,
) -> FormatResult:
    """
    Format a COBOL source file.

    The formatted text keeps the file's original line ending. With
    config.check nothing is written; otherwise the result goes to
    output_path, or back to source_path when no output path is given.

    Args:
        source_path: File to format
        config: Formatting configuration (uses defaults if not provided)
        output_path: Optional destination file

    Returns:
        FormatResult describing what happened

    Raises:
        ConfigError: If the configuration is invalid
        FormattingError: If the document cannot be formatted
        ValidationError: If config.verify is set and verification fails
        OSError: If the file cannot be read or written
    """
    config = config or create_default_config()
    start_time = time.time()
    result = FormatResult(source_path=source_path)

    with open(source_path, encoding=config.encoding, newline="") as f:
        original = f.read()
    result.original_length = len(original)

    warnings_log = WarningsLog()
    edit = format_document(original, config, warnings_log)

    line_ending = detect_line_ending(original)
    formatted = edit.new_text
    if line_ending != "\n":
        formatted = formatted.replace("\n", line_ending)

    if config.verify:
        result.validation_result = verify_output(original, formatted, str(source_path))

    result.formatted_text = formatted
    result.total_lines = formatted.count(line_ending) + 1
    result.changed = formatted != original
    result.warnings = warnings_log.warnings

    if not config.check:
        destination = output_path or source_path
        if destination != source_path or result.changed:
            write_atomically(destination, formatted, config.encoding)
            result.output_path = destination
            result.written = True
            logger.debug("Wrote %s", destination)

    result.processing_time = time.time() - start_time
    return result
