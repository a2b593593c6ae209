"""
Exception classes for the COBOL Formatter.

This module defines all custom exceptions used throughout the formatter,
organized in a hierarchy for easy handling.
"""

from typing import Optional


class FormatterError(Exception):
    """Base exception for all formatter errors."""

    pass


class FormattingError(FormatterError):
    """Rendering failed; no part of the document may be applied.

    Attributes:
        line: 1-based line number where rendering stopped
        message: Description of the error
    """

    def __init__(self, line: int, message: str):
        self.line = line
        self.message = message
        super().__init__(f"line {line}: {message}")


class ConfigError(FormatterError):
    """Configuration error.

    Raised when a formatter is built from an invalid configuration,
    such as a non-positive indentation width.

    Attributes:
        errors: The individual validation messages
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class ValidationError(FormatterError):
    """Formatted output failed verification against its source.

    Attributes:
        file: The file being formatted, if any
        issues: Human-readable descriptions of the failed checks
    """

    def __init__(self, issues: list[str], file: Optional[str] = None):
        self.file = file
        self.issues = list(issues)
        prefix = f"{file}: " if file else ""
        super().__init__(f"{prefix}output verification failed ({len(self.issues)} issues)")
