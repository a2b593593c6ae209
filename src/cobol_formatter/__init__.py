"""
COBOL Formatter - Reindent fixed-format COBOL source while preserving tokens.

This package reformats column-oriented COBOL into a canonically indented,
optionally column-aligned layout. Only whitespace and line breaks change.

Basic Usage:
    from cobol_formatter import format_source, Config

    # Simple usage
    formatted = format_source(text)

    # With configuration
    config = Config(indent_spaces=4, align_descriptive_clauses=True)
    formatter = CobolFormatter(config)
    formatted = formatter.format(text)

Command-Line Usage:
    cobol-format PROGRAM.cbl
    cobol-format PROGRAM.cbl --in-place --align-clauses
    cobol-format PROGRAM.cbl --check
"""

__version__ = "0.1.0"

from cobol_formatter.exceptions import (
    FormatterError,
    FormattingError,
    ConfigError,
    ValidationError,
)

from cobol_formatter.config import Config, create_default_config
from cobol_formatter.core.formatter import CobolFormatter, format_source
from cobol_formatter.main import (
    FormatResult,
    TextEdit,
    format_document,
    format_file,
)
from cobol_formatter.warnings_log import FormatWarning, WarningsLog

__all__ = [
    # Version
    "__version__",
    # Main API
    "format_source",
    "format_document",
    "format_file",
    "CobolFormatter",
    "FormatResult",
    "TextEdit",
    # Configuration
    "Config",
    "create_default_config",
    # Helpers
    "FormatWarning",
    "WarningsLog",
    # Exceptions
    "FormatterError",
    "FormattingError",
    "ConfigError",
    "ValidationError",
]
