"""
Configuration - Handles formatting configuration.

This module handles:
- Configuration dataclass with all options
- JSON configuration file support (including editor setting names)
- Command-line overrides
- Configuration validation
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

# Setting names used by editor integrations, mapped to Config fields
SETTING_ALIASES = {
    "indentationSpaces": "indent_spaces",
    "addEmptyLineAfterExit": "blank_line_after_exit",
    "evaluateIndentWhen": "evaluate_indent_aware",
    "alignPicClauses": "align_descriptive_clauses",
}


@dataclass(frozen=True)
class Config:
    """
    Configuration for COBOL formatting.

    A Config never changes during a formatting run; use dataclasses.replace
    or merge_configs to derive a modified copy.

    Attributes:
        indent_spaces: Spaces per nesting level (positive integer)
        blank_line_after_exit: Insert an empty line after EXIT. statements
        evaluate_indent_aware: Accepted for editor compatibility; no effect
        align_descriptive_clauses: Align PIC and VALUE clauses per depth
        encoding: File encoding (default: latin-1)
        log_level: Logging level
        verbose: Enable verbose output
        quiet: Suppress normal output
        check: Report whether formatting would change the file, write nothing
        verify: Validate the formatted output before writing it
    """

    indent_spaces: int = 3
    blank_line_after_exit: bool = False
    evaluate_indent_aware: bool = False
    align_descriptive_clauses: bool = False

    # Host options
    encoding: str = "latin-1"
    log_level: str = "INFO"
    verbose: bool = False
    quiet: bool = False
    check: bool = False
    verify: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def save_to_file(self, path: Path) -> None:
        """Save configuration to JSON file."""
        path.write_text(json.dumps(self.to_dict(), indent=2))

    @classmethod
    def load_from_file(cls, path: Path) -> "Config":
        """Load configuration from JSON file."""
        data = json.loads(path.read_text())
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """
        Create config from dictionary.

        Editor setting names (indentationSpaces, alignPicClauses, ...) are
        accepted; unknown keys are dropped.
        """
        normalized = {SETTING_ALIASES.get(key, key): value for key, value in data.items()}

        # Filter only known fields
        known_fields = {f.name for f in fields(cls)}
        filtered_data = {k: v for k, v in normalized.items() if k in known_fields}

        return cls(**filtered_data)

    def validate(self) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if (
            isinstance(self.indent_spaces, bool)
            or not isinstance(self.indent_spaces, int)
            or self.indent_spaces < 1
        ):
            errors.append(f"indent_spaces must be a positive integer: {self.indent_spaces!r}")

        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.log_level}")

        if self.verbose and self.quiet:
            errors.append("verbose and quiet are mutually exclusive")

        return errors

    def is_valid(self) -> bool:
        """Check if configuration is valid."""
        return len(self.validate()) == 0


def create_default_config() -> Config:
    """Create a configuration with default values."""
    return Config()


def merge_configs(base: Config, override: Config) -> Config:
    """
    Merge two configurations, with override taking precedence.

    Only values of override that differ from the defaults replace the
    base values.

    Args:
        base: Base configuration
        override: Override configuration

    Returns:
        Merged configuration
    """
    default = create_default_config().to_dict()
    changes = {
        key: value
        for key, value in override.to_dict().items()
        if value != default.get(key)
    }
    return replace(base, **changes)
