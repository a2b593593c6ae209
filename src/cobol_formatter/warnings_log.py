"""Recoveries recorded while formatting.

The formatter does not stop on malformed input. It falls back to a safe
placement (one indent unit, no clause alignment) and records a
FormatWarning here, so hosts can show what was guessed and where.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from cobol_formatter.logging_config import get_logger


@dataclass(frozen=True)
class FormatWarning:
    """A recovery applied to one source line.

    Attributes:
        message: What was unusual and how it was handled
        line_number: 1-based source line, 0 when not tied to a line
    """

    message: str
    line_number: int = 0

    def __str__(self) -> str:
        if self.line_number:
            return f"Line {self.line_number}: {self.message}"
        return self.message


class WarningsLog:
    """Collect format warnings, log them and optionally append them to a file.

    Attributes:
        entries: The collected FormatWarning objects, in source order
    """

    def __init__(self, output_path: Path | None = None) -> None:
        """Initialize the warnings log.

        Args:
            output_path: Optional file every warning is appended to
        """
        self.entries: list[FormatWarning] = []
        self._output_path = output_path
        self._logger = get_logger("warnings")

    def add(self, message: str, line_number: int = 0) -> FormatWarning:
        """Record a warning.

        Args:
            message: What was unusual and how it was handled
            line_number: Optional 1-based line number

        Returns:
            The recorded FormatWarning
        """
        entry = FormatWarning(message, line_number)
        self.entries.append(entry)
        self._logger.warning("%s", entry)

        if self._output_path is not None:
            with open(self._output_path, "a", encoding="utf-8") as f:
                f.write(f"{entry}\n")
        return entry

    @property
    def warnings(self) -> list[str]:
        """Rendered warning messages."""
        return [str(entry) for entry in self.entries]

    def line_numbers(self) -> list[int]:
        """Sorted source lines that produced at least one warning."""
        return sorted({entry.line_number for entry in self.entries if entry.line_number})

    def has_warnings(self) -> bool:
        return bool(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[FormatWarning]:
        return iter(self.entries)

    def __repr__(self) -> str:
        return f"WarningsLog({len(self.entries)} warnings)"
