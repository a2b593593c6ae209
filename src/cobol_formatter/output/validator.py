"""
Output Validator - Checks formatted COBOL against its source.

This module handles:
- Validating that no token was added, removed or reordered
- Validating that every source line survived (blank lines may be added)
- Validating the fixed-column layout of rendered lines
- Reporting code that runs past column 72
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from cobol_formatter.cobol import patterns
from cobol_formatter.cobol.column_handler import (
    SourceLine,
    content_start_column,
    exceeds_code_area,
    split_lines,
)
from cobol_formatter.cobol.constants import (
    AREA_B_START,
    CODE_END,
    CONTINUATION_INDICATOR,
    SEQUENCE_AREA,
)
from cobol_formatter.core.utils import has_unbalanced_quotes
from cobol_formatter.exceptions import ValidationError


class ValidationSeverity(Enum):
    """How much a finding matters: errors block writing, warnings do not."""
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """
    One finding about a formatted document.

    Attributes:
        severity: ERROR or WARNING
        message: What is wrong
        line_number: 1-based line in the formatted text, if line-specific
        context: Extra detail, such as the first differing characters
    """
    severity: ValidationSeverity
    message: str
    line_number: Optional[int] = None
    context: Optional[str] = None

    def __str__(self):
        location = f" line {self.line_number}" if self.line_number else ""
        detail = f" ({self.context})" if self.context else ""
        return f"[{self.severity.value.upper()}]{location} {self.message}{detail}"


@dataclass
class ValidationResult:
    """Findings of one validation run."""
    issues: list[ValidationIssue] = field(default_factory=list)
    lines_validated: int = 0

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity is ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity is ValidationSeverity.WARNING]

    @property
    def is_valid(self) -> bool:
        """A result without errors may be written."""
        return not self.errors

    def add_error(
        self, message: str, line_number: Optional[int] = None, context: Optional[str] = None
    ) -> None:
        self.issues.append(
            ValidationIssue(ValidationSeverity.ERROR, message, line_number, context)
        )

    def add_warning(
        self, message: str, line_number: Optional[int] = None, context: Optional[str] = None
    ) -> None:
        self.issues.append(
            ValidationIssue(ValidationSeverity.WARNING, message, line_number, context)
        )

    def raise_if_invalid(self, file_name: Optional[str] = None) -> None:
        """
        Turn errors into a ValidationError.

        Args:
            file_name: Optional file name for the error message

        Raises:
            ValidationError: If the result holds any error
        """
        if not self.is_valid:
            raise ValidationError([str(issue) for issue in self.errors], file=file_name)


@dataclass
class ValidatorConfig:
    """Configuration for validator."""
    check_tokens: bool = True
    check_line_count: bool = True
    check_columns: bool = True
    check_code_area: bool = True


def significant_tokens(line: SourceLine) -> list[str]:
    """
    Split the content formatting must preserve into tokens.

    String literals are kept whole, embedded spaces included, so a change
    inside a literal shows up as a different token. Literals left open at
    the end of a line lose their trailing blanks, which rendering trims.
    The sequence area of indicator lines is dropped, since the formatter
    always blanks it.

    Args:
        line: A source or formatted line

    Returns:
        The line's tokens in order
    """
    if line.is_passthrough or line.is_literal_continuation:
        content = line.indicator + line.indicator_text
    else:
        content = line.raw
    content = content.replace("\t", " ")

    tokens = []
    position = 0
    for match in patterns.STRING_LITERAL_PATTERN.finditer(content):
        tokens.extend(content[position:match.start()].split())
        literal = match.group(0)
        if has_unbalanced_quotes(literal):
            literal = literal.rstrip()
        tokens.append(literal)
        position = match.end()
    tokens.extend(content[position:].split())
    return tokens


class OutputValidator:
    """
    Validates formatted COBOL text against the text it was produced from.

    Usage:
        validator = OutputValidator()
        result = validator.validate(original, formatted)
    """

    def __init__(self, config: Optional[ValidatorConfig] = None):
        """
        Initialize the validator.

        Args:
            config: Validator configuration
        """
        self.config = config or ValidatorConfig()

    def validate(self, original: str, formatted: str) -> ValidationResult:
        """
        Validate a formatted document.

        Args:
            original: The source text
            formatted: The formatter's output for that text

        Returns:
            ValidationResult with any issues found
        """
        result = ValidationResult()
        source_lines = split_lines(original)
        output_lines = split_lines(formatted)
        result.lines_validated = len(output_lines)

        if self.config.check_tokens:
            self._validate_tokens(source_lines, output_lines, result)

        if self.config.check_line_count:
            self._validate_line_count(source_lines, output_lines, result)

        if self.config.check_columns or self.config.check_code_area:
            self._validate_layout(output_lines, result)

        return result

    def _validate_tokens(
        self,
        source_lines: list[SourceLine],
        output_lines: list[SourceLine],
        result: ValidationResult,
    ) -> None:
        """Every token must survive unchanged, in order."""
        before = [token for line in source_lines for token in significant_tokens(line)]
        after = [token for line in output_lines for token in significant_tokens(line)]
        if before == after:
            return

        position = next(
            (i for i, (a, b) in enumerate(zip(before, after)) if a != b),
            min(len(before), len(after)),
        )
        expected = before[position] if position < len(before) else "<end>"
        found = after[position] if position < len(after) else "<end>"
        result.add_error(
            "Token stream changed",
            context=f"token {position + 1}: expected {expected!r}, found {found!r}",
        )

    def _validate_line_count(
        self,
        source_lines: list[SourceLine],
        output_lines: list[SourceLine],
        result: ValidationResult,
    ) -> None:
        """Only blank lines may be added; none may be dropped."""
        source_count = sum(1 for line in source_lines if not line.is_blank)
        output_count = sum(1 for line in output_lines if not line.is_blank)
        if source_count != output_count:
            result.add_error(
                f"Non-blank line count changed ({source_count} -> {output_count})"
            )
        if len(output_lines) < len(source_lines):
            result.add_error(
                f"Lines were dropped ({len(source_lines)} -> {len(output_lines)})"
            )

    def _validate_layout(self, output_lines: list[SourceLine], result: ValidationResult) -> None:
        for line in output_lines:
            if line.is_blank:
                continue
            line_number = line.index + 1

            if self.config.check_columns:
                if not line.raw.startswith(SEQUENCE_AREA):
                    result.add_error("Sequence area is not blank", line_number=line_number)
                elif not (line.is_passthrough or line.indicator in (" ", CONTINUATION_INDICATOR)):
                    result.add_error(
                        f"Unexpected indicator {line.indicator!r}", line_number=line_number
                    )
                elif line.is_literal_continuation and content_start_column(line.raw) < AREA_B_START:
                    result.add_error(
                        "Continued literal starts before Area B", line_number=line_number
                    )

            if self.config.check_code_area and not line.is_passthrough:
                if exceeds_code_area(line.raw):
                    result.add_warning(
                        f"Code extends past column {CODE_END}", line_number=line_number
                    )
