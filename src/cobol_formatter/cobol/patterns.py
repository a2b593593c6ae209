"""Regex patterns for COBOL line classification.

This module defines the patterns the formatter uses to recognise
declaration lines, descriptive clauses, paragraph labels and section
headers without a full grammar.
"""

import re

# Level number at the start of a trimmed declaration line: 01-49, 66, 77, 78, 88
LEVEL_PATTERN = re.compile(r"^(\d{2})\s+")

# PIC clause keyword; the match starts at the whitespace before the keyword
PIC_CLAUSE_PATTERN = re.compile(r"\s(?:PIC|PICTURE)\s", re.IGNORECASE)

# VALUE clause keyword (VALUE or VALUES), same anchoring as PIC
VALUE_CLAUSE_PATTERN = re.compile(r"\sVALUES?\s", re.IGNORECASE)

# First character of the readable data name
DATA_NAME_START_PATTERN = re.compile(r"[A-Za-z-]")

# Paragraph label: a single word followed by a period
PARAGRAPH_PATTERN = re.compile(r"^([A-Za-z0-9-]+)\.\s*")

# Procedure division section header (matched on the upper-cased view)
PROCEDURE_SECTION_PATTERN = re.compile(r"^\S+\s+SECTION\.")

# Loop qualifiers turning a PERFORM into an inline block
PERFORM_LOOP_PATTERN = re.compile(r"(?<![\w-])(?:UNTIL|VARYING|TIMES)(?![\w-])")

# Trailing period, possibly followed by whitespace
PERIOD_PATTERN = re.compile(r"\.\s*$")

# Inline comment (*> to end of line)
INLINE_COMMENT_PATTERN = re.compile(r"\s*\*>.*$")

# String literals (single or double quoted, possibly unterminated)
STRING_LITERAL_PATTERN = re.compile(r"'[^']*'?|\"[^\"]*\"?")

# Runs of whitespace
WHITESPACE_PATTERN = re.compile(r"\s+")
