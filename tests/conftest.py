"""
Pytest configuration and fixtures for COBOL Formatter tests.
"""

import logging

import pytest

from cobol_formatter.config import Config
from cobol_formatter.logging_config import LOGGER_NAME
from cobol_formatter.core.formatter import CobolFormatter
from cobol_formatter.warnings_log import WarningsLog


@pytest.fixture
def sample_program():
    """A small program with irregular indentation."""
    return "\n".join([
        "       IDENTIFICATION DIVISION.",
        "           PROGRAM-ID. HELLO.",
        "       DATA DIVISION.",
        "       WORKING-STORAGE SECTION.",
        "       01   WS-REC.",
        "       05 WS-NAME      PIC X(10).",
        "                05 WS-AGE PIC 99.",
        "       88 IS-ADULT VALUE 18 THRU 99.",
        "       01 WS-FLAG PIC X VALUE 'N'.",
        "       PROCEDURE DIVISION.",
        "           MAIN-PARA.",
        "       IF IS-ADULT",
        "       DISPLAY 'ADULT'",
        "       ELSE",
        "       DISPLAY 'MINOR'",
        "       END-IF.",
        "       PERFORM CHECK-PARA.",
        "       STOP RUN.",
        "       CHECK-PARA.",
        "       EXIT.",
    ])


@pytest.fixture
def formatted_program():
    """The sample program formatted with default settings."""
    return "\n".join([
        "       IDENTIFICATION DIVISION.",
        "       PROGRAM-ID. HELLO.",
        "       DATA DIVISION.",
        "       WORKING-STORAGE SECTION.",
        "       01 WS-REC.",
        "          05 WS-NAME PIC X(10).",
        "          05 WS-AGE PIC 99.",
        "             88 IS-ADULT VALUE 18 THRU 99.",
        "       01 WS-FLAG PIC X VALUE 'N'.",
        "       PROCEDURE DIVISION.",
        "       MAIN-PARA.",
        "           IF IS-ADULT",
        "              DISPLAY 'ADULT'",
        "           ELSE",
        "              DISPLAY 'MINOR'",
        "           END-IF.",
        "           PERFORM CHECK-PARA.",
        "           STOP RUN.",
        "       CHECK-PARA.",
        "           EXIT.",
    ])


@pytest.fixture
def procedure_header():
    """Lines opening a PROCEDURE DIVISION with one paragraph."""
    return [
        "       PROCEDURE DIVISION.",
        "       MAIN-PARA.",
    ]


@pytest.fixture
def working_storage_header():
    """Lines opening a WORKING-STORAGE SECTION."""
    return [
        "       DATA DIVISION.",
        "       WORKING-STORAGE SECTION.",
    ]


@pytest.fixture
def warnings_log():
    """A fresh warnings collector."""
    return WarningsLog()


@pytest.fixture
def aligning_formatter():
    """Formatter with descriptive clause alignment enabled."""
    return CobolFormatter(Config(align_descriptive_clauses=True))


@pytest.fixture
def source_file(tmp_path, sample_program):
    """The sample program written to a temporary file."""
    path = tmp_path / "HELLO.cbl"
    path.write_text(sample_program + "\n", encoding="latin-1")
    return path


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach handlers a test installed on the formatter's logger."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
