"""Shared fixtures for the preprocessor tests."""

import sys
from pathlib import Path

import pytest

# Make the src/ modules importable without installing the package
SRC_DIR = Path(__file__).parent.parent / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


def make_line(sequence: str = "", indicator: str = " ", code: str = "") -> str:
    """Build a fixed-format line from its column areas."""
    return sequence.ljust(6) + indicator + code


@pytest.fixture
def sample_lines():
    """A small program with one bad sequence number and one bad indicator."""
    return [
        "",
        "   ",
        make_line("000100", " ", "IDENTIFICATION DIVISION."),
        make_line("000200", " ", "PROGRAM-ID. SAMPLE."),
        make_line("000300", "*", "THIS IS A COMMENT"),
        "",
        make_line("ABCDEF", " ", "PROCEDURE DIVISION."),
        make_line("000500", " ", "    MOVE 'HELLO' TO WS-"),
        make_line("000600", "-", "    'WORLD'."),
        make_line("000700", "/", "    STOP RUN."),
        "      ",
        "",
    ]


@pytest.fixture
def sample_program_path(tmp_path, sample_lines):
    """Write the sample program to a file and return its path."""
    path = tmp_path / "SAMPLE.cob"
    path.write_text("\n".join(sample_lines) + "\n", encoding="utf-8")
    return path
