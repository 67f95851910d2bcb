"""Diagnostics recorded while preprocessing source lines."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class LineIssue:
    """A format violation found on a physical line.

    Attributes:
        line_number: Zero-based physical line the issue belongs to
        column: Zero-based column where the offending content starts
        message: Description of the violated rule
        associated_line_no: Given line number of the line, if resolved
    """

    line_number: int
    column: int
    message: str
    associated_line_no: Optional[str] = None

    def __str__(self) -> str:
        location = f"line {self.line_number}"
        if self.associated_line_no is not None:
            location += f" ({self.associated_line_no})"
        return f"{location}, column {self.column}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "line_number": self.line_number,
            "column": self.column,
            "message": self.message,
            "associated_line_no": self.associated_line_no,
        }
