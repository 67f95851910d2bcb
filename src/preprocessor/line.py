"""Line record produced by the preprocessor.

A Line holds the classification of one physical source line. It is
created by PreProcessor with only its index and raw text, and the
remaining fields are filled in as each column rule runs.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class Line:
    """One physical line of fixed-format source, once classified.

    Attributes:
        line_number: Zero-based index in the trimmed input
        raw_text: Original, unmodified line content
        given_line_no: Sequence number text from columns 1-6, if valid
        is_comment: True if column 7 holds the comment marker
        is_continuation: True if column 7 holds the continuation marker
        code_start: Absolute offset of the first code character
        code_line: Code area text with surrounding spaces removed
    """

    line_number: int
    raw_text: str
    given_line_no: Optional[str] = None
    is_comment: bool = False
    is_continuation: bool = False
    code_start: Optional[int] = None
    code_line: Optional[str] = None

    @property
    def has_code(self) -> bool:
        """Check if code was extracted for this line."""
        return self.code_line is not None

    def to_dict(self, include_raw_text: bool = False) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        result: Dict[str, Any] = {
            "line_number": self.line_number,
            "given_line_no": self.given_line_no,
            "is_comment": self.is_comment,
            "is_continuation": self.is_continuation,
            "code_start": self.code_start,
            "code_line": self.code_line,
        }
        if include_raw_text:
            result["raw_text"] = self.raw_text
        return result
