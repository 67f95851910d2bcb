"""Column-based preprocessing of fixed-format COBOL source.

The preprocessor removes blank lines at the beginning and end of the
source, then examines each remaining line column by column:

- Columns 1-6:   optional sequence number, must be an integer if present
- Column 7:      indicator (blank, '*' for comments, '-' for continuations)
- Columns 8-11:  Area A (divisions, sections, paragraphs)
- Columns 12-72: Area B (statements)

Rule violations are collected as LineIssue objects instead of aborting,
so a single pass always yields one Line per input line.
"""

import logging
import re
import unicodedata
from typing import Dict, Iterator, List, Optional, Sequence

from .exceptions import EmptyInputError
from .line import Line
from .line_issue import LineIssue

logger = logging.getLogger(__name__)

# Column ranges are (inclusive start, exclusive end), 0-indexed
LINE_NO_COLS = (0, 6)
INDICATOR_COL = 6
AREA_A = (7, 11)
AREA_B = (11, 72)

COMMENT_MARKER = "*"
CONTINUATION_MARKER = "-"

INVALID_LINE_NO_MESSAGE = "Invalid line number - must be a parseable integer"
INVALID_INDICATOR_MESSAGE = (
    "Invalid line status character - must be either empty, '*' or '-'"
)

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


# Non-breaking spaces are not whitespace for blank checks
_NON_BREAKING_SPACES = frozenset("\u00a0\u2007\u202f")


def _is_whitespace(ch: str) -> bool:
    return ch.isspace() and ch not in _NON_BREAKING_SPACES


def _is_blank(text: str) -> bool:
    return all(_is_whitespace(ch) for ch in text)


def _trim(text: str) -> str:
    start, end = 0, len(text)
    while start < end and _is_whitespace(text[start]):
        start += 1
    while end > start and _is_whitespace(text[end - 1]):
        end -= 1
    return text[start:end]


def _is_space_char(ch: str) -> bool:
    """Check for a Unicode space separator; tabs and other controls do not count."""
    return unicodedata.category(ch) in ("Zs", "Zl", "Zp")


class PreProcessor:
    """Classifies the physical lines of a fixed-format source.

    Usage:
        pre_processor = PreProcessor(source_lines)
        pre_processor.pre_process()
        for line in pre_processor.pre_processed_lines:
            ...
    """

    def __init__(self, full_text: Sequence[str]):
        """Initialize the preprocessor.

        Args:
            full_text: Source lines, one per physical line, without line endings
        """
        self.full_text: List[str] = list(full_text)
        self.pre_processed_lines: List[Line] = []
        self.line_issues: Dict[int, List[LineIssue]] = {}
        self.line_counter = 0

    def pre_process(self) -> None:
        """Run the classification pass over the whole source.

        Repeated calls start over from a clean state.

        Raises:
            EmptyInputError: If the source has no non-blank line
        """
        self.line_counter = 0
        self.pre_processed_lines = []
        self.line_issues = {}
        self._trim_lines()
        logger.debug(f"Preprocessing {len(self.full_text)} lines")

        for raw_line in self.full_text:
            line = Line(line_number=self.line_counter, raw_text=raw_line)
            self._process_line_no(raw_line, line)
            self._check_indicator(raw_line, line)
            if not line.is_comment:
                self._extract_code(raw_line, line)
            self.pre_processed_lines.append(line)
            self.line_counter += 1

        logger.debug(
            f"Preprocessed {self.line_counter} lines, "
            f"{self.issue_count} issues on {len(self.line_issues)} lines"
        )

    def _trim_lines(self) -> None:
        """Remove blank lines at the beginning and end of the source."""
        while self.full_text and _is_blank(self.full_text[0]):
            self.full_text.pop(0)
        if not self.full_text:
            raise EmptyInputError()
        while _is_blank(self.full_text[-1]):
            self.full_text.pop()

    def _add_issue(self, issue: LineIssue) -> None:
        self.line_issues.setdefault(issue.line_number, []).append(issue)

    def _process_line_no(self, raw_line: str, line: Line) -> None:
        """Check columns 1-6 for a sequence number.

        Blank columns are accepted. Otherwise the trimmed text must be an
        integer and is kept verbatim, so leading zeros survive.
        """
        first_cols = raw_line[LINE_NO_COLS[0]:min(LINE_NO_COLS[1], len(raw_line))]
        if _is_blank(first_cols):
            return

        candidate = _trim(first_cols)
        if _INTEGER_PATTERN.fullmatch(candidate):
            line.given_line_no = candidate
        else:
            self._add_issue(
                LineIssue(line.line_number, LINE_NO_COLS[0], INVALID_LINE_NO_MESSAGE)
            )

    def _check_indicator(self, raw_line: str, line: Line) -> None:
        """Set the comment or continuation flag from column 7.

        Lines too short to reach column 7 are left untouched.
        """
        if len(raw_line) < INDICATOR_COL + 1:
            return

        indicator = raw_line[INDICATOR_COL]
        if _is_whitespace(indicator):
            return
        if indicator == COMMENT_MARKER:
            line.is_comment = True
            return
        if indicator == CONTINUATION_MARKER:
            line.is_continuation = True
            return

        self._add_issue(
            LineIssue(
                line.line_number,
                INDICATOR_COL,
                INVALID_INDICATOR_MESSAGE,
                line.given_line_no,
            )
        )

    def _extract_code(self, raw_line: str, line: Line) -> None:
        """Extract the code text from Area A through Area B.

        The code start is recorded as an absolute offset into the raw line.
        """
        if len(raw_line) < AREA_A[0] + 1:
            return

        code_portion = raw_line[AREA_A[0]:min(AREA_B[1], len(raw_line))]
        if _is_blank(code_portion):
            return

        leading = next(
            (i for i, ch in enumerate(code_portion) if not _is_space_char(ch)), 0
        )
        line.code_start = AREA_A[0] + leading
        line.code_line = _trim(code_portion)

    @property
    def has_issues(self) -> bool:
        """Check if the last run recorded any issue."""
        return bool(self.line_issues)

    @property
    def issue_count(self) -> int:
        """Total number of issues recorded by the last run."""
        return sum(len(issues) for issues in self.line_issues.values())

    def iter_issues(self) -> Iterator[LineIssue]:
        """Yield all issues ordered by physical line number."""
        for line_number in sorted(self.line_issues):
            yield from self.line_issues[line_number]

    def get_line(self, line_number: int) -> Line:
        """Get the Line record at a physical index.

        Raises:
            IndexError: If no line exists at that index
        """
        if line_number < 0:
            raise IndexError(f"Line number must be non-negative: {line_number}")
        return self.pre_processed_lines[line_number]

    def get_code_line(self, line_number: int) -> Optional[str]:
        """Get the extracted code at a physical index, or None if there is none."""
        return self.get_line(line_number).code_line
