"""Public API for preprocessing fixed-format COBOL source.

This module provides the programmatic interface for the preprocessor.
Use these functions instead of calling CLI internals directly.

Example:
    from api import preprocess_file, PreProcessOptions

    result = preprocess_file(
        source_path=Path("program.cob"),
        options=PreProcessOptions(include_comments=False),
    )

    for line in result.lines:
        print(line.code_start, line.code_line)
    for issue in result.issues:
        print(issue)
"""

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from preprocessor import EmptyInputError, Line, LineIssue, PreProcessor

logger = logging.getLogger(__name__)

# Only CR, LF and CRLF end a physical line; form feeds stay inside it
_LINE_TERMINATOR = re.compile(r"\r\n|\r|\n")


class PreProcessingError(Exception):
    """Raised when preprocessing cannot produce any output."""
    pass


@dataclass
class PreProcessOptions:
    """Options for preprocessing.

    Attributes:
        encoding: Encoding used to read source files (default: utf-8)
        include_comments: Keep comment lines in to_dict() output (default: True)
        include_raw_text: Keep original line text in to_dict() output (default: False)
    """
    encoding: str = "utf-8"
    include_comments: bool = True
    include_raw_text: bool = False


@dataclass
class PreProcessResult:
    """Result of a preprocessing run.

    Attributes:
        source_path: Source file the lines were read from (None for in-memory input)
        lines: Classified lines, indexed by physical line number
        issues: All issues, ordered by physical line number
        line_count: Number of lines after trimming blank lines
        execution_time_seconds: Time spent preprocessing
        options: Options the run was made with
    """
    source_path: Optional[Path]
    lines: List[Line]
    issues: List[LineIssue]
    line_count: int
    execution_time_seconds: float
    options: PreProcessOptions

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary honoring the run options."""
        lines = self.lines
        if not self.options.include_comments:
            lines = [line for line in lines if not line.is_comment]
        return {
            "source": str(self.source_path) if self.source_path else None,
            "line_count": self.line_count,
            "execution_time_seconds": self.execution_time_seconds,
            "lines": [
                line.to_dict(include_raw_text=self.options.include_raw_text)
                for line in lines
            ],
            "issues": [issue.to_dict() for issue in self.issues],
        }


def preprocess_lines(
    lines: Sequence[str],
    options: Optional[PreProcessOptions] = None,
    source_path: Optional[Path] = None,
) -> PreProcessResult:
    """Preprocess source lines that are already in memory.

    Args:
        lines: Source lines without line endings
        options: Preprocessing options (uses defaults if not provided)
        source_path: Source file the lines came from, recorded in the result

    Returns:
        PreProcessResult with one Line per line remaining after trimming

    Raises:
        PreProcessingError: If every line is blank
    """
    if options is None:
        options = PreProcessOptions()

    start_time = time.perf_counter()
    pre_processor = PreProcessor(lines)
    try:
        pre_processor.pre_process()
    except EmptyInputError as e:
        raise PreProcessingError(f"Preprocessing failed: {e}") from e
    elapsed = time.perf_counter() - start_time

    if pre_processor.has_issues:
        logger.warning(
            f"{pre_processor.issue_count} format issues found"
            + (f" in {source_path}" if source_path else "")
        )

    return PreProcessResult(
        source_path=source_path,
        lines=list(pre_processor.pre_processed_lines),
        issues=list(pre_processor.iter_issues()),
        line_count=pre_processor.line_counter,
        execution_time_seconds=round(elapsed, 4),
        options=options,
    )


def preprocess_file(
    source_path: Path,
    options: Optional[PreProcessOptions] = None,
) -> PreProcessResult:
    """Read a COBOL source file and preprocess its lines.

    Args:
        source_path: Path to the COBOL source file
        options: Preprocessing options (uses defaults if not provided)

    Returns:
        PreProcessResult for the file

    Raises:
        FileNotFoundError: If source file doesn't exist
        PreProcessingError: If the file has no non-blank line

    Example:
        >>> from api import preprocess_file
        >>> from pathlib import Path
        >>>
        >>> result = preprocess_file(Path("myprogram.cob"))
        >>> print(result.line_count, len(result.issues))
    """
    if options is None:
        options = PreProcessOptions()

    lines = read_source_lines(source_path, options.encoding)
    return preprocess_lines(lines, options, source_path=source_path)


def read_source_lines(source_path: Path, encoding: str = "utf-8") -> List[str]:
    """Read a source file and split it into physical lines.

    Lines end only at CR, LF or CRLF. Characters such as form feed that
    str.splitlines() also treats as boundaries are kept in the line.

    Args:
        source_path: Path to the COBOL source file
        encoding: Encoding used to decode the file

    Returns:
        Physical lines without line endings

    Raises:
        FileNotFoundError: If source file doesn't exist
    """
    if not source_path.exists():
        raise FileNotFoundError(f"Source file not found: {source_path}")

    if not source_path.is_file():
        raise FileNotFoundError(f"Source path is not a file: {source_path}")

    logger.info(f"Reading source file: {source_path}")
    # newline="" keeps CR characters so the terminator split sees them
    with open(source_path, "r", encoding=encoding, errors="replace", newline="") as f:
        source = f.read()

    lines = _LINE_TERMINATOR.split(source)
    if lines and lines[-1] == "":
        # Terminator of the last line, not an extra line
        lines.pop()
    return lines
