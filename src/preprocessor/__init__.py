"""Preprocessor module for fixed-format COBOL source lines."""

from .exceptions import EmptyInputError, PreProcessorError
from .line import Line
from .line_issue import LineIssue
from .pre_processor import PreProcessor

__all__ = ["EmptyInputError", "Line", "LineIssue", "PreProcessor", "PreProcessorError"]
