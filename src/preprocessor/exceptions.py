"""Exceptions raised by the preprocessor."""


class PreProcessorError(Exception):
    """Base exception for preprocessor failures."""

    pass


class EmptyInputError(PreProcessorError):
    """The input contains no non-blank line."""

    def __init__(self, message: str = "Source contains no non-blank lines"):
        super().__init__(message)
