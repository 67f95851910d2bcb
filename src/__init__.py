"""COBOL Line Preprocessor - Column-based classification of fixed-format COBOL source.

Public API (see api.py):
    preprocess_file: Read a source file and classify its lines
    preprocess_lines: Classify source lines already in memory
    PreProcessOptions: Options for preprocessing
    PreProcessResult: Result container with lines and issues
    PreProcessingError: Exception raised when nothing can be preprocessed

Example:
    >>> from api import preprocess_file
    >>> from pathlib import Path
    >>>
    >>> result = preprocess_file(Path("myprogram.cob"))
    >>> for issue in result.issues:
    ...     print(issue)
"""

__version__ = "0.1.0"
