"""
Input errors raised while loading syntax-data.json or the grammar document.
"""
from pathlib import Path
from typing import Optional


class SyntaxDataError(Exception):
    """Base class for unusable input documents."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class MissingInputError(SyntaxDataError):
    """Raised when an input file does not exist."""


class MalformedInputError(SyntaxDataError):
    """Raised when an input file is not valid JSON or has the wrong shape."""
