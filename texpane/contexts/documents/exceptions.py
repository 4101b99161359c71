"""Custom exceptions for the documents context."""

from pathlib import Path
from typing import Optional


class DocumentResolutionError(Exception):
    """
    Exception raised when the document to compile cannot be determined.

    The message is user-facing and is posted to the echo area as-is.

    Attributes:
        message: Error description
        source_path: Active file the resolution started from (if any)
    """

    def __init__(self, message: str, source_path: Optional[Path] = None):
        self.message = message
        self.source_path = source_path
        super().__init__(message)
