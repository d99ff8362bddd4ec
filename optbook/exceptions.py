"""Custom exceptions for rendering and authoring, with path and converter references."""

from pathlib import Path
from typing import Optional

# Lines of converter stderr echoed in the exception message
STDERR_PREVIEW_LINES = 8


class RenderingError(Exception):
    """
    Base exception for rendering failures.

    Attributes:
        message: Error description
        path: File the failure refers to (source or output)
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        self.message = message
        self.path = path

        parts = [message]
        if path is not None:
            parts.append(f"Path: {path}")

        super().__init__("\n".join(parts))


class ConversionError(RenderingError):
    """
    Exception raised when the source cannot be converted.

    Covers an unreadable source, an unresolvable template, a missing converter,
    and any problem the converter itself reports.

    Attributes:
        returncode: Converter exit status (None if the converter never ran)
        stderr: Converter standard error
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        self.returncode = returncode
        self.stderr = stderr

        if returncode is not None:
            message = f"{message} (exit code {returncode})"
        if stderr.strip():
            preview = stderr.strip().splitlines()[:STDERR_PREVIEW_LINES]
            message = message + "\nConverter output:\n  " + "\n  ".join(preview)

        super().__init__(message, path)


class WriteError(RenderingError):
    """Exception raised when the output path cannot be written or removed."""

    pass


class NotFoundError(RenderingError):
    """Exception raised when an expected output file does not exist."""

    pass
