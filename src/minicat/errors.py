"""Exception types raised by minicat.

The CLI catches MinicatError subclasses and reports them as one-line
diagnostics; anything else is a bug and propagates.
"""

from __future__ import annotations


class MinicatError(Exception):
    """Base class for all minicat specific errors."""


class InvalidArguments(MinicatError):
    """Raised when command-line flags conflict or are not recognized."""


class FileOpenError(MinicatError):
    """Raised when an input source cannot be opened or read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class IoWriteError(MinicatError):
    """Raised when writing to the output stream fails. Always fatal."""
