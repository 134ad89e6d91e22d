from __future__ import annotations

"""
Fatal Error Taxonomy.

Every exception defined here aborts the whole run: the analysis either
completes and yields a full result, or fails before producing output.
Recoverable conditions (unreadable file metadata, failed image probes) are
handled locally by the classifiers and never surface as exceptions.
"""

from typing import Optional


class ScanError(Exception):
    """
    Base class for errors that terminate a directory analysis.

    Attributes:
        path: Filesystem path involved in the failure.
        cause: Underlying system error, if any.
    """

    action = "could not process"

    def __init__(self, path: str, cause: Optional[Exception] = None):
        self.path = path
        self.cause = cause
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        reason = ""
        if self.cause is not None:
            reason = f": {getattr(self.cause, 'strerror', None) or self.cause}"
        return f"{self.action} '{self.path}'{reason}"


class DirectoryOpenError(ScanError):
    """A directory in the tree could not be opened for listing."""

    action = "could not open directory"


class FileReadError(ScanError):
    """A text file could not be opened for word counting."""

    action = "could not open file"


class ResourceLimitError(ScanError):
    """The open file descriptor limit could not be applied."""

    action = "could not set open file limit"
