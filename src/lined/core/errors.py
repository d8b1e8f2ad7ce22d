# lined/core/errors.py
"""Exception types for failures the editor cannot recover from.

Terminal I/O failures and file save failures end the session with exit
code 1. File load failures are not represented here: they degrade to an
empty, untitled buffer.
"""


class LinedError(Exception):
    """Base class for fatal editor errors."""

    exit_code = 1


class TerminalIOError(LinedError):
    """The terminal could not be queried, configured or written to."""


class FileSaveError(LinedError):
    """Writing the document back to disk failed."""

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"Cannot save '{filename}': {reason}")
        self.filename = filename
        self.reason = reason
