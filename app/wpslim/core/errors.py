"""Domain exceptions for wpslim.

All fatal conditions raised by the purge, conversion and ratio
pipelines derive from WpslimError so the CLI can report them uniformly.
"""

from pathlib import Path


class WpslimError(Exception):
    """Base exception for wpslim errors."""


class MissingInputDirectoryError(WpslimError):
    """Raised when the uploads directory does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"'{path}' not found")


class MissingCorpusFileError(WpslimError):
    """Raised when the reference dump file does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"'{path}' not found")


class UnreadableCorpusError(WpslimError):
    """Raised when the reference dump exists but cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot read '{path}': {reason}")


class MissingToolError(WpslimError):
    """Raised when a required external command is not on PATH."""

    def __init__(self, tool: str, hint: str = "") -> None:
        self.tool = tool
        message = f"'{tool}' could not be found."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)
