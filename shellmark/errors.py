"""Exception types raised by shellmark.

Every failure that must abort a session derives from ``ShellmarkError`` so the
CLI can report it once, after the terminal has been restored.
"""

from __future__ import annotations

from pathlib import Path


class ShellmarkError(Exception):
    """Base class for fatal shellmark errors."""


class BookmarkStoreError(ShellmarkError):
    """Bookmark file could not be read, created, or written."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class BookmarkParseError(BookmarkStoreError):
    """Bookmark file exists but does not hold a valid bookmark list."""


class MetadataError(ShellmarkError):
    """Destination metadata lookup failed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"Couldn't inspect {path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause


class UnboundCommandError(ShellmarkError):
    """A command was issued in a mode whose key table never produces it."""
