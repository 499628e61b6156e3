"""Exception hierarchy for the code cleanup scanner."""

from __future__ import annotations

from pathlib import Path


class CleanupError(Exception):
    """Base class for scanner errors."""


class ConfigurationError(CleanupError):
    """Raised for a missing source root or invalid configuration values."""


class SourceReadError(CleanupError):
    """A single source file could not be read or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Error processing file: {path} ({reason})")
        self.path = path
        self.reason = reason


class CheckError(CleanupError):
    """A check could not run against one file."""


class ParseError(CheckError):
    """The Java syntax tree could not be built."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unable to parse {path}: {reason}")
        self.path = path
        self.reason = reason
