"""Severity definitions for scanner violations."""

from __future__ import annotations

import logging
from enum import Enum


class Severity(str, Enum):
    """Enumerate the supported severity levels."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    @property
    def log_level(self) -> int:
        """Return the ``logging`` level used when reporting at this severity."""

        ordering = {
            Severity.ERROR: logging.ERROR,
            Severity.WARNING: logging.WARNING,
            Severity.INFO: logging.INFO,
        }
        return ordering[self]
