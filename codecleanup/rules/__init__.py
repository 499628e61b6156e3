"""Check protocol shared by every rule."""

from __future__ import annotations

from typing import Iterator, Protocol

from codecleanup.config import CheckConfig
from codecleanup.result import Violation
from codecleanup.source import SourceFile


class Check(Protocol):
    """Protocol implemented by all rule checks.

    Checks are stateless: ``scan`` is a pure function of the source file and
    the configuration, so one instance may serve several threads at once.
    """

    name: str

    def enabled(self, config: CheckConfig) -> bool:
        """Return whether this rule runs under ``config``."""

    def scan(self, source: SourceFile, config: CheckConfig) -> Iterator[Violation]:
        """Yield one violation per rule breach found in ``source``."""
