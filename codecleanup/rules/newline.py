"""Require a line terminator as the last byte of each file."""

from __future__ import annotations

from typing import Iterator

from codecleanup.config import CheckConfig
from codecleanup.result import Violation
from codecleanup.source import SourceFile

LINE_TERMINATORS = (b"\n", b"\r")


class NewlineCheck:
    """Flag files whose last byte is neither LF nor CR."""

    name = "newline_at_eof"

    def enabled(self, config: CheckConfig) -> bool:
        return config.check_newline_at_end

    def scan(self, source: SourceFile, config: CheckConfig) -> Iterator[Violation]:
        if not source.raw:
            return
        if source.raw[-1:] in LINE_TERMINATORS:
            return
        yield Violation(
            rule=self.name,
            path=str(source.path),
            message="Missing newline at end of file",
        )
