"""Flag lines that reach the configured maximum length."""

from __future__ import annotations

from typing import Iterator

from codecleanup.config import CheckConfig
from codecleanup.result import Violation
from codecleanup.source import SourceFile


class LineLengthCheck:
    """One violation per line whose length is at least ``max_line_length``."""

    name = "line_length"

    def enabled(self, config: CheckConfig) -> bool:
        return config.line_length_enabled

    def scan(self, source: SourceFile, config: CheckConfig) -> Iterator[Violation]:
        limit = config.max_line_length
        for number, line in source.numbered_lines():
            if len(line) > limit - 1:
                yield Violation(
                    rule=self.name,
                    path=str(source.path),
                    line=number,
                    message=f"Max line length exceeded ({len(line)} characters, limit {limit})",
                )
