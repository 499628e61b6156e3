"""Report TODO markers left in source files."""

from __future__ import annotations

from typing import Iterator

from codecleanup.config import CheckConfig
from codecleanup.result import Violation
from codecleanup.source import SourceFile

TODO_MARKER = "TODO"


class TodoCheck:
    """Match ``TODO`` anywhere on a line: comments, strings and identifiers alike."""

    name = "todo"

    def enabled(self, config: CheckConfig) -> bool:
        return config.check_todos

    def scan(self, source: SourceFile, config: CheckConfig) -> Iterator[Violation]:
        for number, line in source.numbered_lines():
            if TODO_MARKER in line:
                yield Violation(
                    rule=self.name,
                    path=str(source.path),
                    line=number,
                    message=f"TODO found: {line.strip()}",
                )
