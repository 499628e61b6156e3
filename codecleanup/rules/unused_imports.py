"""Detect imports whose simple name is never referenced."""

from __future__ import annotations

from typing import Iterator

from codecleanup.config import CheckConfig
from codecleanup.result import Violation
from codecleanup.source import SourceFile
from codecleanup.syntax import parse_java


class UnusedImportCheck:
    """Parse the file and report each import absent from the used-name set.

    Raises ``ParseError`` when the file is not valid Java; the runner skips
    this rule for the file and keeps going.
    """

    name = "unused_imports"

    def enabled(self, config: CheckConfig) -> bool:
        return config.check_unused_imports

    def scan(self, source: SourceFile, config: CheckConfig) -> Iterator[Violation]:
        syntax_tree = parse_java(source.text, source.path)
        for item in syntax_tree.unused_imports():
            yield Violation(
                rule=self.name,
                path=str(source.path),
                line=item.line,
                message=f"Unused import: {item.text}",
            )
