"""Limit the number of parameters declared by a method."""

from __future__ import annotations

import re
from typing import Iterator

from codecleanup.config import CheckConfig
from codecleanup.result import Violation
from codecleanup.source import SourceFile

# Modifiers and return type, then the method name and its parameter list, all
# on one line. Every comma in the list counts, including those of generics.
METHOD_PATTERN = re.compile(r"^\s*(?:[\w<>\[\]]+\s+)+?(\w+)\s*\(([^)]*)\)\s*\{?", re.MULTILINE)


def count_parameters(param_block: str) -> int:
    """Return the number of comma-separated segments, zero for an empty list."""

    param_block = param_block.strip()
    if not param_block:
        return 0
    return len(param_block.split(","))


class ParamCountCheck:
    """Flag single-line method signatures with too many parameters."""

    name = "max_parameters"

    def enabled(self, config: CheckConfig) -> bool:
        return config.max_parameters_enabled

    def scan(self, source: SourceFile, config: CheckConfig) -> Iterator[Violation]:
        limit = config.max_method_parameters
        for number, line in source.numbered_lines():
            for match in METHOD_PATTERN.finditer(line.strip()):
                method_name = match.group(1)
                param_count = count_parameters(match.group(2))
                if param_count > limit:
                    yield Violation(
                        rule=self.name,
                        path=str(source.path),
                        line=number,
                        message=f"Method '{method_name}' has {param_count} parameters (max allowed: {limit})",
                    )
