"""Immutable in-memory view of one source file."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Tuple

SOURCE_ENCODING = "utf-8"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> Tuple[str, ...]:
    """Split on CRLF, CR or LF; a trailing terminator adds no empty line."""

    if not text:
        return ()
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return tuple(lines)


@dataclass(frozen=True)
class SourceFile:
    """Raw bytes, decoded text and 1-based lines of a file."""

    path: Path
    raw: bytes
    text: str
    lines: Tuple[str, ...]

    @classmethod
    def from_bytes(cls, path: Path, raw: bytes) -> "SourceFile":
        """Decode ``raw``; raises ``UnicodeDecodeError`` on invalid input."""

        text = raw.decode(SOURCE_ENCODING)
        return cls(path=Path(path), raw=raw, text=text, lines=split_lines(text))

    def numbered_lines(self) -> Iterator[Tuple[int, str]]:
        """Yield ``(line_number, line)`` pairs starting at 1."""

        return enumerate(self.lines, start=1)
