"""Basic file IO helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..errors import SourceReadError
from ..source import SourceFile


def read_yaml_file(path: Path) -> Any:
    """Return the parsed YAML if the file exists, otherwise ``None``."""

    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def read_source_file(path: Path) -> SourceFile:
    """Read and decode one source file, raising ``SourceReadError`` on failure."""

    try:
        with path.open("rb") as handle:
            raw = handle.read()
        return SourceFile.from_bytes(path, raw)
    except OSError as exc:
        raise SourceReadError(path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise SourceReadError(path, f"not valid UTF-8 at byte {exc.start}") from exc
