"""Source tree helper utilities."""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..errors import ConfigurationError

JAVA_EXTENSIONS = (".java",)


def find_source_files(root: Path, extensions: tuple[str, ...] = JAVA_EXTENSIONS) -> List[Path]:
    """Return source files beneath ``root`` in a stable, sorted order."""

    root = Path(root)
    if not root.is_dir():
        raise ConfigurationError(f"Source directory does not exist: {root.absolute()}")
    return sorted(path for path in root.rglob("*") if path.suffix in extensions and path.is_file())
