"""Utility helpers for the scanner."""

from .fileio import read_yaml_file, read_source_file
from .code import find_source_files

__all__ = [
    "read_yaml_file",
    "read_source_file",
    "find_source_files",
]
