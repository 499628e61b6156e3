"""Check configuration and YAML config-file loading."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigurationError
from .utils.fileio import read_yaml_file

DISABLED = -1
DEFAULT_CONFIG_FILENAME = ".code-cleanup.yaml"
DEFAULT_SOURCE_DIR = "src"

# Keys accepted in the config file that are not CheckConfig fields.
EXTRA_CONFIG_KEYS = ("source_dir",)


@dataclass(frozen=True)
class CheckConfig:
    """Enabled flags and thresholds for every rule."""

    check_unused_imports: bool = True
    max_line_length: int = DISABLED
    check_newline_at_end: bool = True
    check_todos: bool = True
    max_method_parameters: int = DISABLED

    def __post_init__(self) -> None:
        for item in fields(self):
            value = getattr(self, item.name)
            if item.type in ("bool", bool):
                if not isinstance(value, bool):
                    raise ConfigurationError(f"{item.name} must be a boolean, got {value!r}")
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{item.name} must be an integer, got {value!r}")
            if value != DISABLED and value < 0:
                raise ConfigurationError(
                    f"{item.name} must be {DISABLED} (disabled) or a non-negative integer, got {value}"
                )

    @property
    def line_length_enabled(self) -> bool:
        return self.max_line_length != DISABLED

    @property
    def max_parameters_enabled(self) -> bool:
        return self.max_method_parameters != DISABLED

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CheckConfig":
        """Build a config from a mapping of field names, rejecting unknown keys."""

        known = {item.name for item in fields(cls)}
        unknown = sorted(set(data) - known - set(EXTRA_CONFIG_KEYS))
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**{key: value for key, value in data.items() if key in known})

    def with_overrides(self, **overrides: Optional[Any]) -> "CheckConfig":
        """Return a copy with every non-``None`` override applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


def load_config_file(path: Path) -> Dict[str, Any]:
    """Return the config file's mapping, or an empty mapping if it is absent."""

    try:
        data = read_yaml_file(path)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {path}: {exc.strerror or exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} is not a mapping")
    return dict(data)
