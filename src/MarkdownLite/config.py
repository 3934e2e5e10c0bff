from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError


@dataclass(frozen=True)
class CliConfig:
    input: str = "-"
    output: str = "-"
    verbose: bool = False


_FIELD_TYPES = {"input": str, "output": str, "verbose": bool}


def parse_config(text: str) -> CliConfig:
    """Parse a YAML mapping of CLI defaults."""
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping.")

    values: Dict[str, Any] = {}
    for key, value in data.items():
        expected = _FIELD_TYPES.get(key)
        if expected is None:
            raise ConfigError(f"Unknown config key: {key!r}")
        if not isinstance(value, expected):
            raise ConfigError(f"Config key {key!r} must be of type {expected.__name__}")
        values[key] = value
    return CliConfig(**values)


def load_config(path: Path) -> CliConfig:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {path}") from exc
    return parse_config(text)


def merge_overrides(config: CliConfig, **overrides: Optional[Any]) -> CliConfig:
    """Apply explicitly given values (not None) on top of ``config``."""
    names = {f.name for f in fields(CliConfig)}
    changes = {key: value for key, value in overrides.items() if key in names and value is not None}
    return replace(config, **changes)
