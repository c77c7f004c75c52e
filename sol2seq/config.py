"""Configuration for diagram generation.

Settings come from defaults, an optional YAML file, and command-line
overrides, in increasing order of precedence.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

from sol2seq.errors import ConfigError
from sol2seq.utils.compiler import DEFAULT_SOLC


@dataclass(frozen=True)
class Config:
    light_colors: bool = False
    output_file: Path | None = None  # None writes to stdout
    solc_binary: str = DEFAULT_SOLC

    def merged(self, **overrides) -> Config:
        """Return a copy with every override that is not None applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_config(path: str | Path) -> Config:
    """Load a Config from a YAML file.

    Raises:
        ConfigError: If the file is unreadable, not a mapping, or has unknown keys.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(Config)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    output_file = data.get("output_file")
    return Config(
        light_colors=bool(data.get("light_colors", False)),
        output_file=Path(output_file) if output_file else None,
        solc_binary=str(data.get("solc_binary", DEFAULT_SOLC)),
    )
