"""Project settings — load optional matlit.yaml defaults."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from matlit.io.fileops import read_text_safe

CONFIG_FILENAME = "matlit.yaml"

_ALLOWED_KEYS = {"name", "backup", "events"}


class Settings:
    """Defaults for CLI options. Explicit flags always win."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        data = data or {}
        unknown = sorted(set(data) - _ALLOWED_KEYS)
        if unknown:
            raise ValueError(f"Unknown config keys in {CONFIG_FILENAME}: {', '.join(unknown)}")
        name = data.get("name")
        if name is not None and not isinstance(name, str):
            raise ValueError(f"'name' in {CONFIG_FILENAME} must be a string, got {type(name).__name__}")
        self.name: str | None = name
        self.backup: bool = _flag(data, "backup")
        self.events: bool = _flag(data, "events")

    @classmethod
    def load(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        text = read_text_safe(path)
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Cannot parse {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"{CONFIG_FILENAME} must be a mapping/object.")
        return cls(data)

    @classmethod
    def load_from_dir(cls, directory: str | Path) -> "Settings":
        """Load matlit.yaml from a directory, or defaults if absent."""
        path = Path(directory) / CONFIG_FILENAME
        if path.exists():
            return cls.load(path)
        return cls()


def _flag(data: dict[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(f"'{key}' in {CONFIG_FILENAME} must be true or false, got {value!r}")
    return value
