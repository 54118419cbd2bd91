"""Render configuration: load and validate a YAML settings file."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml


class ConfigError(ValueError):
    """Raised when the configuration file is malformed or has unknown keys."""


def _default_heading_sizes() -> list[float]:
    return [24.0, 20.0, 17.0, 15.0, 13.0, 12.0]


@dataclass
class RenderConfig:
    font_name: str = "Calibri"
    font_size_pt: float = 11.0
    code_font_name: str = "Consolas"
    code_font_size_pt: float = 10.0
    heading_sizes_pt: list[float] = field(default_factory=_default_heading_sizes)
    quote_indent_cm: float = 0.75
    list_indent_cm: float = 0.6
    rule_width: int = 30
    highlight: bool = True
    pygments_style: str = "default"

    def heading_size(self, level: int) -> float:
        index = min(max(level, 1), len(self.heading_sizes_pt)) - 1
        return self.heading_sizes_pt[index]


_FIELD_TYPES = {
    "font_name": str,
    "font_size_pt": (int, float),
    "code_font_name": str,
    "code_font_size_pt": (int, float),
    "heading_sizes_pt": list,
    "quote_indent_cm": (int, float),
    "list_indent_cm": (int, float),
    "rule_width": int,
    "highlight": bool,
    "pygments_style": str,
}


def load_config(path: Path | None) -> RenderConfig:
    """Load render settings from a YAML file.

    Returns defaults when ``path`` is None or does not exist.
    Raises ConfigError on parse errors, unknown keys or wrongly typed values.
    """
    if path is None or not path.exists():
        return RenderConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in {path}: {e}"
        raise ConfigError(msg) from e

    return config_from_mapping(data, source=str(path))


def config_from_mapping(data: object, source: str = "<config>") -> RenderConfig:
    if not isinstance(data, dict):
        msg = f"{source}: root must be a mapping of settings"
        raise ConfigError(msg)

    known = {f.name for f in fields(RenderConfig)}
    values: dict[str, object] = {}
    for key, value in data.items():
        if key not in known:
            msg = f"{source}: unknown setting '{key}'"
            raise ConfigError(msg)
        expected = _FIELD_TYPES[key]
        # bool is an int subclass; only accept it where a bool is expected
        if not isinstance(value, expected) or (isinstance(value, bool) and expected is not bool):
            msg = f"{source}: setting '{key}' has invalid value {value!r}"
            raise ConfigError(msg)
        values[key] = value

    sizes = values.get("heading_sizes_pt")
    if sizes is not None:
        if not sizes or not all(isinstance(s, (int, float)) and not isinstance(s, bool) for s in sizes):
            msg = f"{source}: 'heading_sizes_pt' must be a non-empty list of numbers"
            raise ConfigError(msg)
        values["heading_sizes_pt"] = [float(s) for s in sizes]

    return RenderConfig(**values)
