"""Configuration loading for springviz (.springviz.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".springviz.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SpringVizConfig:
    """Represents the settings defined in .springviz.yml."""

    root: Path
    relations: Optional[List[str]] = None
    strict: bool = False
    graph_name: Optional[str] = None
    extensions: List[str] = field(default_factory=lambda: [".java"])
    exclude_paths: List[str] = field(default_factory=list)
    templates_dir: Optional[Path] = None


def load_config(config_path: Path) -> SpringVizConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SpringVizConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    relations_value = data.get("relations")
    relations: Optional[List[str]] = None
    if isinstance(relations_value, str):
        relations = [item.strip() for item in relations_value.split(",") if item.strip()]
    elif relations_value is not None:
        relations = _as_str_list(relations_value)

    strict = _as_bool(data.get("strict"))
    if data.get("strict") is not None and strict is None:
        raise ConfigError("'strict' must be a boolean")

    extensions = _as_str_list(data.get("extensions")) or [".java"]
    extensions = [ext if ext.startswith(".") else f".{ext}" for ext in extensions]

    templates_dir_str = _as_str(data.get("templates_dir"))

    return SpringVizConfig(
        root=root,
        relations=relations,
        strict=bool(strict),
        graph_name=_as_str(data.get("graph_name")),
        extensions=extensions,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        templates_dir=root / templates_dir_str if templates_dir_str else None,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "SpringVizConfig", "load_config"]
