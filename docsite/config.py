"""Configuration loading for docsite (.docsite.yml)."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .logging import get_logger

CONFIG_FILENAME = ".docsite.yml"

_LOGGER = get_logger("config")

_MISSING = object()


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


class Settings:
    """Nested-key access to the raw configuration mapping.

    Lookups of absent keys log a warning and fall back to a default rather
    than failing the render.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: Dict[str, Any] = copy.deepcopy(dict(data or {}))

    def exists(self, keys: Sequence[str]) -> bool:
        return self._lookup(keys) is not _MISSING

    def get(self, keys: Sequence[str], default: Any = None, *, warn: bool = True) -> Any:
        value = self._lookup(keys)
        if value is _MISSING:
            if warn:
                _LOGGER.warning("Unknown configuration key: %s", ".".join(keys))
            return default
        return value

    def set(self, value: Any, keys: Sequence[str]) -> None:
        if not keys:
            raise ValueError("A configuration key path needs at least one key")
        node = self._data
        for key in keys[:-1]:
            child = node.get(key)
            if not isinstance(child, dict):
                child = {}
                node[key] = child
            node = child
        node[keys[-1]] = value

    def extend(self, attributes: Mapping[str, Any], keys: Sequence[str]) -> bool:
        """Merge ``attributes`` into an existing mapping setting; return False when it is absent."""
        setting = self._lookup(keys)
        if not isinstance(setting, dict):
            _LOGGER.warning("Cannot extend a setting that does not exist: %s", ".".join(keys))
            return False
        setting.update(attributes)
        return True

    def as_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    def _lookup(self, keys: Sequence[str]) -> Any:
        node: Any = self._data
        for key in keys:
            if not isinstance(node, dict) or key not in node:
                return _MISSING
            node = node[key]
        return node


@dataclass
class TemplateConfig:
    """Template and navigation settings."""

    use_collapsibles: bool = True
    use_long_names: bool = False
    tutorials_heading: str = "Tutorials"
    layout_file: str = "layout.html.j2"
    static_files: List[str] = field(default_factory=list)
    custom_dir: Optional[Path] = None


@dataclass
class OutputOptions:
    """Command-level options (the ``opts`` block)."""

    destination: Path = Path("out")
    include_private: bool = False
    tutorials: Optional[Path] = None


@dataclass
class SiteConfig:
    """Represents the settings defined in .docsite.yml."""

    root: Path
    templates: TemplateConfig = field(default_factory=TemplateConfig)
    options: OutputOptions = field(default_factory=OutputOptions)
    settings: Settings = field(default_factory=Settings)


def load_config(config_path: Path) -> SiteConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SiteConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")
    return config_from_mapping(data, root=root)


def config_from_mapping(data: Mapping[str, Any], *, root: Path) -> SiteConfig:
    settings = Settings(data)

    templates = TemplateConfig()
    use_collapsibles = _as_bool(settings.get(["templates", "useCollapsibles"], warn=False))
    if use_collapsibles is not None:
        templates.use_collapsibles = use_collapsibles
    use_long_names = _as_bool(
        settings.get(["templates", "default", "useLongnameInNav"], warn=False)
    )
    if use_long_names is not None:
        templates.use_long_names = use_long_names
    heading = _as_str(settings.get(["templates", "tabNames", "tutorials"], warn=False))
    if heading:
        templates.tutorials_heading = heading
    layout = _as_str(settings.get(["templates", "default", "layoutFile"], warn=False))
    if layout:
        templates.layout_file = layout
    templates.static_files = _as_str_list(
        settings.get(["templates", "default", "staticFiles", "include"], warn=False)
    )
    custom_dir = _as_str(settings.get(["templates", "customDir"], warn=False))
    if custom_dir:
        templates.custom_dir = root / custom_dir

    options = OutputOptions()
    # Keys missing from a present ``opts`` block are reported; an absent block means defaults.
    report_missing = settings.exists(["opts"])
    destination = _as_str(settings.get(["opts", "destination"], warn=report_missing))
    if destination:
        options.destination = root / destination
    private = settings.get(["opts", "private"], warn=report_missing)
    options.include_private = bool(_as_bool(private))
    tutorials = _as_str(settings.get(["opts", "tutorials"], warn=report_missing))
    if tutorials:
        options.tutorials = root / tutorials

    return SiteConfig(root=root, templates=templates, options=options, settings=settings)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


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
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "OutputOptions",
    "Settings",
    "SiteConfig",
    "TemplateConfig",
    "config_from_mapping",
    "load_config",
]
