"""Configuration loading for qbdoc (.qbdoc.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".qbdoc.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ParameterKeys:
    """Query string keys, mirroring ``config/query-builder.php``."""

    include: str = "include"
    filter: str = "filter"
    sort: str = "sort"
    fields: str = "fields"


@dataclass
class RoutesConfig:
    """Route files to document and the URI prefix applied to them."""

    files: List[str] = field(default_factory=lambda: ["routes/api.php"])
    prefix: str = "api"


@dataclass
class DocumentConfig:
    title: str = "API Documentation"
    version: str = "1.0.0"
    servers: List[str] = field(default_factory=list)


@dataclass
class ExtensionConfig:
    enabled: Optional[List[str]] = None


@dataclass
class QbdocConfig:
    """Represents the settings defined in .qbdoc.yml."""

    root: Path
    parameters: ParameterKeys = field(default_factory=ParameterKeys)
    routes: RoutesConfig = field(default_factory=RoutesConfig)
    document: DocumentConfig = field(default_factory=DocumentConfig)
    extensions: ExtensionConfig = field(default_factory=ExtensionConfig)
    hooks: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> QbdocConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return QbdocConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = QbdocConfig(root=root)

    parameter_data = _as_dict(data.get("parameters"))
    for name in ("include", "filter", "sort", "fields"):
        value = _as_str(parameter_data.get(name))
        if value:
            setattr(config.parameters, name, value)

    routes_data = _as_dict(data.get("routes"))
    if "files" in routes_data:
        config.routes.files = _as_str_list(routes_data.get("files"))
    if "prefix" in routes_data:
        config.routes.prefix = _as_str(routes_data.get("prefix")) or ""

    document_data = _as_dict(data.get("document"))
    config.document.title = _as_str(document_data.get("title")) or config.document.title
    config.document.version = _as_str(document_data.get("version")) or config.document.version
    config.document.servers = _as_str_list(document_data.get("servers"))

    extension_data = _as_dict(data.get("extensions"))
    if "enabled" in extension_data:
        config.extensions.enabled = _as_str_list(extension_data.get("enabled"))

    config.hooks = _as_str_list(data.get("hooks"))
    return config


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


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DocumentConfig",
    "ExtensionConfig",
    "ParameterKeys",
    "QbdocConfig",
    "RoutesConfig",
    "load_config",
]
