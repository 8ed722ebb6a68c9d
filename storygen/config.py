"""Configuration loading for storygen (.storygen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .analyzers import REACTIVE_DECORATORS, REGISTRATION_FUNCTION, SUPPORTED_DIALECTS
from .rendering.constants import DEFAULT_DOCS_TAG, DEFAULT_SOURCE_MARKER, DEFAULT_TITLE_PREFIX

CONFIG_FILENAME = ".storygen.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GeneratorConfig:
    """Settings controlling discovery, analysis and rendering."""

    root: Path
    pattern: Optional[str] = None
    source_marker: str = DEFAULT_SOURCE_MARKER
    output_suffix: str = ".stories.ts"
    title_prefix: str = DEFAULT_TITLE_PREFIX
    docs_tag: str = DEFAULT_DOCS_TAG
    registration_function: str = REGISTRATION_FUNCTION
    reactive_decorators: List[str] = field(default_factory=lambda: sorted(REACTIVE_DECORATORS))
    dialect: str = "typescript"
    templates_dir: Optional[Path] = None


def load_config(config_path: Path) -> GeneratorConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GeneratorConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    defaults = GeneratorConfig(root=root)
    dialect = _as_str(data.get("dialect")) or defaults.dialect
    if dialect not in SUPPORTED_DIALECTS:
        raise ConfigError(
            f"Unsupported dialect '{dialect}' in {CONFIG_FILENAME}; expected one of {', '.join(SUPPORTED_DIALECTS)}"
        )

    decorators = _as_str_list(data.get("reactive_decorators")) or defaults.reactive_decorators
    templates_dir_str = _as_str(data.get("templates_dir"))

    return GeneratorConfig(
        root=root,
        pattern=_as_str(data.get("pattern")),
        source_marker=_as_str(data.get("source_marker")) or defaults.source_marker,
        output_suffix=_as_str(data.get("output_suffix")) or defaults.output_suffix,
        title_prefix=_as_str(data.get("title_prefix")) or defaults.title_prefix,
        docs_tag=_as_str(data.get("docs_tag")) or defaults.docs_tag,
        registration_function=_as_str(data.get("registration_function"))
        or defaults.registration_function,
        reactive_decorators=decorators,
        dialect=dialect,
        templates_dir=root / templates_dir_str if templates_dir_str else None,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
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


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, str)]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "GeneratorConfig", "load_config"]
