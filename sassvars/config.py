"""Configuration loading for sassvars (.sassvars.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .compiler import CompileOptions
from .extractor import ExtractOptions

CONFIG_FILENAME = ".sassvars.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CompileConfig:
    """Compiler settings applied to every extraction."""

    include_paths: List[Path] = field(default_factory=list)
    output_style: Optional[str] = None
    precision: Optional[int] = None


@dataclass
class ExtractConfig:
    """Plugin pipeline for extraction results."""

    plugins: List[Any] = field(default_factory=list)


@dataclass
class SassVarsConfig:
    """Represents the settings defined in .sassvars.yml."""

    root: Path
    compile: CompileConfig = field(default_factory=CompileConfig)
    extract: ExtractConfig = field(default_factory=ExtractConfig)

    def compile_options(
        self, *, file: Optional[str] = None, data: Optional[str] = None
    ) -> CompileOptions:
        options = CompileOptions(
            file=file,
            data=data,
            include_paths=[str(path) for path in self.compile.include_paths],
        )
        if self.compile.output_style:
            options.output_style = self.compile.output_style
        if self.compile.precision is not None:
            options.precision = self.compile.precision
        return options

    def extract_options(self) -> ExtractOptions:
        return ExtractOptions(plugins=list(self.extract.plugins))


def load_config(config_path: Path) -> SassVarsConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SassVarsConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    compile_data = _as_dict(data.get("compile"))
    compile_config = CompileConfig()
    if compile_data:
        compile_config.include_paths = [
            root / path for path in _as_str_list(compile_data.get("include_paths"))
        ]
        compile_config.output_style = _as_str(compile_data.get("output_style"))
        compile_config.precision = _as_int(compile_data.get("precision"))

    extract_data = _as_dict(data.get("extract"))
    extract_config = ExtractConfig()
    if extract_data:
        extract_config.plugins = _as_plugin_list(extract_data.get("plugins"))

    return SassVarsConfig(root=root, compile=compile_config, extract=extract_config)


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
    return loaded or {}


def _as_plugin_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (str, dict)):
        value = [value]
    if not isinstance(value, list):
        raise ConfigError("extract.plugins must be a list")
    plugins: List[Any] = []
    for item in value:
        if isinstance(item, str):
            plugins.append(item)
        elif isinstance(item, dict) and isinstance(item.get("plugin"), str):
            plugins.append({"plugin": item["plugin"], "options": _as_dict(item.get("options"))})
        else:
            raise ConfigError(f"Invalid plugin entry in {CONFIG_FILENAME}: {item!r}")
    return plugins


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
