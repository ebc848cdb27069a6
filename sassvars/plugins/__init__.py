"""Plugin implementations, discovery and the plugin pipeline."""

from __future__ import annotations

import inspect
from importlib import metadata
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from ..values import StructuredValue
from .base import Plugin
from .compact import CompactPlugin, MinimalPlugin
from .filter import FilterPlugin
from .serialize import SerializePlugin

_ENTRY_POINT_GROUP = "sassvars.plugins"

PluginFactory = Callable[..., Plugin]

_BUILTIN_FACTORIES: dict[str, PluginFactory] = {
    "serialize": SerializePlugin,
    "compact": CompactPlugin,
    "minimal": MinimalPlugin,
    "filter": FilterPlugin,
}


def load_plugins(specs: Sequence[Any] | None) -> List[Plugin]:
    """Instantiate plugins from names, ``{"plugin", "options"}`` mappings or objects."""
    plugins: List[Plugin] = []
    for spec in specs or []:
        plugins.append(_load_plugin(spec))
    return plugins


def _load_plugin(spec: Any) -> Plugin:
    if isinstance(spec, Plugin):
        return spec
    if isinstance(spec, type) and issubclass(spec, Plugin):
        return spec()
    if isinstance(spec, str):
        return _factory_for(spec)()
    if isinstance(spec, Mapping):
        target = spec.get("plugin")
        options = spec.get("options")
        if isinstance(target, str):
            return _factory_for(target)(options)
        if isinstance(target, type) and issubclass(target, Plugin):
            return target(options)
        raise TypeError("Plugin mapping requires a 'plugin' name or Plugin subclass")
    raise TypeError(f"Unsupported plugin specification: {spec!r}")


def _factory_for(name: str) -> PluginFactory:
    key = name.lower()
    factory = _BUILTIN_FACTORIES.get(key)
    if factory is not None:
        return factory
    for entry in _iter_entry_points():
        if entry.name.lower() != key:
            continue
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - defensive guard
            raise RuntimeError(f"Failed to load plugin entry point '{name}': {exc}") from exc
        return _coerce_factory(loaded)
    raise ValueError(f"Unknown plugin requested: {name}")


def _coerce_factory(obj: object) -> PluginFactory:
    if isinstance(obj, Plugin):
        return lambda options=None: obj  # type: ignore[misc]
    if isinstance(obj, type) and issubclass(obj, Plugin):
        return obj
    if callable(obj):

        def _factory(options: Optional[Mapping[str, Any]] = None) -> Plugin:
            instance = obj(options) if options is not None else obj()
            if not isinstance(instance, Plugin):
                raise TypeError("Plugin entry point factory did not return a Plugin instance")
            return instance

        return _factory
    raise TypeError("Plugin entry point must be a Plugin subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    try:
        entry_points = metadata.entry_points()
    except Exception:  # pragma: no cover - defensive guard
        return []
    return entry_points.select(group=_ENTRY_POINT_GROUP)


class Pluggable:
    """Runs registered plugins in order, each receiving the previous output."""

    POST_VALUE = "post_value"
    POST_EXTRACT = "post_extract"

    def __init__(self, plugins: Iterable[Plugin] = ()) -> None:
        self.plugins = list(plugins)

    @classmethod
    def from_specs(cls, specs: Sequence[Any] | None) -> "Pluggable":
        return cls(load_plugins(specs))

    def run_post_value(self, value: StructuredValue, native: object) -> StructuredValue:
        for plugin in self.plugins:
            value = plugin.post_value(value, native)
        return value

    def run_post_extract(self, payload: Dict[str, Any]) -> Any:
        result: Any = payload
        for plugin in self.plugins:
            result = plugin.post_extract(result)
            if inspect.isawaitable(result):
                close = getattr(result, "close", None)
                if callable(close):
                    close()
                raise TypeError(
                    f"Plugin '{plugin.name}' returned an awaitable; use the async extraction API"
                )
        return result

    async def run_post_extract_async(self, payload: Dict[str, Any]) -> Any:
        result: Any = payload
        for plugin in self.plugins:
            result = plugin.post_extract(result)
            if inspect.isawaitable(result):
                result = await result
        return result


__all__ = [
    "CompactPlugin",
    "FilterPlugin",
    "MinimalPlugin",
    "Pluggable",
    "Plugin",
    "SerializePlugin",
    "load_plugins",
]
