"""Ordered collection of version manager plugins."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from xvn.plugins.base import VersionManagerPlugin
from xvn.plugins.fnm import FnmPlugin
from xvn.plugins.nvm import NvmPlugin

log = logging.getLogger(__name__)

_BUILTIN_PLUGINS = {
    "nvm": NvmPlugin,
    "fnm": FnmPlugin,
}

DEFAULT_PLUGIN_NAMES = ("nvm", "fnm")


class PluginRegistry:
    """Holds plugins in priority order and picks the right one for a version."""

    def __init__(self, plugin_names: Iterable[str] | None = None) -> None:
        names = list(DEFAULT_PLUGIN_NAMES if plugin_names is None else plugin_names)
        log.info("Initializing plugin registry with: %s", names)

        plugins: list[VersionManagerPlugin] = []
        for name in names:
            factory = _BUILTIN_PLUGINS.get(name)
            if factory is None:
                log.warning("Unknown plugin '%s' in config (ignoring)", name)
                continue
            log.debug("Loading %s plugin", name)
            plugins.append(factory())

        if not plugins:
            log.warning("No valid plugins loaded! Version switching will not work.")
        self._plugins = plugins

    @classmethod
    def with_plugins(cls, plugins: Iterable[VersionManagerPlugin]) -> PluginRegistry:
        """Build a registry from ready-made plugin instances."""
        registry = cls.__new__(cls)
        registry._plugins = list(plugins)
        return registry

    def __repr__(self) -> str:
        return f"PluginRegistry(plugins={self._plugins!r})"

    @property
    def plugins(self) -> Sequence[VersionManagerPlugin]:
        """All registered plugins, in priority order."""
        return tuple(self._plugins)

    @staticmethod
    def _safely_available(plugin: VersionManagerPlugin) -> bool:
        try:
            return plugin.is_available()
        except Exception:  # noqa: BLE001 - an erroring plugin counts as unavailable
            return False

    def find_available_plugin(self) -> VersionManagerPlugin | None:
        """Return the first plugin that reports itself available."""
        log.debug("Searching for available plugin...")
        for plugin in self._plugins:
            try:
                available = plugin.is_available()
            except Exception as exc:  # noqa: BLE001
                log.warning("Error checking availability for %s: %s", plugin.name, exc)
                continue
            if available:
                log.info("Found available plugin: %s", plugin.name)
                return plugin
            log.debug("Plugin %s not available", plugin.name)
        log.debug("No available plugins found")
        return None

    def find_plugin_with_version(self, version: str) -> VersionManagerPlugin | None:
        """Return the first available plugin that has ``version`` installed."""
        log.debug("Searching for plugin with version %s...", version)
        for plugin in self._plugins:
            if not self._safely_available(plugin):
                continue
            try:
                found = plugin.has_version(version)
            except Exception as exc:  # noqa: BLE001
                log.warning(
                    "Error checking version %s on %s: %s", version, plugin.name, exc
                )
                continue
            if found:
                log.info("Found plugin %s with version %s", plugin.name, version)
                return plugin
            log.debug("Plugin %s does not have version %s", plugin.name, version)
        log.debug("No plugin has version %s", version)
        return None

    def available_plugins(self) -> list[VersionManagerPlugin]:
        """Return every plugin that reports itself available."""
        return [plugin for plugin in self._plugins if self._safely_available(plugin)]

    def get_plugin(self, name: str) -> VersionManagerPlugin | None:
        """Return the first plugin called ``name``, if any."""
        return next((plugin for plugin in self._plugins if plugin.name == name), None)