"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus an optional local directory of single-file plugins.
Capabilities: extra type tokens for the resolver.

INVARIANT: Plugin failures are warnings, never errors.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path

import pluggy

from capsule.domain.registry import TYPE_REGISTRY, TypeRegistry
from capsule.plugins.hookspecs import CapsuleHookSpec

PROJECT_NAME = "capsule"
ENTRY_POINT_GROUP = "capsule.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and type registration.

    Parameters:
        registry: Registry that plugin-provided validators are added to.
            Defaults to the process-wide registry.
    """

    def __init__(self, registry: TypeRegistry | None = None) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(CapsuleHookSpec)
        self._registry = TYPE_REGISTRY if registry is None else registry
        self._loaded: bool = False

    def discover_and_load(
        self,
        *,
        entry_points: bool = True,
        local_dir: Path | None = None,
        disabled: list[str] | None = None,
    ) -> list[str]:
        """Discover plugins, then register their type validators.

        Plugins named in *disabled* are blocked before loading.
        Returns a list of loaded plugin names.
        """
        for name in disabled or []:
            self._pm.set_blocked(name)
        if entry_points:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
            self._normalize_plugin_instances()
        if local_dir is not None:
            self._discover_local(local_dir)
        self._register_type_validators()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        if self._loaded:
            self._register_plugin_validators(plugin, resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance. Its type tokens stay registered."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay."""
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        """Return all registered plugins."""
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Scan *local_dir* for single-file Python plugins.

        Each ``*.py`` file (excluding ``_``-prefixed names) is loaded as a
        module. Classes defined in it that carry hookimpl-decorated methods
        are instantiated and registered. A broken file is logged and skipped.
        """
        if not local_dir.is_dir():
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module_name = f"capsule_local_plugin_{py_file.stem}"
            try:
                spec = importlib.util.spec_from_file_location(module_name, py_file)
                if spec is None or spec.loader is None:
                    logger.warning("Could not create module spec for %s", py_file)
                    continue
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception:
                logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
                sys.modules.pop(module_name, None)
                continue

            for _attr_name, obj in inspect.getmembers(module, inspect.isclass):
                if obj.__module__ != module_name:
                    continue
                if not self._has_hook_impls(obj):
                    continue
                if self._pm.is_blocked(module_name):
                    continue
                try:
                    self.register_plugin(obj(), name=module_name)
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        obj.__name__,
                        py_file,
                        exc_info=True,
                    )

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry points may name a class rather than a module or instance;
        hook dispatch against a class leaves ``self`` unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    # ------------------------------------------------------------------
    # Type registration
    # ------------------------------------------------------------------

    def _register_type_validators(self) -> None:
        for plugin in self._pm.get_plugins():
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            self._register_plugin_validators(plugin, plugin_name)

    def _register_plugin_validators(self, plugin: object, plugin_name: str) -> None:
        """Add the validators exposed by a single plugin to the registry."""
        hook = getattr(plugin, "register_type_validators", None)
        if hook is None:
            return

        try:
            validator_map = hook()
        except Exception:
            logger.warning(
                "Failed to collect type validators from plugin %s",
                plugin_name,
                exc_info=True,
            )
            return

        if validator_map is None:
            return
        if not isinstance(validator_map, dict):
            logger.warning("Plugin %s returned non-dict type validators", plugin_name)
            return

        for token, validator in validator_map.items():
            try:
                self._registry.register(token, validator)
            except (TypeError, ValueError):
                logger.warning(
                    "Skipping type token %r from plugin %s",
                    token,
                    plugin_name,
                    exc_info=True,
                )
            else:
                logger.debug("Plugin %s registered type token %r", plugin_name, token)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("capsule")`` sets a ``capsule_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "capsule_impl", None):
                return True
        return False
