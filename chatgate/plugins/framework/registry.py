# -*- coding: utf-8 -*-
"""Location: ./chatgate/plugins/framework/registry.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Plugin instance registry.
Holds the loaded plugins by name and, per hook, their hook references in
priority order.
"""

# Standard
from collections import defaultdict
import logging

# First-Party
from chatgate.plugins.framework.base import HookRef, Plugin, PluginRef

logger = logging.getLogger(__name__)


class PluginInstanceRegistry:
    """Loaded plugins and their hook references.

    Examples:
        >>> from chatgate.plugins.framework.models import PluginConfig
        >>> from chatgate.plugins.framework.hooks.channels import ChannelHookType
        >>> class Noop(Plugin):
        ...     async def channel_has_been_updated(self, payload, context): ...
        >>> registry = PluginInstanceRegistry()
        >>> registry.register(Noop(PluginConfig(name="noop", kind="x.Noop", hooks=[ChannelHookType.CHANNEL_HAS_BEEN_UPDATED])))
        >>> [ref.name for ref in registry.get_hook_refs_for_hook(ChannelHookType.CHANNEL_HAS_BEEN_UPDATED)]
        ['channel_has_been_updated']
        >>> registry.unregister("noop")
        >>> registry.plugin_count
        0
    """

    def __init__(self) -> None:
        self._plugins: dict[str, PluginRef] = {}
        self._hooks: dict[str, list[HookRef]] = defaultdict(list)
        self._sorted: dict[str, list[HookRef]] = {}

    def register(self, plugin: Plugin) -> None:
        """Add a plugin and a hook reference for each of its configured hooks.

        Args:
            plugin: the plugin instance.

        Raises:
            ValueError: if a plugin with the same name is registered.
            PluginError: if one of the configured hooks has no valid handler.
        """
        if plugin.name in self._plugins:
            raise ValueError(f"Plugin {plugin.name} already registered")

        plugin_ref = PluginRef(plugin)
        # All refs are resolved before anything is stored.
        hook_refs = [HookRef(hook, plugin_ref) for hook in plugin.hooks]

        self._plugins[plugin.name] = plugin_ref
        for hook_ref in hook_refs:
            self._hooks[hook_ref.name].append(hook_ref)
            self._sorted.pop(hook_ref.name, None)

        logger.info("Registered plugin %s (priority %d) for hooks %s", plugin.name, plugin.priority, list(plugin.hooks))

    def unregister(self, plugin_name: str) -> None:
        """Remove a plugin and its hook references. Unknown names are ignored.

        Args:
            plugin_name: name of the plugin.
        """
        plugin_ref = self._plugins.pop(plugin_name, None)
        if plugin_ref is None:
            return
        for hook in plugin_ref.hooks:
            self._hooks[hook] = [ref for ref in self._hooks[hook] if ref.plugin_ref is not plugin_ref]
            self._sorted.pop(hook, None)
        logger.info("Unregistered plugin %s", plugin_name)

    def get_hook_refs_for_hook(self, hook_type: str) -> list[HookRef]:
        """Return the hook references of a hook, lowest priority value first.

        Plugins with equal priority keep their registration order.

        Args:
            hook_type: the hook name.

        Returns:
            The sorted hook references.
        """
        refs = self._sorted.get(hook_type)
        if refs is None:
            refs = self._sorted[hook_type] = sorted(self._hooks.get(hook_type, []), key=lambda ref: ref.plugin_ref.priority)
        return refs

    def get_all_plugins(self) -> list[PluginRef]:
        """Return all plugin references in registration order."""
        return list(self._plugins.values())

    @property
    def plugin_count(self) -> int:
        """Number of registered plugins."""
        return len(self._plugins)

    async def shutdown(self) -> None:
        """Shut plugins down, last registered first, and empty the registry.

        A failing shutdown is logged and does not stop the others.
        """
        for plugin_ref in reversed(self.get_all_plugins()):
            try:
                await plugin_ref.plugin.shutdown()
            except Exception:
                logger.exception("Error shutting down plugin %s", plugin_ref.name)
        self._plugins.clear()
        self._hooks.clear()
        self._sorted.clear()
