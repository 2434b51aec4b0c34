# -*- coding: utf-8 -*-
"""Plugin loader implementation.

Copyright 2025
SPDX-License-Identifier: Apache-2.0

Resolves the dotted ``kind`` of a plugin configuration to a Plugin
subclass and creates initialized instances of it.
"""

# Standard
import logging
from typing import Type

# First-Party
from chatgate.plugins.framework.base import Plugin
from chatgate.plugins.framework.models import PluginConfig
from chatgate.plugins.framework.utils import import_module, parse_class_name

logger = logging.getLogger(__name__)


class PluginLoader:
    """Loads plugin classes by kind and instantiates them."""

    def __init__(self) -> None:
        self._plugin_types: dict[str, Type[Plugin]] = {}

    def get_plugin_type(self, kind: str) -> Type[Plugin]:
        """Return the plugin class named by ``kind``, importing it on first use.

        Args:
            kind: dotted path, e.g. ``plugins.post_limiter.post_limiter.PostLimiterPlugin``.

        Returns:
            The plugin class.

        Raises:
            ImportError: if the module cannot be imported.
            AttributeError: if the module has no such class.
            TypeError: if the object is not a Plugin subclass.
        """
        plugin_type = self._plugin_types.get(kind)
        if plugin_type is not None:
            return plugin_type

        mod_name, cls_name = parse_class_name(kind)
        try:
            plugin_type = getattr(import_module(mod_name), cls_name)
        except (ImportError, AttributeError):
            logger.exception("Unable to load plugin class '%s'", kind)
            raise
        if not (isinstance(plugin_type, type) and issubclass(plugin_type, Plugin)):
            raise TypeError(f"'{kind}' is not a Plugin subclass")
        self._plugin_types[kind] = plugin_type
        return plugin_type

    async def load_and_instantiate_plugin(self, config: PluginConfig) -> Plugin:
        """Create a plugin from its configuration and await its ``initialize()``.

        Args:
            config: A plugin configuration.

        Returns:
            The initialized plugin.
        """
        plugin = self.get_plugin_type(config.kind)(config)
        await plugin.initialize()
        return plugin
