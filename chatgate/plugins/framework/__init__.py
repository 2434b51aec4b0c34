# -*- coding: utf-8 -*-
"""Location: ./chatgate/plugins/framework/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Plugin framework package.
Exposes core chatgate plugin components:
- Context
- Manager
- Payloads
- Models
- Host API
"""

# Standard
import os
from typing import Optional

# First-Party
from chatgate.plugins.framework.api import HostAPI, InMemoryHostAPI
from chatgate.plugins.framework.base import HookRef, Plugin, PluginRef
from chatgate.plugins.framework.errors import HostAPIError, PluginError
from chatgate.plugins.framework.hooks.channels import ChannelHasBeenUpdatedPayload, ChannelHasBeenUpdatedResult, ChannelHookType
from chatgate.plugins.framework.hooks.messages import MessageHookType, MessageWillBePostedPayload, MessageWillBePostedResult
from chatgate.plugins.framework.hooks.registry import get_hook_registry, HookRegistry
from chatgate.plugins.framework.loader.config import ConfigLoader
from chatgate.plugins.framework.loader.plugin import PluginLoader
from chatgate.plugins.framework.manager import PluginManager
from chatgate.plugins.framework.models import (
    Config,
    GlobalContext,
    PluginConfig,
    PluginContext,
    PluginErrorModel,
    PluginMode,
    PluginPayload,
    PluginResult,
    PluginSettings,
    PluginViolation,
)

# Plugin manager singleton (lazy initialization)
_plugin_manager: Optional[PluginManager] = None


def get_plugin_manager(api: HostAPI) -> Optional[PluginManager]:
    """Get or initialize the plugin manager singleton.

    The plugin manager is lazily created on first access if plugins are enabled.
    The config path comes from ``PLUGIN_CONFIG_FILE`` or the settings.

    Args:
        api: host API bound to plugins; only used when the manager is first created.

    Returns:
        PluginManager instance if plugins are enabled, None otherwise.

    Raises:
        ValueError: if the manager has to be created and ``api`` is None.
    """
    global _plugin_manager  # pylint: disable=global-statement
    if _plugin_manager is None:
        # First-Party
        from chatgate.config import settings  # pylint: disable=import-outside-toplevel
        from chatgate.services.logging_service import LoggingService  # pylint: disable=import-outside-toplevel

        if settings.plugins_enabled:
            LoggingService().configure()
            config_file = os.getenv("PLUGIN_CONFIG_FILE", settings.plugin_config_file)
            _plugin_manager = PluginManager(config_file, api=api)
    return _plugin_manager


__all__ = [
    "ChannelHasBeenUpdatedPayload",
    "ChannelHasBeenUpdatedResult",
    "ChannelHookType",
    "Config",
    "ConfigLoader",
    "get_hook_registry",
    "get_plugin_manager",
    "GlobalContext",
    "HookRef",
    "HookRegistry",
    "HostAPI",
    "HostAPIError",
    "InMemoryHostAPI",
    "MessageHookType",
    "MessageWillBePostedPayload",
    "MessageWillBePostedResult",
    "Plugin",
    "PluginConfig",
    "PluginContext",
    "PluginError",
    "PluginErrorModel",
    "PluginLoader",
    "PluginManager",
    "PluginMode",
    "PluginPayload",
    "PluginRef",
    "PluginResult",
    "PluginSettings",
    "PluginViolation",
]
