# -*- coding: utf-8 -*-
"""Location: ./chatgate/plugins/framework/base.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Base plugin implementation.
A plugin is configured by a PluginConfig and reaches the chat server
through a bound HostAPI. The registry does not hold plugins directly but
PluginRef and HookRef wrappers, the latter pointing at the coroutine that
handles one hook.
"""

# Standard
from abc import ABC
import inspect
from typing import Awaitable, Callable, Optional
import uuid

# First-Party
from chatgate.plugins.framework.api import HostAPI
from chatgate.plugins.framework.errors import PluginError
from chatgate.plugins.framework.models import (
    PluginConfig,
    PluginContext,
    PluginErrorModel,
    PluginMode,
    PluginPayload,
    PluginResult,
)

HookFunction = Callable[[PluginPayload, PluginContext], Awaitable[PluginResult]]


def _plugin_error(plugin_name: str, message: str) -> PluginError:
    return PluginError(error=PluginErrorModel(message=message, plugin_name=plugin_name))


class Plugin(ABC):
    """Base class for chat event plugins.

    Subclasses implement one coroutine per hook, named after the hook, e.g.
    ``async def message_will_be_posted(self, payload, context)``.

    Examples:
        >>> from chatgate.plugins.framework.hooks.messages import MessageHookType
        >>> plugin = Plugin(PluginConfig(
        ...     name="limiter",
        ...     kind="chatgate.plugins.framework.Plugin",
        ...     hooks=[MessageHookType.MESSAGE_WILL_BE_POSTED],
        ...     priority=50,
        ... ))
        >>> (plugin.name, plugin.priority, plugin.mode.value)
        ('limiter', 50, 'enforce')
    """

    def __init__(self, config: PluginConfig) -> None:
        """Initialize a plugin with a configuration.

        Args:
            config: The plugin configuration
        """
        self._config = config
        self._api: Optional[HostAPI] = None

    @property
    def config(self) -> PluginConfig:
        """The plugin configuration."""
        return self._config

    @property
    def name(self) -> str:
        """Configured plugin name."""
        return self._config.name

    @property
    def priority(self) -> int:
        """Execution priority, lower runs first."""
        return self._config.priority

    @property
    def mode(self) -> PluginMode:
        """Configured plugin mode."""
        return self._config.mode

    @property
    def hooks(self) -> list[str]:
        """Hook names the plugin is configured for."""
        return self._config.hooks

    @property
    def tags(self) -> list[str]:
        """Free-form tags from the configuration."""
        return self._config.tags

    @property
    def api(self) -> HostAPI:
        """Return the host API bound to this plugin.

        Returns:
            The host API.

        Raises:
            PluginError: if the plugin has not been bound to a host.
        """
        if self._api is None:
            raise _plugin_error(self.name, f"Plugin '{self.name}' is not bound to a host API.")
        return self._api

    @api.setter
    def api(self, api: HostAPI) -> None:
        self._api = api

    async def initialize(self) -> None:
        """Prepare plugin resources. Called once after construction."""

    async def shutdown(self) -> None:
        """Release plugin resources."""


class PluginRef:
    """Registry handle for a plugin instance, identified by a random uuid.

    Examples:
        >>> ref = PluginRef(Plugin(PluginConfig(name="ref_test", kind="test.Plugin", mode=PluginMode.PERMISSIVE)))
        >>> ref.name, ref.mode.value, len(ref.uuid)
        ('ref_test', 'permissive', 32)
    """

    def __init__(self, plugin: Plugin):
        self._plugin = plugin
        self._uuid = uuid.uuid4().hex

    @property
    def plugin(self) -> Plugin:
        """The referenced plugin."""
        return self._plugin

    @property
    def uuid(self) -> str:
        """Hex uuid of this reference."""
        return self._uuid

    @property
    def name(self) -> str:
        """Name of the referenced plugin."""
        return self._plugin.name

    @property
    def priority(self) -> int:
        """Priority of the referenced plugin."""
        return self._plugin.priority

    @property
    def mode(self) -> PluginMode:
        """Mode of the referenced plugin."""
        return self._plugin.mode

    @property
    def hooks(self) -> list[str]:
        """Hooks of the referenced plugin."""
        return self._plugin.hooks


class HookRef:
    """Binds a hook name to the plugin coroutine that handles it."""

    def __init__(self, hook: str, plugin_ref: PluginRef):
        """Resolve and check the handler for ``hook`` on the referenced plugin.

        Args:
            hook: name of the hook point (e.g., 'message_will_be_posted').
            plugin_ref: The reference to the plugin to hook.

        Raises:
            PluginError: If the plugin has no method named ``hook``, the method
                is not a coroutine, or it does not take (payload, context).
        """
        plugin_name = plugin_ref.name
        func: Optional[HookFunction] = getattr(plugin_ref.plugin, hook, None)
        if func is None:
            raise _plugin_error(plugin_name, f"Plugin '{plugin_name}' has no hook: '{hook}'. Method must be named '{hook}'")

        # bound methods do not list 'self'
        params = list(inspect.signature(func).parameters)
        if len(params) != 2:
            raise _plugin_error(
                plugin_name,
                f"Plugin '{plugin_name}' hook '{hook}' has invalid signature: expected (payload, context), got {params}.",
            )
        if not inspect.iscoroutinefunction(func):
            raise _plugin_error(plugin_name, f"Plugin '{plugin_name}' hook '{hook}' must be async.")

        self._hook = hook
        self._plugin_ref = plugin_ref
        self._func = func

    @property
    def plugin_ref(self) -> PluginRef:
        """The reference to the hooked plugin."""
        return self._plugin_ref

    @property
    def name(self) -> str:
        """The hook name."""
        return self._hook

    @property
    def hook(self) -> HookFunction:
        """The coroutine function handling the hook."""
        return self._func
