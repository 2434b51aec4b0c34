# -*- coding: utf-8 -*-
"""Plugin manager.

Copyright 2025
SPDX-License-Identifier: Apache-2.0

Module that manages and calls plugins at hookpoints throughout the chat host.
"""

# Standard
import logging
from typing import Any, Generic, Optional, TypeVar

# First-Party
from chatgate.common.models import Channel, Post
from chatgate.plugins.framework.api import HostAPI
from chatgate.plugins.framework.base import HookRef, Plugin
from chatgate.plugins.framework.errors import convert_exception_to_error, PluginError
from chatgate.plugins.framework.hooks.channels import ChannelHasBeenUpdatedPayload, ChannelHasBeenUpdatedResult, ChannelHookType
from chatgate.plugins.framework.hooks.messages import MessageHookType, MessageWillBePostedPayload, MessageWillBePostedResult
from chatgate.plugins.framework.loader.config import ConfigLoader
from chatgate.plugins.framework.loader.plugin import PluginLoader
from chatgate.plugins.framework.models import Config, GlobalContext, PluginContext, PluginContextTable, PluginMode, PluginResult
from chatgate.plugins.framework.registry import PluginInstanceRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PluginExecutor(Generic[T]):
    """Executes the hook refs registered for one hook point."""

    def __init__(self, config: Optional[Config] = None) -> None:
        """Initialize the executor.

        Args:
            config: the plugin configuration, used for manager wide settings.
        """
        self.config = config

    async def execute(
        self,
        hook_refs: list[HookRef],
        payload: T,
        global_context: GlobalContext,
        local_contexts: Optional[PluginContextTable] = None,
    ) -> tuple[PluginResult[T], PluginContextTable | None]:
        """Run every hook ref in priority order, stopping at the first enforced block.

        Args:
            hook_refs: the hook references to execute.
            payload: the payload to be analyzed.
            global_context: contextual information for all plugins.
            local_contexts: context local to a single plugin.

        Returns:
            The combined result and the local contexts used.

        Raises:
            PluginError: if a plugin crashes and ``fail_on_plugin_error`` is set.
        """
        if not hook_refs:
            return (PluginResult[T](modified_payload=None), None)

        res_local_contexts: PluginContextTable = {}
        combined_metadata: dict[str, Any] = {}
        current_payload: T | None = None
        for hook_ref in hook_refs:
            plugin = hook_ref.plugin_ref.plugin
            local_context_key = global_context.request_id + hook_ref.plugin_ref.uuid
            if local_contexts and local_context_key in local_contexts:
                local_context = local_contexts[local_context_key]
            else:
                local_context = PluginContext(global_context=global_context)
            res_local_contexts[local_context_key] = local_context

            try:
                result = await hook_ref.hook(current_payload if current_payload is not None else payload, local_context)
            except Exception as e:
                if self.config and self.config.plugin_settings.fail_on_plugin_error:
                    raise PluginError(error=convert_exception_to_error(e, plugin.name)) from e
                logger.exception("Plugin %s failed on hook %s", plugin.name, hook_ref.name)
                continue

            if result.metadata:
                combined_metadata.update(result.metadata)

            if result.modified_payload is not None:
                current_payload = result.modified_payload

            if result.violation:
                result.violation._plugin_name = plugin.name

            if not result.continue_processing:
                if plugin.mode == PluginMode.ENFORCE:
                    return (
                        PluginResult[T](continue_processing=False, modified_payload=current_payload, violation=result.violation, metadata=combined_metadata),
                        res_local_contexts,
                    )
                if plugin.mode == PluginMode.PERMISSIVE:
                    logger.warning("Plugin %s would block (permissive mode): %s", plugin.name, result.violation.description if result.violation else "")

        return (PluginResult[T](continue_processing=True, modified_payload=current_payload, violation=None, metadata=combined_metadata), res_local_contexts)


class PluginManager:
    """Plugin manager for managing the plugin lifecycle and dispatching hooks.

    Examples:
        >>> from chatgate.plugins.framework.api import InMemoryHostAPI
        >>> manager = PluginManager(api=InMemoryHostAPI())
        >>> manager.plugin_count
        0
        >>> manager.initialized
        False
    """

    def __init__(self, config: str = "", api: Optional[HostAPI] = None):
        """Initialize plugin manager.

        Args:
            config: plugin configuration path.
            api: the host API handed to every registered plugin.

        Raises:
            ValueError: if no host API is given.
        """
        if api is None:
            raise ValueError("PluginManager requires a HostAPI; plugins cannot reach the host without one")
        self._config: Config | None = ConfigLoader.load_config(config) if config else None
        self._api = api
        self._loader = PluginLoader()
        self._registry = PluginInstanceRegistry()
        self._initialized = False
        self._message_executor: PluginExecutor[MessageWillBePostedPayload] = PluginExecutor[MessageWillBePostedPayload](self._config)
        self._channel_executor: PluginExecutor[ChannelHasBeenUpdatedPayload] = PluginExecutor[ChannelHasBeenUpdatedPayload](self._config)

    @property
    def config(self) -> Config | None:
        """Plugin manager configuration.

        Returns:
            The plugin configuration.
        """
        return self._config

    @property
    def plugin_count(self) -> int:
        """Number of plugins loaded.

        Returns:
            The number of plugins loaded.
        """
        return self._registry.plugin_count

    @property
    def initialized(self) -> bool:
        """Plugin manager initialized.

        Returns:
            True if the plugin manager is initialized.
        """
        return self._initialized

    def register(self, plugin: Plugin) -> None:
        """Bind a plugin to the host API and register its hooks.

        Args:
            plugin: the plugin instance.
        """
        plugin.api = self._api
        self._registry.register(plugin)

    async def initialize(self) -> None:
        """Load, instantiate and register every enabled plugin from the configuration.

        Raises:
            ImportError: if a plugin kind cannot be imported.
            PluginError: if a plugin hook is missing or malformed.
        """
        if self._initialized:
            return

        plugins = self._config.plugins if self._config else []

        for plugin_config in plugins:
            if plugin_config.mode == PluginMode.DISABLED:
                logger.info("Skipping disabled plugin %s", plugin_config.name)
                continue
            plugin = await self._loader.load_and_instantiate_plugin(plugin_config)
            self.register(plugin)
        self._initialized = True
        logger.info("Plugin manager initialized with %d plugins", self._registry.plugin_count)

    async def shutdown(self) -> None:
        """Shutdown all plugins."""
        await self._registry.shutdown()
        self._initialized = False

    async def message_will_be_posted(
        self,
        payload: MessageWillBePostedPayload,
        global_context: GlobalContext,
        local_contexts: Optional[PluginContextTable] = None,
    ) -> tuple[MessageWillBePostedResult, PluginContextTable | None]:
        """Plugin hook run before a post is persisted.

        Args:
            payload: The post payload to be analyzed.
            global_context: contextual information for all plugins.
            local_contexts: context local to a single plugin.

        Returns:
            The result of the plugins' analysis, including whether the post can proceed.
        """
        hook_refs = self._registry.get_hook_refs_for_hook(MessageHookType.MESSAGE_WILL_BE_POSTED)
        return await self._message_executor.execute(hook_refs, payload, global_context, local_contexts)

    async def channel_has_been_updated(
        self,
        payload: ChannelHasBeenUpdatedPayload,
        global_context: GlobalContext,
        local_contexts: Optional[PluginContextTable] = None,
    ) -> tuple[ChannelHasBeenUpdatedResult, PluginContextTable | None]:
        """Plugin hook run after a channel record changed.

        Args:
            payload: The old and new channel records.
            global_context: contextual information for all plugins.
            local_contexts: context local to a single plugin.

        Returns:
            The combined result of the plugins.
        """
        hook_refs = self._registry.get_hook_refs_for_hook(ChannelHookType.CHANNEL_HAS_BEEN_UPDATED)
        return await self._channel_executor.execute(hook_refs, payload, global_context, local_contexts)

    async def filter_post(self, post: Post, global_context: GlobalContext) -> tuple[Optional[Post], str]:
        """Run the message hook and map its result onto the host's post contract.

        Args:
            post: the post about to be written.
            global_context: contextual information for all plugins.

        Returns:
            ``(post, "")`` when accepted, where post may be a modified copy,
            or ``(None, reason)`` when a plugin rejected it.
        """
        result, _ = await self.message_will_be_posted(MessageWillBePostedPayload(post=post), global_context)
        if not result.continue_processing:
            reason = result.violation.description if result.violation else "Post rejected by plugin."
            return None, reason
        if result.modified_payload is not None:
            return result.modified_payload.post, ""
        return post, ""

    async def notify_channel_updated(self, new_channel: Channel, old_channel: Channel, global_context: GlobalContext) -> None:
        """Fire the channel update hook, discarding its result.

        Args:
            new_channel: the channel after the update.
            old_channel: the channel before the update.
            global_context: contextual information for all plugins.
        """
        await self.channel_has_been_updated(ChannelHasBeenUpdatedPayload(new_channel=new_channel, old_channel=old_channel), global_context)
