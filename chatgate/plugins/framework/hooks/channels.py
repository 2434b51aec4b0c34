# -*- coding: utf-8 -*-
"""Location: ./chatgate/plugins/framework/hooks/channels.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Pydantic models for channel hooks.
"""

# Standard
from enum import Enum

# First-Party
from chatgate.common.models import Channel
from chatgate.plugins.framework.models import PluginPayload, PluginResult


class ChannelHookType(str, Enum):
    """Channel hook points.

    Attributes:
        channel_has_been_updated: Runs after channel metadata changed. Notification only.

    Examples:
        >>> ChannelHookType.CHANNEL_HAS_BEEN_UPDATED.value
        'channel_has_been_updated'
    """

    CHANNEL_HAS_BEEN_UPDATED = "channel_has_been_updated"


class ChannelHasBeenUpdatedPayload(PluginPayload):
    """The payload handed to the channel_has_been_updated hook.

    Attributes:
        new_channel: The channel record after the update.
        old_channel: The channel record before the update.

    Examples:
        >>> p = ChannelHasBeenUpdatedPayload(new_channel=Channel(id="c1", header="b"), old_channel=Channel(id="c1", header="a"))
        >>> p.new_channel.header != p.old_channel.header
        True
    """

    new_channel: Channel
    old_channel: Channel


ChannelHasBeenUpdatedResult = PluginResult[ChannelHasBeenUpdatedPayload]


def _register_channel_hooks() -> None:
    """Register channel hooks in the global registry."""
    # First-Party
    from chatgate.plugins.framework.hooks.registry import get_hook_registry  # pylint: disable=import-outside-toplevel

    registry = get_hook_registry()

    if not registry.is_registered(ChannelHookType.CHANNEL_HAS_BEEN_UPDATED):
        registry.register_hook(ChannelHookType.CHANNEL_HAS_BEEN_UPDATED, ChannelHasBeenUpdatedPayload, ChannelHasBeenUpdatedResult)


_register_channel_hooks()
