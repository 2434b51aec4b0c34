# -*- coding: utf-8 -*-
"""Location: ./chatgate/plugins/framework/api.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Host API.
The capabilities the host exposes to plugins. Plugins reach it through
``Plugin.api`` once the plugin manager has registered them.
"""

# Standard
from abc import ABC, abstractmethod
import threading

# First-Party
from chatgate.common.models import Channel
from chatgate.plugins.framework.errors import HostAPIError


class HostAPI(ABC):
    """Interface to the host runtime used by plugins.

    Methods are synchronous and may block. Async hooks call them through the
    event loop's default executor, so implementations must be thread-safe.
    """

    @abstractmethod
    def get_channel(self, channel_id: str) -> Channel:
        """Fetch a channel by id.

        Args:
            channel_id: the channel identifier.

        Returns:
            The channel record.

        Raises:
            HostAPIError: if the channel cannot be fetched.
        """


class InMemoryHostAPI(HostAPI):
    """A host API backed by a dictionary of channels.

    Examples:
        >>> api = InMemoryHostAPI([Channel(id="c1", header="hello")])
        >>> api.get_channel("c1").header
        'hello'
        >>> api.get_channel("nope")
        Traceback (most recent call last):
        ...
        chatgate.plugins.framework.errors.HostAPIError: Channel nope not found
    """

    def __init__(self, channels: list[Channel] | None = None) -> None:
        """Initialize the in-memory host API.

        Args:
            channels: channels available from the start.
        """
        self._lock = threading.Lock()
        self._channels: dict[str, Channel] = {c.id: c for c in channels or []}
        self.channel_lookups = 0

    def add_channel(self, channel: Channel) -> Channel:
        """Add or replace a channel, returning the previous record (or the new one when absent).

        Args:
            channel: the channel to store.

        Returns:
            The channel record that was replaced, so callers can fire the update hook.
        """
        with self._lock:
            old = self._channels.get(channel.id, channel)
            self._channels[channel.id] = channel
        return old

    def get_channel(self, channel_id: str) -> Channel:
        """Fetch a channel by id.

        Args:
            channel_id: the channel identifier.

        Returns:
            A copy of the stored channel.

        Raises:
            HostAPIError: if no such channel exists.
        """
        with self._lock:
            self.channel_lookups += 1
            channel = self._channels.get(channel_id)
        if channel is None:
            raise HostAPIError(f"Channel {channel_id} not found", status_code=404)
        return channel.model_copy()
