# -*- coding: utf-8 -*-
"""Location: ./plugins/post_limiter/store.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

In-memory state for the post limiter.

Both stores own a lock; hooks may run on several host worker threads at
once. Neither store calls out to the host while holding its lock.
"""

# Future
from __future__ import annotations

# Standard
from collections import OrderedDict
from dataclasses import dataclass
import threading
from typing import Hashable, Optional

# First-Party
from plugins.post_limiter.header import ChannelConfig


@dataclass(frozen=True)
class Decision:
    """Outcome of a post limit check.

    Attributes:
        allowed: True if the post may go through.
        remaining: seconds left before the key may post again; 0.0 when allowed.
        last_post: time of the previous accepted post, None for a first post.
    """

    allowed: bool
    remaining: float
    last_post: Optional[float]


class LastPostStore:
    """Last accepted post time per key.

    Keys are ``(channel_id, user_id)`` for per-channel limits or
    ``(user_id,)`` for a global limit. With ``max_entries`` set, the least
    recently updated key is evicted once the store is full.

    Examples:
        >>> store = LastPostStore()
        >>> store.check_and_record(("c1", "u1"), now=100.0, interval=30.0).allowed
        True
        >>> d = store.check_and_record(("c1", "u1"), now=110.0, interval=30.0)
        >>> d.allowed, d.remaining
        (False, 20.0)
        >>> store.get(("c1", "u1"))
        100.0
    """

    def __init__(self, max_entries: Optional[int] = None) -> None:
        """Initialize the store.

        Args:
            max_entries: optional bound on tracked keys.
        """
        self._lock = threading.Lock()
        self._last: OrderedDict[Hashable, float] = OrderedDict()
        self._max_entries = max_entries

    def check_and_record(self, key: Hashable, now: float, interval: float) -> Decision:
        """Compare ``now`` with the key's last accepted post and record it when allowed.

        The read, compare and write happen under one lock acquisition.

        Args:
            key: the limiter key.
            now: current time in seconds since epoch.
            interval: minimum seconds between two accepted posts.

        Returns:
            The decision.
        """
        with self._lock:
            last = self._last.get(key)
            if last is not None:
                elapsed = now - last
                if elapsed < interval:
                    return Decision(allowed=False, remaining=interval - elapsed, last_post=last)
            # Timestamps never move backwards for a key.
            self._last[key] = now if last is None else max(last, now)
            self._last.move_to_end(key)
            if self._max_entries is not None:
                while len(self._last) > self._max_entries:
                    self._last.popitem(last=False)
            return Decision(allowed=True, remaining=0.0, last_post=last)

    def get(self, key: Hashable) -> Optional[float]:
        """Return the last accepted post time for a key.

        Args:
            key: the limiter key.

        Returns:
            The timestamp, or None if the key has never posted (or was evicted).
        """
        with self._lock:
            return self._last.get(key)

    def __len__(self) -> int:
        """Return the number of tracked keys.

        Returns:
            The number of tracked keys.
        """
        with self._lock:
            return len(self._last)


class ChannelConfigCache:
    """Resolved channel configs, at most one per channel.

    Every invalidation bumps the channel's generation. A loader records the
    generation before fetching the header and stores its result with it; a
    result computed from a header that has since been invalidated is dropped.

    Examples:
        >>> cache = ChannelConfigCache()
        >>> gen = cache.generation("c1")
        >>> cache.put("c1", ChannelConfig.from_post_limit("5s"), gen)
        True
        >>> cache.get("c1").interval
        5.0
        >>> cache.invalidate("c1")
        True
        >>> cache.get("c1") is None
        True
        >>> cache.put("c1", ChannelConfig.from_post_limit("5s"), gen)
        False
    """

    def __init__(self, max_entries: Optional[int] = None) -> None:
        """Initialize the cache.

        Args:
            max_entries: optional bound on cached channels.
        """
        self._lock = threading.Lock()
        self._configs: OrderedDict[str, ChannelConfig] = OrderedDict()
        self._generations: dict[str, int] = {}
        self._max_entries = max_entries

    def get(self, channel_id: str) -> Optional[ChannelConfig]:
        """Return the cached config for a channel.

        Args:
            channel_id: the channel id.

        Returns:
            The config, or None on a miss.
        """
        with self._lock:
            config = self._configs.get(channel_id)
            if config is not None:
                self._configs.move_to_end(channel_id)
            return config

    def generation(self, channel_id: str) -> int:
        """Return the channel's current generation.

        Args:
            channel_id: the channel id.

        Returns:
            The generation counter.
        """
        with self._lock:
            return self._generations.get(channel_id, 0)

    def put(self, channel_id: str, config: ChannelConfig, generation: int) -> bool:
        """Cache a config unless the channel was invalidated since ``generation``.

        Args:
            channel_id: the channel id.
            config: the resolved config.
            generation: the generation observed before the header was fetched.

        Returns:
            True if the config was stored.
        """
        with self._lock:
            if self._generations.get(channel_id, 0) != generation:
                return False
            self._configs[channel_id] = config
            self._configs.move_to_end(channel_id)
            if self._max_entries is not None:
                while len(self._configs) > self._max_entries:
                    self._configs.popitem(last=False)
            return True

    def invalidate(self, channel_id: str) -> bool:
        """Drop a channel's cached config.

        Args:
            channel_id: the channel id.

        Returns:
            True if a config was cached.
        """
        with self._lock:
            self._generations[channel_id] = self._generations.get(channel_id, 0) + 1
            return self._configs.pop(channel_id, None) is not None

    def __len__(self) -> int:
        """Return the number of cached channels.

        Returns:
            The number of cached channels.
        """
        with self._lock:
            return len(self._configs)
