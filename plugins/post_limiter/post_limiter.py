# -*- coding: utf-8 -*-
"""Location: ./plugins/post_limiter/post_limiter.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Post Limiter Plugin.
Enforces a minimum delay between two posts of the same user, per channel
or across all channels. The delay comes from a YAML fragment in the channel
header (``post_limit: 45s``) and falls back to 30 seconds.

Hooks: message_will_be_posted, channel_has_been_updated
"""

# Future
from __future__ import annotations

# Standard
import asyncio
import time
from typing import Literal, Optional

# Third-Party
from pydantic import BaseModel, Field, field_validator

# First-Party
from chatgate.plugins.framework import (
    ChannelHasBeenUpdatedPayload,
    ChannelHasBeenUpdatedResult,
    MessageWillBePostedPayload,
    MessageWillBePostedResult,
    Plugin,
    PluginConfig,
    PluginContext,
    PluginViolation,
)
from chatgate.services.logging_service import LoggingService
from plugins.post_limiter.header import (
    ChannelConfig,
    DEFAULT_POST_LIMIT,
    extract_yaml_from_header,
    format_duration,
    HEADER_DELIMITER,
    HeaderConfigError,
    parse_duration,
    parse_header_config,
    round_seconds,
)
from plugins.post_limiter.store import ChannelConfigCache, LastPostStore

logging_service = LoggingService()
logger = logging_service.get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error has occurred."


class PostLimiterConfig(BaseModel):
    """Configuration for the post limiter plugin.

    Attributes:
        default_post_limit: Interval used when a channel header has no valid configuration.
        scope: ``channel`` limits a user per channel, ``global`` across all channels.
        header_delimiter: Marker surrounding the YAML fragment in channel headers.
        max_tracked_users: Optional bound on remembered last-post times (LRU eviction).
        max_cached_channels: Optional bound on cached channel configs (LRU eviction).
    """

    default_post_limit: str = Field(default=DEFAULT_POST_LIMIT, description="e.g. '30s'")
    scope: Literal["channel", "global"] = "channel"
    header_delimiter: str = Field(default=HEADER_DELIMITER, min_length=1)
    max_tracked_users: Optional[int] = Field(default=None, ge=1)
    max_cached_channels: Optional[int] = Field(default=None, ge=1)

    @field_validator("default_post_limit")
    @classmethod
    def _check_default(cls, value: str) -> str:
        """Validate the default interval.

        Args:
            value: the configured duration string.

        Returns:
            The value unchanged.
        """
        parse_duration(value)
        return value


def _now() -> float:
    """Get current Unix timestamp.

    Returns:
        Current time in seconds since epoch.
    """
    return time.time()


class PostLimiterPlugin(Plugin):
    """Rejects posts that follow the same user's previous post too closely."""

    def __init__(self, config: PluginConfig) -> None:
        """Initialize the post limiter plugin.

        Args:
            config: Plugin configuration containing post limiter settings.
        """
        super().__init__(config)
        self._cfg = PostLimiterConfig(**(config.config or {}))
        self._default = ChannelConfig.from_post_limit(self._cfg.default_post_limit, source="default")
        self._last_posts = LastPostStore(max_entries=self._cfg.max_tracked_users)
        self._channel_configs = ChannelConfigCache(max_entries=self._cfg.max_cached_channels)

    @property
    def settings(self) -> PostLimiterConfig:
        """Return the validated plugin settings.

        Returns:
            The plugin settings.
        """
        return self._cfg

    @property
    def last_posts(self) -> LastPostStore:
        """Return the last post store.

        Returns:
            The last post store.
        """
        return self._last_posts

    @property
    def channel_configs(self) -> ChannelConfigCache:
        """Return the channel config cache.

        Returns:
            The channel config cache.
        """
        return self._channel_configs

    def resolve_header(self, channel_id: str, header: str) -> ChannelConfig:
        """Derive a channel config from header text, defaulting on any problem.

        Args:
            channel_id: the channel id, for logging.
            header: the channel header text.

        Returns:
            The config from the header, or the default config.
        """
        try:
            yaml_content = extract_yaml_from_header(header, self._cfg.header_delimiter)
        except HeaderConfigError:
            logger.debug("No post limit configuration in header of channel %s, using %s", channel_id, self._default.post_limit)
            return self._default
        try:
            header_config = parse_header_config(yaml_content)
        except HeaderConfigError as e:
            logger.warning("Invalid post limit configuration in header of channel %s: %s; using %s", channel_id, e, self._default.post_limit)
            return self._default
        return ChannelConfig.from_post_limit(header_config.post_limit)

    def get_channel_config(self, channel_id: str) -> ChannelConfig:
        """Return the channel's config, fetching and caching it on a miss.

        Args:
            channel_id: the channel id.

        Returns:
            The channel config.

        Raises:
            HostAPIError: if the channel cannot be fetched from the host.
            PluginError: if the plugin is not bound to a host API.
        """
        config = self._channel_configs.get(channel_id)
        if config is not None:
            return config

        generation = self._channel_configs.generation(channel_id)
        channel = self.api.get_channel(channel_id)
        config = self.resolve_header(channel_id, channel.header)
        self._channel_configs.put(channel_id, config, generation)
        return config

    def _key(self, user_id: str, channel_id: str) -> tuple[str, ...]:
        """Build the store key for a post.

        Args:
            user_id: the author.
            channel_id: the target channel.

        Returns:
            The limiter key.
        """
        if self._cfg.scope == "global":
            return (user_id,)
        return (channel_id, user_id)

    def _rejection_message(self, remaining: float) -> str:
        """Build the user facing rejection text.

        Args:
            remaining: seconds left to wait.

        Returns:
            The message.
        """
        wait = format_duration(round_seconds(remaining))
        if self._cfg.scope == "global":
            return f"Please wait {wait} before posting again."
        return f"Please wait {wait} before posting again in this channel."

    async def message_will_be_posted(self, payload: MessageWillBePostedPayload, context: PluginContext) -> MessageWillBePostedResult:
        """Accept or reject a post based on the time since the author's last accepted post.

        Args:
            payload: The post about to be written.
            context: Plugin execution context.

        Returns:
            MessageWillBePostedResult letting the post through unmodified, or blocking it with a violation.
        """
        post = payload.post
        now = _now()

        config = self._channel_configs.get(post.channel_id)
        if config is None:
            try:
                # HostAPI.get_channel is synchronous and may block on I/O.
                config = await asyncio.get_running_loop().run_in_executor(None, self.get_channel_config, post.channel_id)
            except Exception:
                logger.exception("Failed to get channel config for channel %s", post.channel_id)
                return MessageWillBePostedResult(
                    continue_processing=False,
                    violation=PluginViolation(
                        reason="Internal error",
                        description=INTERNAL_ERROR_MESSAGE,
                        code="INTERNAL_ERROR",
                        details={"channel_id": post.channel_id},
                    ),
                )

        decision = self._last_posts.check_and_record(self._key(post.user_id, post.channel_id), now, config.interval)
        if not decision.allowed:
            remaining = round_seconds(decision.remaining)
            logger.debug("Rejected post from user %s in channel %s, %ss remaining", post.user_id, post.channel_id, remaining)
            return MessageWillBePostedResult(
                continue_processing=False,
                violation=PluginViolation(
                    reason="Post limit exceeded",
                    description=self._rejection_message(decision.remaining),
                    code="POST_LIMIT",
                    details={"remaining_seconds": remaining, "post_limit": config.post_limit, "scope": self._cfg.scope},
                ),
            )

        return MessageWillBePostedResult(metadata={"post_limit": config.post_limit, "post_limit_source": config.source})

    async def channel_has_been_updated(self, payload: ChannelHasBeenUpdatedPayload, context: PluginContext) -> ChannelHasBeenUpdatedResult:
        """Drop the cached config of a channel whose header changed.

        Args:
            payload: The old and new channel records.
            context: Plugin execution context.

        Returns:
            ChannelHasBeenUpdatedResult with ``config_invalidated`` metadata.
        """
        if payload.new_channel.header == payload.old_channel.header:
            return ChannelHasBeenUpdatedResult(metadata={"config_invalidated": False})

        self._channel_configs.invalidate(payload.new_channel.id)
        logger.info("Header of channel %s changed, post limit configuration will be reloaded", payload.new_channel.id)
        return ChannelHasBeenUpdatedResult(metadata={"config_invalidated": True})
