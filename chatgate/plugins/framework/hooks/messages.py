# -*- coding: utf-8 -*-
"""Location: ./chatgate/plugins/framework/hooks/messages.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Pydantic models for message hooks.
"""

# Standard
from enum import Enum

# First-Party
from chatgate.common.models import Post
from chatgate.plugins.framework.models import PluginPayload, PluginResult


class MessageHookType(str, Enum):
    """Message hook points.

    Attributes:
        message_will_be_posted: Runs before a post is persisted; may reject it.

    Examples:
        >>> MessageHookType.MESSAGE_WILL_BE_POSTED
        <MessageHookType.MESSAGE_WILL_BE_POSTED: 'message_will_be_posted'>
        >>> MessageHookType("message_will_be_posted").value
        'message_will_be_posted'
    """

    MESSAGE_WILL_BE_POSTED = "message_will_be_posted"


class MessageWillBePostedPayload(PluginPayload):
    """The payload handed to the message_will_be_posted hook.

    Attributes:
        post: The post about to be written.

    Examples:
        >>> payload = MessageWillBePostedPayload(post=Post(user_id="u1", channel_id="c1", message="hi"))
        >>> payload.post.message
        'hi'
    """

    post: Post


MessageWillBePostedResult = PluginResult[MessageWillBePostedPayload]


def _register_message_hooks() -> None:
    """Register message hooks in the global registry.

    This is called lazily to avoid circular import issues.
    """
    # First-Party
    from chatgate.plugins.framework.hooks.registry import get_hook_registry  # pylint: disable=import-outside-toplevel

    registry = get_hook_registry()

    if not registry.is_registered(MessageHookType.MESSAGE_WILL_BE_POSTED):
        registry.register_hook(MessageHookType.MESSAGE_WILL_BE_POSTED, MessageWillBePostedPayload, MessageWillBePostedResult)


_register_message_hooks()
