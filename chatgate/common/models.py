# -*- coding: utf-8 -*-
"""Location: ./chatgate/common/models.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Common chat models.
Pydantic models for the host records handed to plugins: posts and channels.
"""

# Standard
from typing import Optional

# Third-Party
from pydantic import BaseModel


class Post(BaseModel):
    """A chat message about to be posted, or already posted, in a channel.

    Attributes:
        id: Post identifier, empty until the host persists the post.
        user_id: The author of the post.
        channel_id: The channel the post targets.
        message: The message text.
        type: Post type, empty for regular user posts.
        create_at: Creation time in milliseconds since epoch, 0 if unset.

    Examples:
        >>> post = Post(user_id="u1", channel_id="c1", message="hello")
        >>> post.user_id, post.channel_id
        ('u1', 'c1')
        >>> post.type
        ''
    """

    id: str = ""
    user_id: str
    channel_id: str
    message: str = ""
    type: str = ""
    create_at: int = 0


class Channel(BaseModel):
    """A chat channel.

    Attributes:
        id: Channel identifier.
        name: Channel handle.
        display_name: Channel title.
        header: Free text header shown at the top of the channel.
        team_id: Owning team, if any.

    Examples:
        >>> ch = Channel(id="c1", header="---\\npost_limit: 5s\\n---")
        >>> ch.header.count("---")
        2
    """

    id: str
    name: str = ""
    display_name: str = ""
    header: str = ""
    team_id: Optional[str] = None
