# -*- coding: utf-8 -*-
"""Location: ./chatgate/plugins/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Plugins Package.
Exposes the chatgate plugin components a host embeds:
- Manager
- Hook payloads
- Global context and violations
- Errors
"""

from chatgate.plugins.framework.errors import HostAPIError, PluginError
from chatgate.plugins.framework.hooks.channels import ChannelHasBeenUpdatedPayload
from chatgate.plugins.framework.hooks.messages import MessageWillBePostedPayload
from chatgate.plugins.framework.manager import PluginManager
from chatgate.plugins.framework.models import GlobalContext, PluginViolation

__all__ = [
    "ChannelHasBeenUpdatedPayload",
    "GlobalContext",
    "HostAPIError",
    "MessageWillBePostedPayload",
    "PluginError",
    "PluginManager",
    "PluginViolation",
]
