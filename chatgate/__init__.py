# -*- coding: utf-8 -*-
"""Location: ./chatgate/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

chatgate: a plugin host for chat servers, with a per-user post limiter.
"""

__version__ = "0.3.0"
