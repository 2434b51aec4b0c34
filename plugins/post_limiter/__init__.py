# -*- coding: utf-8 -*-
"""Post Limiter Plugin.

Location: ./plugins/post_limiter/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Enforces a minimum delay between successive posts of one user, optionally
per channel, configured through a YAML fragment in the channel header.
"""
