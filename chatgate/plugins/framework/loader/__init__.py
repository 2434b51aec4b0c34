# -*- coding: utf-8 -*-
"""Location: ./chatgate/plugins/framework/loader/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Plugin and configuration loaders.
"""
