# -*- coding: utf-8 -*-
"""Location: ./chatgate/plugins/framework/hooks/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Hook point definitions. Importing a hook module registers its payload and
result models in the global hook registry.
"""
