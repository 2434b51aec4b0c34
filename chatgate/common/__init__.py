# -*- coding: utf-8 -*-
"""Location: ./chatgate/common/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Common models and settings shared across chatgate subpackages.
"""
