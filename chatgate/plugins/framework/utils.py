# -*- coding: utf-8 -*-
"""Location: ./chatgate/plugins/framework/utils.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Utility module for plugins layer.
"""

# Standard
from functools import cache
import importlib
from types import ModuleType


@cache  # noqa
def import_module(mod_name: str) -> ModuleType:
    """Import a module.

    Args:
        mod_name: fully qualified module name

    Returns:
        A module.

    Examples:
        >>> import sys
        >>> import_module('sys') is sys
        True
    """
    return importlib.import_module(mod_name)


def parse_class_name(name: str) -> tuple[str, str]:
    """Parse a class name into its constituents.

    Args:
        name: the qualified class name

    Returns:
        A pair containing the qualified class prefix and the class name

    Examples:
        >>> parse_class_name('plugins.post_limiter.post_limiter.PostLimiterPlugin')
        ('plugins.post_limiter.post_limiter', 'PostLimiterPlugin')
        >>> parse_class_name('SimpleClass')
        ('', 'SimpleClass')
    """
    clslist = name.rsplit(".", 1)
    if len(clslist) == 2:
        return (clslist[0], clslist[1])
    return ("", name)
