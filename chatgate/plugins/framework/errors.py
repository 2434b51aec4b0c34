# -*- coding: utf-8 -*-
"""Location: ./chatgate/plugins/framework/errors.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Plugin errors.
Exceptions raised by the plugin framework and by the host API.
"""

# First-Party
from chatgate.plugins.framework.models import PluginErrorModel


class PluginError(Exception):
    """A plugin error object for errors internal to the plugin.

    Attributes:
        error (PluginErrorModel): the plugin error object.

    Examples:
        >>> err = PluginError(error=PluginErrorModel(message="no hook", plugin_name="limiter"))
        >>> str(err)
        'no hook'
    """

    def __init__(self, error: PluginErrorModel):
        """Initialize a plugin error.

        Args:
            error: the plugin error details.
        """
        self.error = error
        super().__init__(self.error.message)


class HostAPIError(Exception):
    """Raised when the host cannot serve a request made by a plugin.

    Examples:
        >>> err = HostAPIError("channel not found", status_code=404)
        >>> err.status_code
        404
    """

    def __init__(self, message: str, status_code: int = 500):
        """Initialize a host API error.

        Args:
            message: the error message.
            status_code: an HTTP-like status code describing the failure.
        """
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def convert_exception_to_error(exception: Exception, plugin_name: str) -> PluginErrorModel:
    """Converts an exception object into a PluginErrorModel.

    Args:
        exception: the exception to be converted.
        plugin_name: the name of the plugin on which the exception occurred.

    Returns:
        A plugin error pydantic object.

    Examples:
        >>> convert_exception_to_error(ValueError("bad"), "limiter").message
        "ValueError('bad')"
    """
    return PluginErrorModel(message=repr(exception), plugin_name=plugin_name)
