# -*- coding: utf-8 -*-
"""Location: ./chatgate/plugins/framework/models.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Pydantic models for plugins.
This module implements the pydantic models associated with
the base plugin layer including configurations, contexts and results.
"""

# Standard
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

# Third-Party
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

T = TypeVar("T")


class PluginMode(str, Enum):
    """Plugin modes of operation.

    Attributes:
        enforce: block the hooked operation when the plugin reports a violation.
        permissive: log violations but let the operation proceed.
        disabled: do not load the plugin.

    Examples:
        >>> PluginMode.ENFORCE
        <PluginMode.ENFORCE: 'enforce'>
        >>> PluginMode("permissive")
        <PluginMode.PERMISSIVE: 'permissive'>
    """

    ENFORCE = "enforce"
    PERMISSIVE = "permissive"
    DISABLED = "disabled"


class PluginConfig(BaseModel):
    """A plugin configuration.

    Attributes:
        name (str): The unique name of the plugin.
        kind (str): The fully qualified class name of the plugin.
        description (str): A description of the plugin.
        author (str): The author of the plugin.
        version (str): The version of the plugin.
        hooks (list[str]): The hook points the plugin attaches to.
        tags (list[str]): Searchable tags.
        mode (PluginMode): The plugin mode.
        priority (int): Execution priority, lower runs first.
        config (dict[str, Any]): Plugin specific settings.

    Examples:
        >>> cfg = PluginConfig(name="limiter", kind="plugins.post_limiter.post_limiter.PostLimiterPlugin")
        >>> cfg.mode
        <PluginMode.ENFORCE: 'enforce'>
        >>> cfg.priority
        100
        >>> cfg.hooks
        []
    """

    name: str
    kind: str
    description: Optional[str] = None
    author: Optional[str] = None
    version: Optional[str] = None
    hooks: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    mode: PluginMode = PluginMode.ENFORCE
    priority: int = 100
    config: Optional[dict[str, Any]] = None


class PluginSettings(BaseModel):
    """Global settings for the plugin manager.

    Attributes:
        fail_on_plugin_error: raise instead of logging when a plugin hook crashes.
    """

    fail_on_plugin_error: bool = False


class Config(BaseModel):
    """Top level plugin configuration file.

    Attributes:
        plugins (list[PluginConfig]): The plugins to load.
        plugin_settings (PluginSettings): Manager wide settings.
    """

    plugins: list[PluginConfig] = Field(default_factory=list)
    plugin_settings: PluginSettings = Field(default_factory=PluginSettings)


class PluginErrorModel(BaseModel):
    """A plugin error, used to carry structured error information.

    Attributes:
        message (str): The reason for the error.
        code (str): An error code.
        details (dict[str, Any]): Additional error details.
        plugin_name (str): The plugin that raised the error.

    Examples:
        >>> err = PluginErrorModel(message="boom", plugin_name="limiter")
        >>> err.code
        ''
    """

    message: str
    code: str = ""
    details: dict[str, Any] = Field(default_factory=dict)
    plugin_name: str


class PluginViolation(BaseModel):
    """A plugin violation, used to denote that the hooked operation is blocked.

    Attributes:
        reason (str): The reason for the violation.
        description (str): A human readable description, shown to the end user.
        code (str): The violation code.
        details (dict[str, Any]): Additional violation details.

    Examples:
        >>> v = PluginViolation(reason="Post limit exceeded", description="Please wait 20s", code="POST_LIMIT")
        >>> v.code
        'POST_LIMIT'
        >>> v.plugin_name
        ''
    """

    reason: str
    description: str
    code: str
    details: dict[str, Any] = Field(default_factory=dict)
    _plugin_name: str = PrivateAttr(default="")

    @property
    def plugin_name(self) -> str:
        """Getter for the plugin name attribute.

        Returns:
            The plugin name associated with the violation.
        """
        return self._plugin_name

    @plugin_name.setter
    def plugin_name(self, name: str) -> None:
        """Setter for the plugin_name attribute.

        Args:
            name: the plugin name.

        Raises:
            ValueError: if name is empty or not a string.
        """
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Name must be a non-empty string.")
        self._plugin_name = name


class PluginPayload(BaseModel):
    """Base class for all hook payloads."""

    model_config = ConfigDict(frozen=False)


class PluginResult(BaseModel, Generic[T]):
    """A result of the plugin hook processing.

    Attributes:
        continue_processing (bool): Whether to stop processing.
        modified_payload (Optional[T]): The modified payload if the plugin changed it.
        violation (Optional[PluginViolation]): A violation if the operation is blocked.
        metadata (Optional[dict[str, Any]]): Additional metadata.

    Examples:
        >>> result = PluginResult()
        >>> result.continue_processing
        True
        >>> result.metadata
        {}
        >>> blocked = PluginResult(continue_processing=False, violation=PluginViolation(reason="r", description="d", code="c"))
        >>> blocked.violation.code
        'c'
    """

    continue_processing: bool = True
    modified_payload: Optional[T] = None
    violation: Optional[PluginViolation] = None
    metadata: Optional[dict[str, Any]] = Field(default_factory=dict)


class GlobalContext(BaseModel):
    """The global context, which is shared across all plugins for one hook invocation.

    Attributes:
        request_id (str): ID of the inbound event.
        user (str): user id of the acting user, if known.
        team_id (str): team the event belongs to, if any.
        metadata (dict): shared metadata.

    Examples:
        >>> gctx = GlobalContext(request_id="req-1", user="u1")
        >>> gctx.user
        'u1'
        >>> gctx.team_id is None
        True
    """

    request_id: str
    user: Optional[str] = None
    team_id: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class PluginContext(BaseModel):
    """The plugin's context, which lasts a single hook invocation.

    Attributes:
        state (dict): local state, private to the plugin.
        global_context (GlobalContext): the shared context.
        metadata (dict): plugin metadata.

    Examples:
        >>> ctx = PluginContext(global_context=GlobalContext(request_id="r1"))
        >>> ctx.get_state("missing", "fallback")
        'fallback'
        >>> ctx.set_state("seen", True)
        >>> ctx.get_state("seen")
        True
    """

    state: dict[str, Any] = Field(default_factory=dict)
    global_context: GlobalContext
    metadata: dict[str, Any] = Field(default_factory=dict)

    def get_state(self, key: str, default: Any = None) -> Any:
        """Get value from shared state.

        Args:
            key: The key to access the shared state.
            default: A default value if one doesn't exist.

        Returns:
            The state value.
        """
        return self.state.get(key, default)

    def set_state(self, key: str, value: Any) -> None:
        """Set the value in local state.

        Args:
            key: the key to add to the state.
            value: the value to add to the state.
        """
        self.state[key] = value


PluginContextTable = dict[str, PluginContext]
