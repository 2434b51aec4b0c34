# -*- coding: utf-8 -*-
"""Location: ./chatgate/plugins/framework/hooks/registry.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Hook Registry.
Maps each hook name to the pydantic models of its payload and result.
Hook modules register themselves on import; hosts that deliver events as
JSON use the registry to validate them into the right model.
"""

# Standard
from typing import NamedTuple, Optional, Type, Union

# Third-Party
from pydantic import BaseModel

# First-Party
from chatgate.plugins.framework.models import PluginPayload, PluginResult


class HookTypes(NamedTuple):
    """Payload and result model of one hook."""

    payload: Type[PluginPayload]
    result: Type[PluginResult]


def _validate(model: Type[BaseModel], data: Union[str, bytes, dict]) -> BaseModel:
    if isinstance(data, (str, bytes)):
        return model.model_validate_json(data)
    return model.model_validate(data)


class HookRegistry:
    """Process wide registry of hook types.

    Examples:
        >>> registry = HookRegistry()
        >>> registry.register_hook("doc_hook", PluginPayload, PluginResult)
        >>> registry.get_payload_type("doc_hook") is PluginPayload
        True
        >>> HookRegistry() is registry
        True
    """

    _instance: Optional["HookRegistry"] = None
    _hooks: dict[str, HookTypes]

    def __new__(cls) -> "HookRegistry":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._hooks = {}
        return cls._instance

    def register_hook(self, hook_type: str, payload_class: Type[PluginPayload], result_class: Type[PluginResult]) -> None:
        """Register (or replace) the models of a hook.

        Args:
            hook_type: The hook name, e.g. "message_will_be_posted".
            payload_class: Model of the hook payload.
            result_class: Model of the hook result.
        """
        self._hooks[hook_type] = HookTypes(payload_class, result_class)

    def get_payload_type(self, hook_type: str) -> Optional[Type[PluginPayload]]:
        """Return the payload model of a hook, or None if unknown."""
        types = self._hooks.get(hook_type)
        return types.payload if types else None

    def get_result_type(self, hook_type: str) -> Optional[Type[PluginResult]]:
        """Return the result model of a hook, or None if unknown."""
        types = self._hooks.get(hook_type)
        return types.result if types else None

    def _types(self, hook_type: str) -> HookTypes:
        try:
            return self._hooks[hook_type]
        except KeyError:
            raise ValueError(f"Hook '{hook_type}' is not registered") from None

    def json_to_payload(self, hook_type: str, payload: Union[str, bytes, dict]) -> PluginPayload:
        """Validate a JSON document or dict into the hook's payload model.

        Args:
            hook_type: The hook name.
            payload: JSON text or an already decoded dict.

        Returns:
            The payload model instance.

        Raises:
            ValueError: If the hook is not registered.
        """
        return _validate(self._types(hook_type).payload, payload)

    def json_to_result(self, hook_type: str, result: Union[str, bytes, dict]) -> PluginResult:
        """Validate a JSON document or dict into the hook's result model.

        Args:
            hook_type: The hook name.
            result: JSON text or an already decoded dict.

        Returns:
            The result model instance.

        Raises:
            ValueError: If the hook is not registered.
        """
        return _validate(self._types(hook_type).result, result)

    def is_registered(self, hook_type: str) -> bool:
        """Return True if the hook has been registered."""
        return hook_type in self._hooks

    def get_registered_hooks(self) -> list[str]:
        """Return the registered hook names in registration order."""
        return list(self._hooks)


def get_hook_registry() -> HookRegistry:
    """Return the process wide hook registry.

    Returns:
        The singleton HookRegistry instance.
    """
    return HookRegistry()
