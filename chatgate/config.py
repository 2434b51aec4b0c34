# -*- coding: utf-8 -*-
"""Location: ./chatgate/config.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

chatgate configuration settings.
Settings are loaded from environment variables (and an optional ``.env``
file) with sensible defaults.

Examples:
    >>> from chatgate.config import Settings
    >>> s = Settings(_env_file=None)
    >>> s.plugins_enabled
    True
    >>> s.plugin_config_file
    'plugins/config.yaml'
"""

# Standard
from functools import lru_cache
from typing import Literal

# Third-Party
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """chatgate host settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Plugins
    plugins_enabled: bool = Field(default=True, description="Enable the plugin framework")
    plugin_config_file: str = Field(default="plugins/config.yaml", description="Path to the plugin configuration file")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_to_file: bool = False
    log_file: str = "chatgate.log"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: A cached instance of the Settings class.

    Examples:
        >>> get_settings() is get_settings()
        True
    """
    return Settings()


settings = get_settings()
