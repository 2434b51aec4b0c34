# -*- coding: utf-8 -*-
"""Configuration loader implementation.

Copyright 2025
SPDX-License-Identifier: Apache-2.0

This module loads plugin configuration files. Files are rendered with
Jinja2 first so values can be pulled from the environment, e.g.
``default_post_limit: "{{ env.POST_LIMIT | default('30s') }}"``.
"""

# Standard
import os

# Third-Party
import jinja2
import yaml

# First-Party
from chatgate.plugins.framework.models import Config


class ConfigLoader:
    """A configuration loader."""

    @staticmethod
    def render(template: str) -> str:
        """Render a configuration template against the process environment.

        Args:
            template: the raw configuration text.

        Returns:
            The rendered text.

        Examples:
            >>> ConfigLoader.render("limit: {{ 5 * 2 }}s")
            'limit: 10s'
        """
        jinja_env = jinja2.Environment(loader=jinja2.BaseLoader(), autoescape=True)
        return jinja_env.from_string(template).render(env=os.environ)

    @staticmethod
    def load_config(config: str, use_jinja: bool = True) -> Config:
        """Load the plugin configuration from a file path.

        Args:
            config: the configuration path.
            use_jinja: use jinja to replace env variables if true.

        Returns:
            The plugin configuration object.
        """
        with open(os.path.normpath(config), "r", encoding="utf-8") as file:
            template = file.read()
        rendered_template = ConfigLoader.render(template) if use_jinja else template
        config_data = yaml.safe_load(rendered_template) or {}
        return Config(**config_data)

    @staticmethod
    def dump_config(path: str, config: Config) -> None:
        """Dump plugin configuration to a file.

        Args:
            path: configuration file path
            config: the plugin configuration
        """
        with open(os.path.normpath(path), "w", encoding="utf-8") as file:
            yaml.safe_dump(config.model_dump(mode="json", exclude_none=True), file)
