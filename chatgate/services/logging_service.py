# -*- coding: utf-8 -*-
"""Location: ./chatgate/services/logging_service.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Logging Service Implementation.
Configures the root logger once from settings and hands out named loggers.
Plugins obtain their logger through this service so the host controls
level, format and destination in one place.
"""

# Standard
import logging
from typing import Optional

# First-Party
from chatgate.config import settings


class LoggingService:
    """Owns logging configuration for chatgate.

    Examples:
        >>> service = LoggingService()
        >>> logger = service.get_logger("chatgate.test")
        >>> logger.name
        'chatgate.test'
    """

    _configured: bool = False

    def __init__(self) -> None:
        """Initialize the logging service."""
        self._loggers: dict[str, logging.Logger] = {}

    def configure(self, level: Optional[str] = None, force: bool = False) -> None:
        """Install the root handler. Runs once unless forced.

        Args:
            level: log level name; defaults to ``settings.log_level``.
            force: reconfigure even if already configured.
        """
        if LoggingService._configured and not force:
            return
        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if settings.log_to_file:
            handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
        logging.basicConfig(level=level or settings.log_level, format=settings.log_format, handlers=handlers, force=force)
        LoggingService._configured = True

    def get_logger(self, name: str) -> logging.Logger:
        """Get or create a logger with the given name.

        Args:
            name: The name of the logger.

        Returns:
            A logger instance.
        """
        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)
        return self._loggers[name]

    def set_level(self, name: str, level: str) -> None:
        """Change the level of one named logger.

        Args:
            name: The name of the logger.
            level: The level name, e.g. ``"DEBUG"``.
        """
        self.get_logger(name).setLevel(level.upper())
