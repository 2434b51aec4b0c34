# -*- coding: utf-8 -*-
"""Location: ./plugins/post_limiter/header.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Channel header configuration.
Extracts the YAML fragment a channel header may carry between ``---``
markers and validates its ``post_limit`` duration, e.g.::

    Team announcements only.
    ---
    post_limit: 45s
    ---
"""

# Future
from __future__ import annotations

# Standard
import math
import re
from typing import Any, Literal

# Third-Party
from pydantic import BaseModel, ConfigDict, field_validator, ValidationError
import yaml

DEFAULT_POST_LIMIT = "30s"
HEADER_DELIMITER = "---"

_UNITS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,  # U+00B5 micro sign
    "μs": 1e-6,  # U+03BC greek mu
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_COMPONENT_RE = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


class HeaderConfigError(ValueError):
    """Raised when a channel header carries no usable configuration."""


def parse_duration(text: str) -> float:
    """Parse a duration string into seconds.

    Accepts a signed sequence of decimal numbers, each with a unit suffix
    (``ns``, ``us``/``µs``, ``ms``, ``s``, ``m``, ``h``), such as ``"300ms"``,
    ``"1.5h"`` or ``"2h45m"``. A bare ``"0"`` is also accepted.

    Args:
        text: the duration string.

    Returns:
        The duration in seconds.

    Raises:
        ValueError: if the string is not a valid duration.

    Examples:
        >>> parse_duration("45s")
        45.0
        >>> parse_duration("2m")
        120.0
        >>> parse_duration("1h30m")
        5400.0
        >>> parse_duration("1.5s")
        1.5
        >>> parse_duration("0")
        0.0
        >>> parse_duration("notaduration")
        Traceback (most recent call last):
        ...
        ValueError: invalid duration 'notaduration'
        >>> parse_duration("30")
        Traceback (most recent call last):
        ...
        ValueError: invalid duration '30'
    """
    s = text
    sign = 1.0
    if s and s[0] in "+-":
        sign = -1.0 if s[0] == "-" else 1.0
        s = s[1:]
    if s == "0":
        return 0.0
    if not s:
        raise ValueError(f"invalid duration {text!r}")

    total = 0.0
    pos = 0
    while pos < len(s):
        match = _COMPONENT_RE.match(s, pos)
        if not match:
            raise ValueError(f"invalid duration {text!r}")
        total += float(match.group(1)) * _UNITS[match.group(2)]
        pos = match.end()
    return sign * total


def round_seconds(seconds: float) -> int:
    """Round to whole seconds, halves away from zero.

    Args:
        seconds: a duration in seconds.

    Returns:
        The rounded number of seconds.

    Examples:
        >>> round_seconds(19.5)
        20
        >>> round_seconds(19.49)
        19
        >>> round_seconds(-0.5)
        -1
    """
    if seconds < 0:
        return -int(math.floor(-seconds + 0.5))
    return int(math.floor(seconds + 0.5))


def format_duration(seconds: int) -> str:
    """Render whole seconds the way chat users read wait times.

    Args:
        seconds: a non-negative number of seconds.

    Returns:
        A compact duration such as ``"20s"``, ``"1m30s"`` or ``"1h0m0s"``.

    Examples:
        >>> format_duration(20)
        '20s'
        >>> format_duration(90)
        '1m30s'
        >>> format_duration(3600)
        '1h0m0s'
        >>> format_duration(0)
        '0s'
    """
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    if hours:
        return f"{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{minutes}m{secs}s"
    return f"{secs}s"


class HeaderConfig(BaseModel):
    """The YAML mapping embedded in a channel header.

    Attributes:
        post_limit: minimum interval between two posts of one user.

    Examples:
        >>> HeaderConfig(post_limit="5s").post_limit
        '5s'
    """

    model_config = ConfigDict(extra="ignore")

    post_limit: str

    @field_validator("post_limit", mode="before")
    @classmethod
    def _scalar_to_string(cls, value: Any) -> Any:
        """Read YAML numbers and booleans back as text, so ``post_limit: 0`` means "0".

        Args:
            value: the value produced by the YAML loader.

        Returns:
            The text of a scalar, any other value unchanged.
        """
        if isinstance(value, (bool, int, float)):
            return str(value)
        return value

    @field_validator("post_limit")
    @classmethod
    def _check_duration(cls, value: str) -> str:
        """Reject strings that are not durations.

        Args:
            value: the raw post_limit value.

        Returns:
            The value unchanged.
        """
        parse_duration(value)
        return value


class ChannelConfig(BaseModel):
    """Resolved post limit for one channel.

    Attributes:
        post_limit: the duration string in effect.
        interval: the same duration in seconds.
        source: ``header`` when read from the channel, ``default`` otherwise.

    Examples:
        >>> cfg = ChannelConfig.from_post_limit("2m")
        >>> cfg.interval
        120.0
        >>> cfg.source
        'header'
    """

    model_config = ConfigDict(frozen=True)

    post_limit: str
    interval: float
    source: Literal["header", "default"] = "header"

    @classmethod
    def from_post_limit(cls, post_limit: str, source: Literal["header", "default"] = "header") -> ChannelConfig:
        """Build a config from a duration string.

        Args:
            post_limit: the duration string.
            source: where the value came from.

        Returns:
            The channel config.
        """
        return cls(post_limit=post_limit, interval=parse_duration(post_limit), source=source)


def extract_yaml_from_header(header: str, delimiter: str = HEADER_DELIMITER) -> str:
    """Return the text between the first two delimiters of a header.

    Args:
        header: the channel header text.
        delimiter: the literal fragment marker.

    Returns:
        The raw YAML fragment.

    Raises:
        HeaderConfigError: if the header holds fewer than two delimiters.

    Examples:
        >>> extract_yaml_from_header("intro\\n---\\npost_limit: 5s\\n---\\noutro")
        '\\npost_limit: 5s\\n'
        >>> extract_yaml_from_header("no config here")
        Traceback (most recent call last):
        ...
        plugins.post_limiter.header.HeaderConfigError: no YAML configuration found
    """
    parts = header.split(delimiter)
    if len(parts) < 3:
        raise HeaderConfigError("no YAML configuration found")
    return parts[1]


def parse_header_config(yaml_content: str) -> HeaderConfig:
    """Parse a YAML fragment into a header config.

    Args:
        yaml_content: the YAML text.

    Returns:
        The validated header config.

    Raises:
        HeaderConfigError: if the YAML is malformed, not a mapping, or post_limit is missing or invalid.

    Examples:
        >>> parse_header_config("post_limit: 2m").post_limit
        '2m'
    """
    try:
        data = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        raise HeaderConfigError(f"malformed YAML: {e}") from e
    if not isinstance(data, dict):
        raise HeaderConfigError(f"expected a mapping, got {type(data).__name__}")
    try:
        return HeaderConfig.model_validate(data)
    except ValidationError as e:
        raise HeaderConfigError(f"invalid post_limit: {e.errors()[0]['msg']}") from e
