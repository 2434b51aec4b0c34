# -*- coding: utf-8 -*-
"""Location: ./tests/unit/chatgate/plugins/plugins/post_limiter/test_header.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Tests for channel header parsing and duration helpers.
"""

# Third-Party
import pytest

# First-Party
from plugins.post_limiter.header import (
    ChannelConfig,
    extract_yaml_from_header,
    format_duration,
    HeaderConfigError,
    parse_duration,
    parse_header_config,
    round_seconds,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("45s", 45.0),
        ("2m", 120.0),
        ("1h", 3600.0),
        ("2h45m", 9900.0),
        ("1m30s", 90.0),
        ("1.5s", 1.5),
        (".5m", 30.0),
        ("300ms", 0.3),
        ("0", 0.0),
        ("+10s", 10.0),
        ("-10s", -10.0),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration(text) == pytest.approx(expected)


def test_parse_duration_micro_units():
    assert parse_duration("1500us") == pytest.approx(0.0015)
    assert parse_duration("1500µs") == pytest.approx(0.0015)
    assert parse_duration("2000000ns") == pytest.approx(0.002)


@pytest.mark.parametrize("text", ["", "s", "30", "notaduration", "5 s", "5sec", "1d", "-", "1.2.3s", " 5s"])
def test_parse_duration_rejects(text):
    with pytest.raises(ValueError):
        parse_duration(text)


@pytest.mark.parametrize("seconds,expected", [(0, "0s"), (5, "5s"), (59, "59s"), (60, "1m0s"), (61, "1m1s"), (3599, "59m59s"), (3600, "1h0m0s"), (3725, "1h2m5s")])
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_round_seconds_half_away_from_zero():
    assert round_seconds(0.5) == 1
    assert round_seconds(1.5) == 2
    assert round_seconds(2.5) == 3
    assert round_seconds(20.4) == 20


def test_extract_takes_second_segment():
    assert extract_yaml_from_header("a---b---c---d") == "b"
    assert extract_yaml_from_header("------") == ""


def test_extract_without_markers():
    with pytest.raises(HeaderConfigError):
        extract_yaml_from_header("plain header")


def test_extract_with_custom_delimiter():
    assert extract_yaml_from_header("~~post_limit: 1s~~", delimiter="~~") == "post_limit: 1s"


def test_parse_header_config_ignores_unknown_keys():
    cfg = parse_header_config("post_limit: 45s\ntopic: releases\n")
    assert cfg.post_limit == "45s"


@pytest.mark.parametrize("fragment", ["", "post_limit: [", "- 5s", "post_limit: nope", "post_limit:", "other: 1", "post_limit: 30", "post_limit: 1.5", "post_limit: true"])
def test_parse_header_config_errors(fragment):
    with pytest.raises(HeaderConfigError):
        parse_header_config(fragment)


def test_parse_header_config_reads_zero_as_duration():
    cfg = parse_header_config("post_limit: 0")
    assert cfg.post_limit == "0"
    assert ChannelConfig.from_post_limit(cfg.post_limit).interval == 0.0


def test_channel_config_from_post_limit():
    cfg = ChannelConfig.from_post_limit("45s", source="default")
    assert cfg.interval == 45.0
    assert cfg.source == "default"
    with pytest.raises(ValueError):
        ChannelConfig.from_post_limit("forever")
