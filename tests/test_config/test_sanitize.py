from __future__ import annotations

import math

import pytest

from reel.config.models import DEFAULT_CONFIG, ReelConfig
from reel.config.sanitize import (
    sanitize_config,
    sanitize_duration_ms,
    sanitize_history_size,
    sanitize_jitter_ms,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("abc", 5000),
        ("", 1500),
        ("   ", 1500),
        (None, 5000),
        (True, 5000),
        ("nan", 5000),
        (math.inf, 5000),
        ([1, 2], 5000),
        ("100", 1500),
        (" 6000 ", 6000),
        ("6000.99", 6000),
        ("1e4", 10000),
        (7000, 7000),
        (10**400, 5000),
        (-3.5, 1500),
    ],
)
def test_sanitize_duration_ms(raw, expected) -> None:
    assert sanitize_duration_ms(raw, 5000) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("x", 200), ("", 0), ("-1", 0), ("0", 0), ("250.7", 250), (33, 33)],
)
def test_sanitize_jitter_ms(raw, expected) -> None:
    assert sanitize_jitter_ms(raw, 200) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("", 0), (" ", 0), ("-4", 0), ("3.9", 3), ("-inf", 12), (-(10**400), 12), (26, 26)],
)
def test_sanitize_history_size(raw, expected) -> None:
    assert sanitize_history_size(raw, 12) == expected


def test_sanitize_config_should_accept_legacy_keys() -> None:
    config = sanitize_config({"durationMs": 8000, "jitter": 50, "historySize": 4})
    assert config == ReelConfig(duration_ms=8000, jitter_ms=50, history_size=4)


def test_sanitize_config_should_default_every_bad_field() -> None:
    config = sanitize_config({"duration_ms": "slow", "jitter_ms": None, "history_size": []})
    assert config == DEFAULT_CONFIG


@pytest.mark.parametrize("payload", [None, [], "text", 42])
def test_sanitize_config_should_default_non_mappings(payload) -> None:
    assert sanitize_config(payload) == DEFAULT_CONFIG


def test_sanitize_config_should_be_stable_for_valid_config() -> None:
    config = ReelConfig(duration_ms=1500, jitter_ms=0, history_size=0)
    assert sanitize_config(config) == config
    assert sanitize_config(sanitize_config(config)) == config
