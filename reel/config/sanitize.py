"""Sanitizers turning raw user or persisted values into bounded config values.

Every helper is total: it never raises, and falls back to the provided default
when the value cannot be read as a finite number.
"""
from __future__ import annotations

import math
from typing import Any, Mapping

from .models import (
    DEFAULT_CONFIG,
    MIN_DURATION_MS,
    ReelConfig,
)

# Legacy camelCase keys written by earlier versions of the store.
_KEY_ALIASES: dict[str, tuple[str, ...]] = {
    "duration_ms": ("duration_ms", "durationMs"),
    "jitter_ms": ("jitter_ms", "jitterMs", "jitter"),
    "history_size": ("history_size", "historySize"),
}


def _parse_number(raw: Any) -> float | None:
    """Return ``raw`` as a finite float, or ``None`` if it is not one."""

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return None
    elif isinstance(raw, str):
        # An empty field reads as zero, like a cleared numeric input.
        text = raw.strip() or "0"
        try:
            value = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(value):
        return None
    return value


def _sanitize_floor(raw: Any, fallback: int, minimum: int) -> int:
    value = _parse_number(raw)
    if value is None:
        return fallback
    return max(minimum, math.floor(value))


def sanitize_duration_ms(raw: Any, fallback: int) -> int:
    """Run duration in milliseconds, at least 1500."""

    return _sanitize_floor(raw, fallback, MIN_DURATION_MS)


def sanitize_jitter_ms(raw: Any, fallback: int) -> int:
    """Jitter amplitude in milliseconds, at least 0."""

    return _sanitize_floor(raw, fallback, 0)


def sanitize_history_size(raw: Any, fallback: int) -> int:
    """Number of recent results to remember, at least 0."""

    return _sanitize_floor(raw, fallback, 0)


def _lookup(payload: Mapping[str, Any], field_name: str) -> Any:
    for key in _KEY_ALIASES[field_name]:
        if key in payload:
            return payload[key]
    return None


def sanitize_config(payload: Mapping[str, Any] | ReelConfig | None) -> ReelConfig:
    """Build a :class:`ReelConfig` from an arbitrary mapping, defaulting every field."""

    if isinstance(payload, ReelConfig):
        payload = payload.model_dump()
    if not isinstance(payload, Mapping):
        return DEFAULT_CONFIG
    return ReelConfig(
        duration_ms=sanitize_duration_ms(_lookup(payload, "duration_ms"), DEFAULT_CONFIG.duration_ms),
        jitter_ms=sanitize_jitter_ms(_lookup(payload, "jitter_ms"), DEFAULT_CONFIG.jitter_ms),
        history_size=sanitize_history_size(_lookup(payload, "history_size"), DEFAULT_CONFIG.history_size),
    )


__all__ = [
    "sanitize_config",
    "sanitize_duration_ms",
    "sanitize_history_size",
    "sanitize_jitter_ms",
]
