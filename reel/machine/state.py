"""Immutable session state threaded through the reducer."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from reel.config.models import DEFAULT_CONFIG, ReelConfig
from reel.core.enums import InputField, Mode

from .selection import trim_history


@dataclass(frozen=True)
class PendingInputs:
    """Raw text of in-progress settings edits, one buffer per field."""

    duration: str
    jitter: str
    history_size: str

    @classmethod
    def from_config(cls, config: ReelConfig) -> "PendingInputs":
        return cls(
            duration=str(config.duration_ms),
            jitter=str(config.jitter_ms),
            history_size=str(config.history_size),
        )

    def get(self, field: InputField) -> str:
        return getattr(self, field.value)

    def with_value(self, field: InputField, value: str) -> "PendingInputs":
        return replace(self, **{field.value: value})


@dataclass(frozen=True)
class SessionContext:
    config: ReelConfig
    history: tuple[str, ...]
    inputs: PendingInputs
    last_final_symbol: str | None = None
    run_delay_ms: int = 0
    run_token: int = 0


@dataclass(frozen=True)
class SessionState:
    mode: Mode
    context: SessionContext

    @property
    def is_running(self) -> bool:
        return self.mode is Mode.RUNNING


def create_initial_state(
    config: ReelConfig = DEFAULT_CONFIG,
    history: Sequence[str] = (),
    *,
    run_token: int = 0,
) -> SessionState:
    """Idle state built from loaded config/history."""

    return SessionState(
        mode=Mode.IDLE,
        context=SessionContext(
            config=config,
            history=trim_history(history, config.history_size),
            inputs=PendingInputs.from_config(config),
            run_token=run_token,
        ),
    )


__all__ = [
    "PendingInputs",
    "SessionContext",
    "SessionState",
    "create_initial_state",
]
