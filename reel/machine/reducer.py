"""
Mode state machine for the letter reel.

Design goals:
- Pure reducer transitions: (state, event) -> (next_state, actions)
- Explicit (mode, event type) transition table; unknown pairs are no-ops
- Run token bumped on every START/STOP/RESET and on OPEN_SETTINGS while
  running, so any callback captured for an older run becomes inert
- Storage writes returned as actions, never performed here
"""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Callable, cast

from reel.config.models import DEFAULT_CONFIG, ReelConfig
from reel.config.sanitize import (
    sanitize_duration_ms,
    sanitize_history_size,
    sanitize_jitter_ms,
)
from reel.core.enums import InputField, Mode
from reel.core.types import ALPHABET

from .actions import Action, ClearStorage, PersistConfig, PersistHistory
from .events import (
    ChangeInput,
    CloseSettings,
    CommitInput,
    Event,
    OpenSettings,
    Reset,
    RunFinished,
    Start,
    Stop,
)
from .selection import select_final, trim_history
from .state import PendingInputs, SessionContext, SessionState

Result = tuple[SessionState, list[Action]]
Handler = Callable[[SessionState, Event, random.Random | None], Result]


def compute_run_delay_ms(config: ReelConfig, rng: random.Random | None = None) -> int:
    """Configured duration plus a uniform signed jitter, floored at zero."""

    jitter = config.jitter_ms
    offset = (rng or random).randint(0, 2 * jitter) - jitter
    return max(0, config.duration_ms + offset)


# --------------------------- Handlers ---------------------------


def _start(state: SessionState, _event: Event, rng: random.Random | None) -> Result:
    ctx = state.context
    next_ctx = replace(
        ctx,
        run_delay_ms=compute_run_delay_ms(ctx.config, rng),
        run_token=ctx.run_token + 1,
    )
    return SessionState(mode=Mode.RUNNING, context=next_ctx), []


def _stop(state: SessionState, _event: Event, _rng: random.Random | None) -> Result:
    ctx = state.context
    return SessionState(mode=Mode.IDLE, context=replace(ctx, run_token=ctx.run_token + 1)), []


def _open_settings(state: SessionState, _event: Event, _rng: random.Random | None) -> Result:
    ctx = state.context
    next_ctx = replace(ctx, inputs=PendingInputs.from_config(ctx.config))
    if state.mode is Mode.RUNNING:
        next_ctx = replace(next_ctx, run_token=ctx.run_token + 1)
    return SessionState(mode=Mode.SETTINGS, context=next_ctx), []


def _close_settings(state: SessionState, _event: Event, _rng: random.Random | None) -> Result:
    return SessionState(mode=Mode.IDLE, context=state.context), []


def _reset(state: SessionState, _event: Event, _rng: random.Random | None) -> Result:
    next_ctx = SessionContext(
        config=DEFAULT_CONFIG,
        history=(),
        inputs=PendingInputs.from_config(DEFAULT_CONFIG),
        last_final_symbol=None,
        run_delay_ms=0,
        run_token=state.context.run_token + 1,
    )
    return SessionState(mode=Mode.IDLE, context=next_ctx), [ClearStorage()]


def _run_finished(state: SessionState, _event: Event, rng: random.Random | None) -> Result:
    ctx = state.context
    history_size = ctx.config.history_size
    recent = trim_history(ctx.history, history_size)
    chosen = select_final(ALPHABET, recent, rng)
    next_history = trim_history((*ctx.history, chosen), history_size)
    next_ctx = replace(ctx, history=next_history, last_final_symbol=chosen)
    return SessionState(mode=Mode.IDLE, context=next_ctx), [PersistHistory(next_history)]


def _change_input(state: SessionState, event: Event, _rng: random.Random | None) -> Result:
    change = cast(ChangeInput, event)
    ctx = state.context
    next_ctx = replace(ctx, inputs=ctx.inputs.with_value(change.field, change.value))
    return replace(state, context=next_ctx), []


def _commit_input(state: SessionState, event: Event, _rng: random.Random | None) -> Result:
    field = cast(CommitInput, event).field
    ctx = state.context
    raw = ctx.inputs.get(field)
    config = ctx.config
    history = ctx.history
    actions: list[Action] = []

    if field is InputField.DURATION:
        value = sanitize_duration_ms(raw, DEFAULT_CONFIG.duration_ms)
        config = config.model_copy(update={"duration_ms": value})
    elif field is InputField.JITTER:
        value = sanitize_jitter_ms(raw, DEFAULT_CONFIG.jitter_ms)
        config = config.model_copy(update={"jitter_ms": value})
    else:
        value = sanitize_history_size(raw, DEFAULT_CONFIG.history_size)
        config = config.model_copy(update={"history_size": value})
        history = trim_history(history, value)

    actions.append(PersistConfig(config))
    if field is InputField.HISTORY_SIZE:
        actions.append(PersistHistory(history))

    next_ctx = replace(
        ctx,
        config=config,
        history=history,
        inputs=ctx.inputs.with_value(field, str(value)),
    )
    return replace(state, context=next_ctx), actions


TRANSITIONS: dict[tuple[Mode, type], Handler] = {
    (Mode.IDLE, Start): _start,
    (Mode.IDLE, OpenSettings): _open_settings,
    (Mode.IDLE, Reset): _reset,
    (Mode.RUNNING, Stop): _stop,
    (Mode.RUNNING, OpenSettings): _open_settings,
    (Mode.RUNNING, RunFinished): _run_finished,
    (Mode.RUNNING, Reset): _reset,
    (Mode.SETTINGS, CloseSettings): _close_settings,
    (Mode.SETTINGS, Start): _start,
    (Mode.SETTINGS, Reset): _reset,
    (Mode.SETTINGS, ChangeInput): _change_input,
    (Mode.SETTINGS, CommitInput): _commit_input,
}


def transition(
    state: SessionState,
    event: Event,
    rng: random.Random | None = None,
) -> Result:
    """Apply ``event`` to ``state``.

    Pairs missing from :data:`TRANSITIONS` return the unchanged state and no
    actions. A RUN_FINISHED outside RUNNING is such a pair: it can only be the
    tail of a run that has already been superseded.
    """

    handler = TRANSITIONS.get((state.mode, type(event)))
    if handler is None:
        return state, []
    return handler(state, event, rng)


def check_invariants(state: SessionState) -> list[str]:
    """Return human-readable descriptions of violated invariants (empty if sound)."""

    violations: list[str] = []
    ctx = state.context
    cfg = ctx.config
    if len(ctx.history) > cfg.history_size:
        violations.append(
            f"history length {len(ctx.history)} exceeds history_size {cfg.history_size}"
        )
    if cfg.duration_ms < 1500:
        violations.append(f"duration_ms {cfg.duration_ms} below 1500")
    if cfg.jitter_ms < 0:
        violations.append(f"jitter_ms {cfg.jitter_ms} negative")
    if cfg.history_size < 0:
        violations.append(f"history_size {cfg.history_size} negative")
    unknown = [symbol for symbol in ctx.history if symbol not in ALPHABET]
    if unknown:
        violations.append(f"history holds symbols outside the alphabet: {unknown}")
    if ctx.last_final_symbol is not None and ctx.last_final_symbol not in ALPHABET:
        violations.append(f"last_final_symbol {ctx.last_final_symbol!r} outside the alphabet")
    if ctx.run_token < 0:
        violations.append(f"run_token {ctx.run_token} negative")
    return violations


__all__ = [
    "TRANSITIONS",
    "check_invariants",
    "compute_run_delay_ms",
    "transition",
]
