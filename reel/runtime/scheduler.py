"""Run scheduler driving the tick/finalize lifecycle of one run.

The scheduler never touches session state. It reads the live run token through
``current_token`` and reports completion by dispatching :class:`RunFinished`.
Every callback compares its captured token against the live one before doing
anything else; a mismatch means the run was superseded and the callback
returns without effect. Cancelling the loop handles on deactivation only
avoids leaking callbacks, correctness rests on the token check.
"""
from __future__ import annotations

import asyncio
import random
from typing import Callable, Sequence

from reel.core.enums import Mode
from reel.core.types import ALPHABET, TokenProvider
from reel.machine.events import Event, RunFinished
from reel.machine.selection import random_symbol
from reel.machine.state import SessionState
from reel.telemetry.logging_setup import get_logger

LOGGER = get_logger("scheduler")

DEFAULT_FRAME_INTERVAL_SEC = 1 / 60


class RunScheduler:
    """Keep at most one run's tick chain and completion timer armed."""

    def __init__(
        self,
        *,
        dispatch: Callable[[Event], None],
        current_token: TokenProvider,
        on_tick: Callable[[str], None] | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
        frame_interval: float = DEFAULT_FRAME_INTERVAL_SEC,
        alphabet: Sequence[str] = ALPHABET,
        rng: random.Random | None = None,
    ) -> None:
        self._dispatch = dispatch
        self._current_token = current_token
        self._on_tick = on_tick
        self._loop = loop
        self._frame_interval = frame_interval
        self._alphabet = tuple(alphabet)
        self._rng = rng
        self._token: int | None = None
        self._tick_handle: asyncio.Handle | None = None
        self._completion_handle: asyncio.Handle | None = None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def active_token(self) -> int | None:
        return self._token

    @property
    def is_active(self) -> bool:
        return self._tick_handle is not None or self._completion_handle is not None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def sync(self, state: SessionState) -> None:
        """Align armed work with ``(mode, run_token, run_delay_ms)`` of ``state``."""

        ctx = state.context
        if state.mode is not Mode.RUNNING:
            if self.is_active:
                self.deactivate()
            return
        if self._token != ctx.run_token:
            self.activate(ctx.run_token, ctx.run_delay_ms)

    def activate(self, token: int, delay_ms: int) -> None:
        self.deactivate()
        loop = self._get_loop()
        self._token = token
        self._tick_handle = loop.call_later(self._frame_interval, self._tick, token)
        self._completion_handle = loop.call_later(max(0, delay_ms) / 1000.0, self._finish, token)
        LOGGER.info("Run armed", extra={"run_token": token, "delay_ms": delay_ms})

    def deactivate(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None
        if self._completion_handle is not None:
            self._completion_handle.cancel()
            self._completion_handle = None
        if self._token is not None:
            LOGGER.debug("Run disarmed", extra={"run_token": self._token})

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------
    def _tick(self, token: int) -> None:
        if self._current_token() != token:
            return
        if self._on_tick is not None:
            self._on_tick(random_symbol(self._alphabet, self._rng))
        # on_tick may have dispatched a transition that superseded this run
        if self._current_token() != token or self._token != token:
            return
        self._tick_handle = self._get_loop().call_later(self._frame_interval, self._tick, token)

    def _finish(self, token: int) -> None:
        if self._current_token() != token:
            return
        if self._token != token or self._completion_handle is None:
            return
        self._completion_handle = None
        LOGGER.debug("Run completion fired", extra={"run_token": token})
        self._dispatch(RunFinished())

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop


__all__ = ["DEFAULT_FRAME_INTERVAL_SEC", "RunScheduler"]
