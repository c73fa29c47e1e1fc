"""Session controller binding the reducer, the store and the run scheduler.

:class:`ReelSession` is the single owner of the current :class:`SessionState`.
UI commands and the scheduler both feed events through :meth:`dispatch`, which
applies them one at a time in arrival order, executes the storage actions the
reducer returned, re-syncs the scheduler and notifies display listeners.
"""
from __future__ import annotations

import asyncio
import random
from collections import deque
from typing import Callable, Deque

from reel.core.enums import InputField, Mode
from reel.core.types import ALPHABET, DEFAULT_SYMBOL
from reel.machine.events import (
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
from reel.machine.reducer import check_invariants, transition
from reel.machine.selection import random_symbol
from reel.machine.state import SessionState, create_initial_state
from reel.storage.store import ConfigHistoryStore
from reel.telemetry.logging_setup import get_logger

from .scheduler import DEFAULT_FRAME_INTERVAL_SEC, RunScheduler

LOGGER = get_logger("session")

Listener = Callable[[SessionState, str], None]


def initial_symbol(state: SessionState) -> str:
    """Symbol to show before the first run: the latest result, if any."""

    history = state.context.history
    if history and history[-1] in ALPHABET:
        return history[-1]
    return DEFAULT_SYMBOL


class ReelSession:
    """Own the session state and route every event through the reducer."""

    def __init__(
        self,
        *,
        store: ConfigHistoryStore,
        state: SessionState | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
        frame_interval: float = DEFAULT_FRAME_INTERVAL_SEC,
        rng: random.Random | None = None,
    ) -> None:
        self._store = store
        self._state = state or create_initial_state()
        self._rng = rng
        self._queue: Deque[Event] = deque()
        self._dispatching = False
        self._listeners: list[Listener] = []
        self._settled: asyncio.Event | None = None
        self._current_symbol = initial_symbol(self._state)
        self._scheduler = RunScheduler(
            dispatch=self.dispatch,
            current_token=lambda: self._state.context.run_token,
            on_tick=self._show_symbol,
            loop=loop,
            frame_interval=frame_interval,
            rng=rng,
        )

    @classmethod
    def from_store(
        cls,
        store: ConfigHistoryStore,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
        frame_interval: float = DEFAULT_FRAME_INTERVAL_SEC,
        rng: random.Random | None = None,
    ) -> "ReelSession":
        config, history = store.load_initial_state()
        LOGGER.info(
            "Session loaded",
            extra={"config": config.model_dump(), "history_len": len(history)},
        )
        return cls(
            store=store,
            state=create_initial_state(config, history),
            loop=loop,
            frame_interval=frame_interval,
            rng=rng,
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def mode(self) -> Mode:
        return self._state.mode

    @property
    def current_symbol(self) -> str:
        return self._current_symbol

    @property
    def scheduler(self) -> RunScheduler:
        return self._scheduler

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener(state, symbol)``; returns the unsubscribe callable."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Event processing
    # ------------------------------------------------------------------
    def dispatch(self, event: Event) -> None:
        """Apply ``event``; events raised while one is in flight wait their turn."""

        self._queue.append(event)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._queue:
                self._apply(self._queue.popleft())
        finally:
            self._dispatching = False

    def _apply(self, event: Event) -> None:
        previous = self._state
        state, actions = transition(previous, event, self._rng)
        if state is previous:
            LOGGER.debug(
                "Event ignored",
                extra={"event": type(event).__name__, "mode": previous.mode.value},
            )
            return
        self._state = state
        LOGGER.debug(
            "Transition",
            extra={
                "event": type(event).__name__,
                "from_mode": previous.mode.value,
                "to_mode": state.mode.value,
                "run_token": state.context.run_token,
            },
        )
        violations = check_invariants(state)
        if violations:
            LOGGER.error("Session invariants violated", extra={"violations": violations})

        for action in actions:
            self._store.apply(action)

        self._scheduler.sync(state)
        self._after_transition(previous, event)

    def _after_transition(self, previous: SessionState, event: Event) -> None:
        state = self._state
        if isinstance(event, Start):
            LOGGER.info(
                "Run started",
                extra={"run_token": state.context.run_token, "delay_ms": state.context.run_delay_ms},
            )
            if self._settled is not None:
                self._settled.clear()
        elif isinstance(event, RunFinished):
            LOGGER.info(
                "Run finished",
                extra={"symbol": state.context.last_final_symbol, "history": list(state.context.history)},
            )
            self._show_symbol(state.context.last_final_symbol or self._current_symbol)
        elif isinstance(event, Reset):
            LOGGER.info("Session reset", extra={"run_token": state.context.run_token})
            self._show_symbol(random_symbol(ALPHABET, self._rng))
        elif previous.mode is Mode.RUNNING:
            LOGGER.info("Run cancelled", extra={"event": type(event).__name__})

        if state.mode is not Mode.RUNNING and self._settled is not None:
            self._settled.set()

    def _show_symbol(self, symbol: str) -> None:
        self._current_symbol = symbol
        for listener in list(self._listeners):
            listener(self._state, symbol)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def start(self) -> None:
        self.dispatch(Start())

    def stop(self) -> None:
        self.dispatch(Stop())

    def close_settings(self) -> None:
        self.dispatch(CloseSettings())

    def reset(self) -> None:
        self.dispatch(Reset())

    def toggle_settings(self) -> None:
        """Settings button: open from idle, stop then open while running, close otherwise."""

        if self.mode is Mode.IDLE:
            self.dispatch(OpenSettings())
        elif self.mode is Mode.RUNNING:
            self.dispatch(Stop())
            self.dispatch(OpenSettings())
        else:
            self.dispatch(CloseSettings())

    def edit(self, field: InputField, value: str) -> None:
        """Type ``value`` into a settings field and commit it."""

        self.dispatch(ChangeInput(field=field, value=value))
        self.dispatch(CommitInput(field=field))

    async def wait_until_settled(self) -> str | None:
        """Wait until the session leaves RUNNING; return the last final symbol."""

        if self._settled is None:
            self._settled = asyncio.Event()
            if self.mode is not Mode.RUNNING:
                self._settled.set()
        await self._settled.wait()
        return self._state.context.last_final_symbol

    async def spin(self) -> str | None:
        """Start a run and wait for it to settle.

        Returns the final symbol, or ``None`` when the run was cancelled
        (STOP, OPEN_SETTINGS or RESET bumped the token before it finished).
        """

        self.start()
        token = self._state.context.run_token
        symbol = await self.wait_until_settled()
        if self._state.context.run_token != token:
            return None
        return symbol

    def close(self) -> None:
        self._scheduler.deactivate()


__all__ = ["ReelSession", "initial_symbol"]
