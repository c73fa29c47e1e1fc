from __future__ import annotations

import random
from pathlib import Path
from typing import Any, Callable, Sequence

import pytest

from reel.config.models import ReelConfig
from reel.machine.state import SessionState, create_initial_state
from reel.runtime.session import ReelSession
from reel.storage.store import ConfigHistoryStore

FRAME_INTERVAL = 0.05


class FakeHandle:
    def __init__(self, when: float, seq: int, callback: Callable[..., Any], args: tuple) -> None:
        self.when = when
        self.seq = seq
        self._callback = callback
        self._args = args
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    def run(self) -> None:
        self._callback(*self._args)


class FakeLoop:
    """Manual-time stand-in for the ``call_later`` part of an asyncio loop."""

    def __init__(self) -> None:
        self.now = 0.0
        self._handles: list[FakeHandle] = []
        self._seq = 0

    def time(self) -> float:
        return self.now

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> FakeHandle:
        handle = FakeHandle(self.now + max(0.0, delay), self._seq, callback, args)
        self._seq += 1
        self._handles.append(handle)
        return handle

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [h for h in self._handles if not h.cancelled() and h.when <= target + 1e-9]
            if not due:
                break
            handle = min(due, key=lambda h: (h.when, h.seq))
            self._handles.remove(handle)
            self.now = max(self.now, handle.when)
            handle.run()
        self.now = target
        self._handles = [h for h in self._handles if not h.cancelled()]

    def pending(self) -> list[FakeHandle]:
        return [h for h in self._handles if not h.cancelled()]


@pytest.fixture
def fake_loop() -> FakeLoop:
    return FakeLoop()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def store(tmp_path: Path) -> ConfigHistoryStore:
    return ConfigHistoryStore(tmp_path / "store")


@pytest.fixture
def state_factory() -> Callable[..., SessionState]:
    def _factory(
        *,
        duration_ms: int = 5000,
        jitter_ms: int = 0,
        history_size: int = 12,
        history: Sequence[str] = (),
    ) -> SessionState:
        config = ReelConfig(duration_ms=duration_ms, jitter_ms=jitter_ms, history_size=history_size)
        return create_initial_state(config, history)

    return _factory


@pytest.fixture
def session_factory(
    fake_loop: FakeLoop,
    rng: random.Random,
    store: ConfigHistoryStore,
    state_factory: Callable[..., SessionState],
) -> Callable[..., ReelSession]:
    def _factory(**overrides: Any) -> ReelSession:
        return ReelSession(
            store=store,
            state=state_factory(**overrides),
            loop=fake_loop,  # type: ignore[arg-type]
            frame_interval=FRAME_INTERVAL,
            rng=rng,
        )

    return _factory
