"""Storage side effects returned by the reducer.

The reducer never touches storage itself. It returns these actions alongside
the next state and the session controller executes them exactly once, in
order, against the config/history store.
"""
from __future__ import annotations

from dataclasses import dataclass

from reel.config.models import ReelConfig


@dataclass(frozen=True)
class PersistConfig:
    config: ReelConfig


@dataclass(frozen=True)
class PersistHistory:
    history: tuple[str, ...]


@dataclass(frozen=True)
class ClearStorage:
    pass


Action = PersistConfig | PersistHistory | ClearStorage
