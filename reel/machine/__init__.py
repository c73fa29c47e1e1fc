"""Pure mode state machine: state, events, actions and the reducer."""

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
from .reducer import check_invariants, compute_run_delay_ms, transition
from .selection import random_symbol, select_final, trim_history
from .state import PendingInputs, SessionContext, SessionState, create_initial_state

__all__ = [
    "Action",
    "ChangeInput",
    "ClearStorage",
    "CloseSettings",
    "CommitInput",
    "Event",
    "OpenSettings",
    "PendingInputs",
    "PersistConfig",
    "PersistHistory",
    "Reset",
    "RunFinished",
    "SessionContext",
    "SessionState",
    "Start",
    "Stop",
    "check_invariants",
    "compute_run_delay_ms",
    "create_initial_state",
    "random_symbol",
    "select_final",
    "transition",
    "trim_history",
]
