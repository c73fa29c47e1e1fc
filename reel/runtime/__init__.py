"""Run scheduling and session wiring on top of an asyncio event loop."""

from .scheduler import RunScheduler
from .session import ReelSession, initial_symbol

__all__ = ["ReelSession", "RunScheduler", "initial_symbol"]
