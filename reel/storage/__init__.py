"""Persistence of the reel config record and recent-history log."""

from .store import ConfigHistoryStore

__all__ = ["ConfigHistoryStore"]
