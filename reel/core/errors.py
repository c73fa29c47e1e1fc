"""Error hierarchy shared by the reel subsystems.

Almost nothing in the core raises: malformed input and persisted data are
sanitized, stale callbacks are suppressed. The classes below cover the few
places where a failure has to travel, namely the settings loader at startup
and the low-level storage helpers (caught again at the store boundary).
"""
from __future__ import annotations


class ReelError(Exception):
    """Base class for all custom exceptions in the application."""


class ConfigurationError(ReelError):
    """Raised when the settings file is invalid."""


class StorageError(ReelError):
    """Raised when a config/history JSON file cannot be read or written."""
