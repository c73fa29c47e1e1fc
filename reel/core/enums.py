"""Enumerations shared across the reel subsystems."""
from __future__ import annotations

from enum import Enum


class Mode(str, Enum):
    """Operating mode of the session; the discriminant of the session state."""

    IDLE = "idle"
    RUNNING = "running"
    SETTINGS = "settings"


class InputField(str, Enum):
    """Editable config fields, each backed by a pending input buffer."""

    DURATION = "duration"
    JITTER = "jitter"
    HISTORY_SIZE = "history_size"
