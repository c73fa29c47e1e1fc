"""Typed configuration models for the reel.

Two kinds of configuration live here. :class:`ReelConfig` is the small record
the user edits from the settings panel and that the store persists between
sessions. :class:`AppSettings` is the process-level configuration read from
YAML at startup (storage location, frame cadence, logging).
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

MIN_DURATION_MS = 1500
DEFAULT_DURATION_MS = 5000
DEFAULT_JITTER_MS = 200
DEFAULT_HISTORY_SIZE = 12


class ReelConfig(BaseModel):
    """Run timing and history bound.

    Values entering the session context always pass through
    :mod:`reel.config.sanitize` first; the field constraints below reject
    anything that slipped past it.
    """

    duration_ms: int = Field(DEFAULT_DURATION_MS, ge=MIN_DURATION_MS)
    jitter_ms: int = Field(DEFAULT_JITTER_MS, ge=0)
    history_size: int = Field(DEFAULT_HISTORY_SIZE, ge=0)

    model_config = ConfigDict(frozen=True)


DEFAULT_CONFIG = ReelConfig()


class LoggingSettings(BaseModel):
    """Logging switches for :func:`reel.telemetry.configure_logging`."""

    level: str = Field("INFO")
    log_dir: str = Field("data/logs")


class AppSettings(BaseModel):
    """Process-level settings loaded from ``config/reel.yml``."""

    storage_dir: str = Field("runtime", description="Directory holding config.json/history.json")
    frame_interval_ms: float = Field(16.0, gt=0, description="Cadence of the reel tick")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def frame_interval_sec(self) -> float:
        return self.frame_interval_ms / 1000.0
