"""File-based store for the reel config record and recent-history log.

Two JSON files live under the store directory: ``config.json`` and
``history.json``. The store never lets a storage failure reach the session:
reads fall back to defaults and writes become logged no-ops.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from reel.config.models import DEFAULT_CONFIG, ReelConfig
from reel.config.sanitize import sanitize_config
from reel.core.errors import StorageError
from reel.core.types import ALPHABET
from reel.machine.actions import Action, ClearStorage, PersistConfig, PersistHistory
from reel.machine.selection import trim_history
from reel.telemetry.logging_setup import get_logger

LOGGER = get_logger("storage")

_MISSING = object()


class ConfigHistoryStore:
    """Persist and sanitize the reel config and history."""

    def __init__(self, storage_dir: Path) -> None:
        self.storage_dir = Path(storage_dir)
        self.config_path = self.storage_dir / "config.json"
        self.history_path = self.storage_dir / "history.json"

    # Low-level file helpers ----------------------------------------------
    def _read_json(self, path: Path) -> Any:
        try:
            if not path.exists():
                return _MISSING
            return json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise StorageError(f"Failed to read {path.name}: {exc}") from exc
        except ValueError:
            # Undecodable bytes and invalid JSON both land here.
            LOGGER.warning("Discarding malformed JSON", extra={"path": str(path)})
            return _MISSING

    def _write_json(self, path: Path, payload: Any) -> None:
        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Failed to write {path.name}: {exc}") from exc

    def _remove(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to remove {path.name}: {exc}") from exc

    # Config --------------------------------------------------------------
    def load_config(self) -> ReelConfig:
        try:
            payload = self._read_json(self.config_path)
        except StorageError as exc:
            LOGGER.warning("Config storage unavailable, using defaults", extra={"error": str(exc)})
            return DEFAULT_CONFIG
        if payload is _MISSING:
            return DEFAULT_CONFIG
        return sanitize_config(payload)

    def persist_config(self, config: ReelConfig) -> None:
        try:
            self._write_json(self.config_path, config.model_dump())
        except StorageError as exc:
            LOGGER.warning("Config not persisted", extra={"error": str(exc)})

    # History -------------------------------------------------------------
    def load_history(self) -> tuple[str, ...]:
        try:
            payload = self._read_json(self.history_path)
        except StorageError as exc:
            LOGGER.warning("History storage unavailable, starting empty", extra={"error": str(exc)})
            return ()
        if not isinstance(payload, list):
            return ()
        history: list[str] = []
        for entry in payload:
            if not isinstance(entry, str):
                continue
            symbol = entry.upper()
            if len(symbol) == 1 and symbol in ALPHABET:
                history.append(symbol)
        return tuple(history)

    def persist_history(self, history: Sequence[str]) -> None:
        try:
            self._write_json(self.history_path, list(history))
        except StorageError as exc:
            LOGGER.warning("History not persisted", extra={"error": str(exc)})

    # Whole store ---------------------------------------------------------
    def reset_all(self) -> None:
        for path in (self.config_path, self.history_path):
            try:
                self._remove(path)
            except StorageError as exc:
                LOGGER.warning("Storage not cleared", extra={"error": str(exc)})

    def load_initial_state(self) -> tuple[ReelConfig, tuple[str, ...]]:
        """Load config and history, trim history to the bound and write both back."""

        config = self.load_config()
        history = trim_history(self.load_history(), config.history_size)
        self.persist_config(config)
        self.persist_history(history)
        return config, history

    def apply(self, action: Action) -> None:
        """Execute a storage action returned by the reducer."""

        if isinstance(action, PersistConfig):
            self.persist_config(action.config)
        elif isinstance(action, PersistHistory):
            self.persist_history(action.history)
        elif isinstance(action, ClearStorage):
            self.reset_all()
        else:  # pragma: no cover - developer error
            raise TypeError(f"Unknown storage action: {action!r}")


__all__ = ["ConfigHistoryStore"]
