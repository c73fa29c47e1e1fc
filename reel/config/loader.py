"""YAML loader for the process-level settings.

The settings file is optional for the CLI (defaults apply when it is absent)
but when present it must be a mapping that validates against
:class:`~reel.config.models.AppSettings`.
"""
from __future__ import annotations

from pathlib import Path
from typing import Mapping

import yaml
from pydantic import ValidationError

from reel.core.errors import ConfigurationError

from .models import AppSettings

_DEFAULT_CONFIG_DIR = Path("config")


def _read_yaml(path: Path) -> Mapping:
    """Read a YAML file and return a mapping (empty dict if file is blank)."""

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, Mapping):
        raise ValueError(f"YAML root must be a mapping in {path}")
    return data


def load_app_settings(path: Path | str = _DEFAULT_CONFIG_DIR / "reel.yml") -> AppSettings:
    """Load reel.yml (storage_dir, frame_interval_ms, logging)."""

    data = _read_yaml(Path(path))
    try:
        return AppSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid settings in {path}: {exc}") from exc


def load_app_settings_or_default(path: Path | str | None) -> AppSettings:
    """Like :func:`load_app_settings` but returns defaults for a missing file."""

    if path is None or not Path(path).exists():
        return AppSettings()
    return load_app_settings(path)
