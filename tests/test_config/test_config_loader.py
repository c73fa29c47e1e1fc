from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from reel.config.loader import load_app_settings, load_app_settings_or_default
from reel.config.models import AppSettings
from reel.core.errors import ConfigurationError


def _write_yaml(path: Path, content: str) -> Path:
    path.write_text(dedent(content), encoding="utf-8")
    return path


def test_load_app_settings_should_parse_valid_yaml(tmp_path: Path) -> None:
    path = _write_yaml(
        tmp_path / "reel.yml",
        """
        storage_dir: state
        frame_interval_ms: 20
        logging:
          level: DEBUG
          log_dir: logs
        """,
    )
    settings = load_app_settings(path)
    assert settings.storage_dir == "state"
    assert settings.frame_interval_sec == pytest.approx(0.02)
    assert settings.logging.level == "DEBUG"
    assert settings.logging.log_dir == "logs"


def test_load_app_settings_should_default_blank_file(tmp_path: Path) -> None:
    path = _write_yaml(tmp_path / "reel.yml", "")
    assert load_app_settings(path) == AppSettings()


def test_load_app_settings_should_require_existing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_app_settings(tmp_path / "missing.yml")


def test_load_app_settings_should_require_mapping_root(tmp_path: Path) -> None:
    path = _write_yaml(tmp_path / "reel.yml", "- a\n- b\n")
    with pytest.raises(ValueError):
        load_app_settings(path)


def test_load_app_settings_should_wrap_validation_errors(tmp_path: Path) -> None:
    path = _write_yaml(tmp_path / "reel.yml", "frame_interval_ms: -3\n")
    with pytest.raises(ConfigurationError):
        load_app_settings(path)


def test_load_app_settings_or_default_should_tolerate_missing_file(tmp_path: Path) -> None:
    assert load_app_settings_or_default(None) == AppSettings()
    assert load_app_settings_or_default(tmp_path / "missing.yml") == AppSettings()
