from __future__ import annotations

import json
import logging

from reel.telemetry.logging_setup import JsonFormatter, configure_logging, get_logger


def test_json_formatter_should_include_extra_fields() -> None:
    record = logging.LogRecord("letter_reel.session", logging.INFO, __file__, 1, "Run %s", ("armed",), None)
    record.run_token = 7
    record.opaque = object()
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "Run armed"
    assert payload["level"] == "INFO"
    assert payload["run_token"] == 7
    assert payload["opaque"].startswith("<object")
    assert "args" not in payload
    assert "lineno" not in payload


def test_configure_logging_should_write_json_lines(tmp_path) -> None:
    logger = configure_logging(log_dir=tmp_path / "logs", level="debug", console=False)
    get_logger("storage").warning("History not persisted", extra={"error": "disk full"})
    for handler in logger.handlers:
        handler.flush()
    lines = (tmp_path / "logs" / "reel_current.jsonl").read_text(encoding="utf-8").splitlines()
    records = [json.loads(line) for line in lines]
    assert records[-1]["name"] == "letter_reel.storage"
    assert records[-1]["error"] == "disk full"
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
