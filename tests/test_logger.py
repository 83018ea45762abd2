"""Tests for the structured logger."""

import json

from shared.logger import ToolkitLogger


def _read_lines(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_json_file_logging(tmp_path):
    log_file = tmp_path / "logs" / "caesar.log"
    log = ToolkitLogger(
        "test-json", log_level="DEBUG", log_file=log_file, json_logs=True,
        console_output=False,
    )
    with log.operation("crack"):
        log.info("Key estimated", key=11)
    log.warning("outside")

    for handler in log.underlying.handlers:
        handler.flush()

    first, second = _read_lines(log_file)
    assert first["logger"] == "caesar.test-json"
    assert first["level"] == "INFO"
    assert first["component"] == "test-json"
    assert first["operation"] == "crack"
    assert first["extra"] == {"key": 11}
    assert "operation" not in second


def test_level_filters_records(tmp_path):
    log_file = tmp_path / "caesar.log"
    log = ToolkitLogger(
        "test-level", log_level="WARNING", log_file=log_file, json_logs=True,
        console_output=False,
    )
    log.info("hidden")
    log.error("shown")
    for handler in log.underlying.handlers:
        handler.flush()

    assert [r["message"] for r in _read_lines(log_file)] == ["shown"]


def test_handlers_not_duplicated():
    ToolkitLogger("test-dup")
    log = ToolkitLogger("test-dup")
    assert len(log.underlying.handlers) == 1
    assert log.component == "test-dup"


def test_timed_reports_elapsed(tmp_path):
    log = ToolkitLogger("test-timed", console_output=False)
    with log.timed("score") as timer:
        pass
    assert timer.elapsed >= 0.0
