"""Tests for logging configuration and entrypoint wiring."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

import audiowave.cli as cli_module
from audiowave.logging_utils import JsonLogFormatter, setup_logging


def _flush_root_handlers() -> None:
    for handler in logging.getLogger().handlers:
        flush = getattr(handler, "flush", None)
        if callable(flush):
            flush()


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        yield root
    finally:
        root.handlers.clear()
        for handler in original_handlers:
            root.addHandler(handler)
        root.setLevel(original_level)


def test_setup_logging_default_path_writes_json_log(
    tmp_path, restore_root_logger
) -> None:
    log_path = setup_logging(log_dir=tmp_path, level="INFO")
    logging.getLogger("audiowave.test").info(
        "default-log-path", extra={"event": "probe", "generation": 3}
    )
    _flush_root_handlers()

    assert log_path == tmp_path / "audiowave.log"
    record = json.loads(log_path.read_text(encoding="utf-8").splitlines()[-1])
    assert record["message"] == "default-log-path"
    assert record["event"] == "probe"
    assert record["context"] == {"generation": 3}


def test_setup_logging_custom_log_file_writes_log(
    tmp_path, restore_root_logger
) -> None:
    custom_path = tmp_path / "custom" / "wave.log"
    setup_logging(log_dir=tmp_path, level="DEBUG", log_file=custom_path)
    logging.getLogger("audiowave.test").debug("custom-log-path")
    _flush_root_handlers()

    assert custom_path.exists()
    assert "custom-log-path" in custom_path.read_text(encoding="utf-8")
    assert restore_root_logger.level == logging.DEBUG


def test_setup_logging_unknown_level_falls_back_to_info(
    tmp_path, restore_root_logger
) -> None:
    setup_logging(log_dir=tmp_path, level="chatty")
    assert restore_root_logger.level == logging.INFO


def test_json_formatter_includes_exception_text() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.getLogger("audiowave.test").makeRecord(
            "audiowave.test",
            logging.ERROR,
            __file__,
            1,
            "failed",
            None,
            exc_info=sys.exc_info(),
        )
    payload = json.loads(JsonLogFormatter().format(record))
    assert payload["level"] == "ERROR"
    assert "RuntimeError: boom" in payload["exception"]
    assert "context" not in payload


def test_cli_main_passes_effective_level_and_log_file(monkeypatch, tmp_path) -> None:
    captured: dict[str, object] = {}

    def fake_setup_logging(*, log_dir: Path, level: str, log_file: Path | None):
        captured["log_dir"] = log_dir
        captured["level"] = level
        captured["log_file"] = log_file

    monkeypatch.setattr(cli_module, "setup_logging", fake_setup_logging)
    monkeypatch.setattr(cli_module, "log_dir", lambda: tmp_path / "logs")
    monkeypatch.setattr(cli_module, "run_render", lambda args, console: 0)

    rc = cli_module.main(
        ["--verbose", "--quiet", "--log-file", str(tmp_path / "cli.log"), "render", "x"]
    )

    assert rc == 0
    assert captured["level"] == "WARNING"
    assert captured["log_file"] == tmp_path / "cli.log"
    assert captured["log_dir"] == tmp_path / "logs"


def test_cli_main_returns_nonzero_when_logging_setup_fails(
    monkeypatch, tmp_path, capsys
) -> None:
    def fail_setup_logging(**kwargs):
        del kwargs
        raise OSError("cannot open log")

    monkeypatch.setattr(cli_module, "setup_logging", fail_setup_logging)
    monkeypatch.setattr(cli_module, "log_dir", lambda: tmp_path / "logs")

    rc = cli_module.main(["render", "song.wav"])
    captured = capsys.readouterr()

    assert rc == 1
    assert "Unexpected error. Re-run with --verbose for details." in captured.err
