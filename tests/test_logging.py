from __future__ import annotations

import json
import logging

import pytest

from kernel_monitor import logging as km_logging
from kernel_monitor.logging import JsonFormatter


def test_json_formatter_includes_extras() -> None:
    record = logging.LogRecord(
        name="kernel_monitor.server",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="collection_failed",
        args=(),
        exc_info=None,
    )
    record.code = "source_unavailable"
    record.path = "/run/kernel_monitor.sock"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "kernel_monitor.server"
    assert payload["message"] == "collection_failed"
    assert payload["code"] == "source_unavailable"
    assert payload["path"] == "/run/kernel_monitor.sock"
    assert "pid" not in payload


def test_configure_logging_writes_json_to_stderr_only(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(km_logging, "_CONFIGURED", False)
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)

    km_logging.configure_logging(level="debug")
    km_logging.configure_logging(level="error")
    logging.getLogger("kernel_monitor.collector").debug(
        "process exited during collection", extra={"pid": 42}
    )

    out, err = capsys.readouterr()
    assert out == ""
    assert len(root.handlers) == 1
    payload = json.loads(err.strip())
    assert payload["level"] == "DEBUG"
    assert payload["pid"] == 42
