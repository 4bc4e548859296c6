from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from netmon.core.utils import JsonFormatter, env_flag, setup_logging


def test_json_formatter_carries_extras() -> None:
    record = logging.makeLogRecord(
        {"name": "netmon.cycle", "levelname": "DEBUG", "msg": "cycle %d", "args": (3,), "interfaces": 2}
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["msg"] == "cycle 3"
    assert payload["logger"] == "netmon.cycle"
    assert payload["interfaces"] == 2
    assert "args" not in payload


def test_json_formatter_stringifies_non_json_extras(tmp_path: Path) -> None:
    record = logging.makeLogRecord({"msg": "log dir ready", "log_dir": tmp_path, "levels": {1, 2}})

    payload = json.loads(JsonFormatter().format(record))

    assert payload["log_dir"] == str(tmp_path)
    assert payload["levels"] == str({1, 2})


def test_setup_logging_creates_missing_log_dir(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b"
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging(str(target))
    finally:
        for h in root.handlers:
            h.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    assert target.is_dir()


@pytest.mark.parametrize("raw,expected", [("1", True), ("On", True), ("no", False), ("", False)])
def test_env_flag(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("NETMON_TEST_FLAG", raw)
    assert env_flag("NETMON_TEST_FLAG") is expected


def test_setup_logging_writes_files_when_dir_given(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging(str(tmp_path / "logs"), level="info")
        logging.getLogger("netmon").info("hello", extra={"cycle": 1})
        for h in root.handlers:
            h.flush()
    finally:
        for h in root.handlers:
            h.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    assert "hello" in (tmp_path / "logs" / "netmon.log").read_text(encoding="utf-8")
    line = (tmp_path / "logs" / "netmon.jsonl").read_text(encoding="utf-8").splitlines()[0]
    assert json.loads(line)["cycle"] == 1
