from __future__ import annotations

import json
import logging
import os
import platform
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Mapping

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RECORD_ATTRS:
                continue
            payload[key] = value
        # extras we log are plain values; anything else is logged by its str()
        return json.dumps(payload, default=str, ensure_ascii=False, separators=(",", ":"))


def setup_logging(log_dir: str | None = None, level: str = "WARNING") -> None:
    """
    Console logs go to stderr so they never interleave with the dashboard on
    stdout. File handlers are only added when a log directory is configured.
    """
    level_num = getattr(logging, level.upper(), logging.WARNING)

    root = logging.getLogger()
    root.setLevel(level_num)
    root.handlers.clear()

    console = logging.StreamHandler(stream=sys.stderr)
    console.setLevel(level_num)
    console.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATEFMT))
    root.addHandler(console)

    if not log_dir:
        return
    Path(log_dir).mkdir(parents=True, exist_ok=True)

    text_handler = RotatingFileHandler(
        Path(log_dir) / "netmon.log", maxBytes=5_000_000, backupCount=5, encoding="utf-8"
    )
    text_handler.setLevel(level_num)
    text_handler.setFormatter(console.formatter)
    root.addHandler(text_handler)

    json_handler = RotatingFileHandler(
        Path(log_dir) / "netmon.jsonl", maxBytes=10_000_000, backupCount=3, encoding="utf-8"
    )
    json_handler.setLevel(level_num)
    json_handler.setFormatter(JsonFormatter())
    root.addHandler(json_handler)


def env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def platform_summary() -> Mapping[str, Any]:
    return {
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "machine": platform.machine(),
    }
