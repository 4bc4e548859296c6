from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from netmon.core.exceptions import ConfigError
from netmon.core.utils import env_flag

DEFAULT_INTERVAL_SECONDS = 1.0


class MonitorConfig(BaseModel):
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS

    @field_validator("interval_seconds")
    @classmethod
    def _interval_bounds(cls, v: float) -> float:
        if v <= 0 or v > 3600:
            raise ValueError("interval_seconds must be > 0 and <= 3600")
        return v


class DisplayConfig(BaseModel):
    color: bool = True


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    dir: str | None = None

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level


class AppConfig(BaseModel):
    monitor: MonitorConfig = Field(default_factory=MonitorConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed reading config yaml: {path}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Config yaml must be a mapping: {path}")
    return raw


def env_overrides() -> dict[str, Any]:
    out: dict[str, Any] = {}
    interval = os.getenv("NETMON_INTERVAL_SECONDS")
    if interval:
        out.setdefault("monitor", {})["interval_seconds"] = interval
    level = os.getenv("NETMON_LOG_LEVEL")
    if level:
        out.setdefault("logging", {})["level"] = level
    log_dir = os.getenv("NETMON_LOG_DIR")
    if log_dir:
        out.setdefault("logging", {})["dir"] = log_dir
    if env_flag("NETMON_NO_COLOR"):
        out.setdefault("display", {})["color"] = False
    return out


def load_config(config_path: str | Path | None = None) -> AppConfig:
    load_dotenv(override=False)
    raw = load_yaml(Path(config_path)) if config_path else {}
    raw = _deep_merge_dicts(raw, env_overrides())
    try:
        return AppConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def _deep_merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge_dicts(out[k], v)
        else:
            out[k] = v
    return out
