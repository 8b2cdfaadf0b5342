"""Runtime configuration, read from the environment (and a ``.env`` file)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


class ConfigError(Exception):
    """An environment variable holds a value we cannot use."""


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///storefront.db"
    log_level: str = "INFO"
    log_json: bool = False
    sql_echo: bool = False
    order_number_attempts: int = 5
    history_limit: int = 50


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from *environ* (defaults to ``os.environ`` after loading ``.env``)."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    return Settings(
        database_url=environ.get("STOREFRONT_DATABASE_URL", Settings.database_url),
        log_level=_level(environ.get("STOREFRONT_LOG_LEVEL", Settings.log_level)),
        log_json=_flag(environ, "STOREFRONT_LOG_JSON"),
        sql_echo=_flag(environ, "STOREFRONT_SQL_ECHO"),
        order_number_attempts=_positive_int(
            environ, "STOREFRONT_ORDER_NUMBER_ATTEMPTS", Settings.order_number_attempts
        ),
        history_limit=_positive_int(
            environ, "STOREFRONT_HISTORY_LIMIT", Settings.history_limit
        ),
    )


def _flag(environ: Mapping[str, str], key: str) -> bool:
    raw = environ.get(key, "").strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ConfigError(f"{key} must be a boolean, got {raw!r}")


def _positive_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{key} must be positive, got {value}")
    return value


def _level(raw: str) -> str:
    level = raw.strip().upper()
    if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigError(f"STOREFRONT_LOG_LEVEL is not a log level: {raw!r}")
    return level
