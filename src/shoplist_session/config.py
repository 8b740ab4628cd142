from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    api_base_url: str
    timeout_seconds: float = 30.0
    verify_ssl: bool = True
    session_id: str = "default"
    storage_dir: Path | None = None
    log_level: str = "INFO"


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    api_base_url = (os.getenv("SHOPLIST_API_BASE_URL") or "").strip()
    _validate(bool(api_base_url), "Missing required config values: SHOPLIST_API_BASE_URL")

    timeout_seconds = _read_float("SHOPLIST_TIMEOUT_SECONDS", "30")
    _validate(
        timeout_seconds > 0,
        f"Invalid SHOPLIST_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}",
    )

    session_id = (os.getenv("SHOPLIST_SESSION_ID") or "default").strip()
    _validate(
        session_id not in {".", ".."} and "/" not in session_id and "\\" not in session_id,
        f"Invalid SHOPLIST_SESSION_ID: {session_id!r} is not a plain name",
    )

    storage_raw = (os.getenv("SHOPLIST_STORAGE_DIR") or "").strip()

    log_level = (os.getenv("SHOPLIST_LOG_LEVEL") or "INFO").strip().upper()
    _validate(
        isinstance(logging.getLevelName(log_level), int),
        f"Invalid SHOPLIST_LOG_LEVEL: unknown level {log_level!r}",
    )

    return ClientConfig(
        api_base_url=api_base_url.rstrip("/"),
        timeout_seconds=timeout_seconds,
        verify_ssl=_coerce_bool(os.getenv("SHOPLIST_VERIFY_SSL"), True),
        session_id=session_id or "default",
        storage_dir=Path(storage_raw) if storage_raw else None,
        log_level=log_level,
    )
