from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

DEFAULT_API_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_API_VERSION = "2023-06-01"
DEFAULT_MODEL = "claude-haiku-4-5-20251001"


class ConfigurationError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    model: str = DEFAULT_MODEL
    api_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION
    max_tokens: int = 512
    max_attempts: int = 3
    backoff_ms: int = 3000
    timeout_seconds: Optional[float] = None
    strict: bool = False
    fetch_delay_seconds: float = 2.0
    service_url: Optional[str] = None
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"


def _get_int(env: Mapping[str, str], key: str, default: int, minimum: int = 0) -> int:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        v = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from e
    if v < minimum:
        raise ConfigurationError(f"{key} must be >= {minimum}")
    return v


def _get_float(env: Mapping[str, str], key: str, default: Optional[float]) -> Optional[float]:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        v = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from e
    if v < 0:
        raise ConfigurationError(f"{key} must not be negative")
    return v


def _get_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = (env.get(key) or "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build settings from the process environment.

    A ``.env`` file in the working directory is loaded first when reading
    the real environment; pass ``env`` explicitly to bypass both.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    return Settings(
        api_key=(env.get("ANTHROPIC_API_KEY") or "").strip(),
        model=(env.get("ANTHROPIC_MODEL") or DEFAULT_MODEL).strip(),
        api_url=(env.get("ANTHROPIC_API_URL") or DEFAULT_API_URL).strip(),
        api_version=(env.get("ANTHROPIC_VERSION") or DEFAULT_API_VERSION).strip(),
        max_tokens=_get_int(env, "FETCH_MAX_TOKENS", 512, minimum=1),
        max_attempts=_get_int(env, "FETCH_MAX_ATTEMPTS", 3, minimum=1),
        backoff_ms=_get_int(env, "FETCH_BACKOFF_MS", 3000),
        timeout_seconds=_get_float(env, "FETCH_TIMEOUT_SECONDS", None),
        strict=_get_bool(env, "FETCH_STRICT", False),
        fetch_delay_seconds=float(_get_float(env, "DASHBOARD_FETCH_DELAY_SECONDS", 2.0) or 0.0),
        service_url=(env.get("DASHBOARD_SERVICE_URL") or "").strip() or None,
        host=(env.get("SERVER_HOST") or "127.0.0.1").strip(),
        port=_get_int(env, "SERVER_PORT", 8000, minimum=1),
        log_level=(env.get("LOG_LEVEL") or "INFO").strip().upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
