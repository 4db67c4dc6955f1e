# src/ikigai_planner/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole client (normal "settings layer").
- No secrets required at import time (the session token lives in a local file).
- Every value has a sane local-development default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "IKIGAI"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Remote API ----
    api_url: str
    connect_timeout_seconds: float
    read_timeout_seconds: float

    # ---- Session ----
    remember_session: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    session_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Ikigai Planner").strip() or "Ikigai Planner"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        api_url = (_env(_k("API_URL"), "http://localhost:5000/api").strip() or "").rstrip("/")

        connect_timeout = _env_float(_k("CONNECT_TIMEOUT_SECONDS"), 5.0)
        read_timeout = _env_float(_k("READ_TIMEOUT_SECONDS"), 15.0)

        remember_session = _env_bool(_k("REMEMBER_SESSION"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/ikigai"))
        session_path = _env_path(_k("SESSION_PATH"), data_dir / "session.json")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            api_url=api_url,
            connect_timeout_seconds=connect_timeout,
            read_timeout_seconds=read_timeout,
            remember_session=remember_session,
            data_dir=data_dir,
            session_path=session_path,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
