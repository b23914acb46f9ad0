"""Settings loaded from environment variables (+ optional .env).

One ``Settings`` object is built at process start and handed to the
service and the client explicitly; nothing reads the environment at
import time.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

ENV_PREFIX = "TASKLIST"

DEFAULT_PORT = 3001
DEFAULT_CORS_ORIGINS = (
    "https://your-frontend-app.vercel.app",
    "http://localhost:3000",
)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str) -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return tuple(p.strip() for p in raw.replace(",", " ").split() if p.strip())


def _env_log_level(name: str, default: str) -> str:
    """Canonical level name, so aliases like WARN or FATAL also suit uvicorn."""
    level = logging.getLevelName(_env(name, default).strip().upper())
    if not isinstance(level, int) or level == logging.NOTSET:
        return default
    return logging.getLevelName(level)


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Service ----
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    health_message: str = "Backend is running"
    seed_sample_tasks: bool = False

    # ---- Client ----
    api_url: str = f"http://localhost:{DEFAULT_PORT}"

    # ---- Logging ----
    log_level: str = "INFO"

    @staticmethod
    def from_env(*, dotenv: bool = True) -> Settings:
        if dotenv:
            load_dotenv(override=False)

        defaults = Settings()
        return Settings(
            host=_env(_k("HOST"), defaults.host),
            # PORT is the name hosting platforms inject; no prefix.
            port=_env_int("PORT", defaults.port),
            cors_origins=_env_list(_k("CORS_ORIGINS"), defaults.cors_origins),
            health_message=_env(_k("HEALTH_MESSAGE"), defaults.health_message),
            seed_sample_tasks=_env_bool(_k("SEED_SAMPLE_TASKS"), defaults.seed_sample_tasks),
            api_url=_env(_k("API_URL"), defaults.api_url).rstrip("/"),
            log_level=_env_log_level(_k("LOG_LEVEL"), defaults.log_level),
        )
