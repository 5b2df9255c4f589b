"""
Environment-driven settings.

Values are read at call time so tests and process managers can change the
environment without re-importing modules.
"""

from __future__ import annotations

import os

DEFAULT_CORS_ORIGINS = [
    "https://www.bitcoin-baby.com",
    "https://bitcoin-baby.com",
    "https://babybitcoin.pages.dev",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

LEDGER_BACKENDS = {"postgres", "memory"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def database_url_raw() -> str:
    return os.environ.get("DATABASE_URL", "").strip()


def db_pool_min_size() -> int:
    return max(1, _env_int("DB_POOL_MIN_SIZE", 1))


def db_pool_max_size() -> int:
    return max(db_pool_min_size(), _env_int("DB_POOL_MAX_SIZE", 5))


def db_command_timeout_s() -> float:
    return _env_float("DB_COMMAND_TIMEOUT_S", 30.0)


def ledger_backend() -> str:
    backend = os.environ.get("LEDGER_BACKEND", "postgres").strip().lower() or "postgres"
    if backend not in LEDGER_BACKENDS:
        raise RuntimeError(f"Unknown LEDGER_BACKEND '{backend}'. Allowed: {sorted(LEDGER_BACKENDS)}")
    return backend


def cors_allowed_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOWED_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def host() -> str:
    return os.environ.get("HOST", "0.0.0.0").strip() or "0.0.0.0"


def port() -> int:
    return _env_int("PORT", 10000)


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
