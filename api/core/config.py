"""
Environment-driven settings.

Values are read once (see `load_settings`) and passed explicitly to the app
factory. Nothing below `main.py` should call `os.environ` directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class AuthSettings:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    jwt_secret: str = "dev-change-this-secret"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 24 * 60


@dataclass(frozen=True)
class Settings:
    storage_backend: str = "postgres"
    database_url: str = ""
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    auth: AuthSettings = field(default_factory=AuthSettings)


def load_auth_settings() -> AuthSettings:
    return AuthSettings(
        jwt_secret=_env_str("JWT_SECRET", "dev-change-this-secret"),
        jwt_algorithm=_env_str("JWT_ALG", "HS256"),
        access_token_expire_minutes=_env_int("ACCESS_TOKEN_EXPIRE_MIN", 24 * 60),
    )


def load_settings() -> Settings:
    backend = _env_str("STORAGE_BACKEND", "postgres").lower()
    if backend not in {"postgres", "memory"}:
        raise RuntimeError(f"Unsupported STORAGE_BACKEND: {backend!r}.")

    return Settings(
        storage_backend=backend,
        database_url=os.environ.get("DATABASE_URL", "").strip(),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
        cors_origins=_env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
        auth=load_auth_settings(),
    )
