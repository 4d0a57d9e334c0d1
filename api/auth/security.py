"""
Auth security helpers (JWT encode/decode).

All settings arrive as arguments; this module never reads the environment.
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from typing import Any

import jwt

from core.config import AuthSettings


class AuthSecurityError(RuntimeError):
    pass


def now_epoch_s() -> int:
    return int(time.time())


def build_access_token(
    *,
    settings: AuthSettings,
    user_id: int | str,
    username: str,
    roles: Iterable[str],
    expires_in_s: int | None = None,
) -> str:
    issued_at = now_epoch_s()
    if expires_in_s is None:
        expires_in_s = settings.access_token_expire_minutes * 60

    payload = {
        # PyJWT requires `sub` to be a string.
        "sub": str(user_id),
        "username": username,
        "roles": [str(r) for r in roles],
        "iat": issued_at,
        "exp": issued_at + expires_in_s,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, *, settings: AuthSettings) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        return jwt.decode(
            raw,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthSecurityError("Access token is expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc
