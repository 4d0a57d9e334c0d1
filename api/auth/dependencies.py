"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from fastapi import Depends, Header, Request

from core.errors import AuthenticationError

from .access import AccessControl, Identity, Role

# Shorthands for route declarations.
ADMIN_ONLY = (Role.ADMIN,)
ANY_ROLE = (Role.ADMIN, Role.USER)


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise AuthenticationError("Missing Authorization header.")

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise AuthenticationError("Invalid Authorization header format.")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise AuthenticationError("Authorization must be: Bearer <token>.")
    return token


def get_access_control(request: Request) -> AccessControl:
    return request.app.state.container.access_control


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_current_identity(
    access_token: str = Depends(get_bearer_token),
    access_control: AccessControl = Depends(get_access_control),
) -> Identity:
    return access_control.authenticate(access_token)


def require_roles(*roles: Role | str) -> Callable[..., Awaitable[Identity]]:
    """
    Build a dependency that authenticates the caller and then checks that
    they hold at least one of `roles`. With no roles, any authenticated
    caller passes.
    """

    async def dependency(
        identity: Identity = Depends(get_current_identity),
        access_control: AccessControl = Depends(get_access_control),
    ) -> Identity:
        return access_control.authorize(identity, roles)

    return dependency
