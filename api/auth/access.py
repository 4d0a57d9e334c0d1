"""
Access control: who is calling, and may they do this?

A request moves through three checks, each of which can end it:

1. credential  - the bearer token must decode, verify and not be expired
2. claim shape - the payload must carry sub, username and a non-empty
                 list of role strings
3. role policy - if the operation names required roles, the caller must
                 hold at least one of them

Failures in (1) and (2) raise `AuthenticationError` (401). A signed token
with no roles is still an authentication failure, never "no roles
required". Failure in (3) raises `AuthorizationError` (403).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from core.config import AuthSettings
from core.errors import AuthenticationError, AuthorizationError

from . import security

logger = logging.getLogger(__name__)


class Role(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


@dataclass(frozen=True)
class Identity:
    user_id: str
    username: str
    roles: frozenset[str]


def _role_name(role: Role | str) -> str:
    return role.value if isinstance(role, Role) else str(role)


class AccessControl:
    def __init__(self, settings: AuthSettings) -> None:
        self._settings = settings

    def issue_token(
        self,
        *,
        user_id: int | str,
        username: str,
        roles: Iterable[Role | str],
        expires_in_s: int | None = None,
    ) -> str:
        return security.build_access_token(
            settings=self._settings,
            user_id=user_id,
            username=username,
            roles=[_role_name(r) for r in roles],
            expires_in_s=expires_in_s,
        )

    def authenticate(self, token: str) -> Identity:
        try:
            payload = security.decode_access_token(token, settings=self._settings)
        except security.AuthSecurityError as exc:
            raise AuthenticationError(str(exc)) from exc
        return self._identity_from_claims(payload)

    def authorize(self, identity: Identity, required_roles: Iterable[Role | str] = ()) -> Identity:
        required = {_role_name(r) for r in required_roles}
        if not required:
            return identity
        if identity.roles.isdisjoint(required):
            logger.info(
                "access_denied user_id=%s roles=%s required=%s",
                identity.user_id,
                sorted(identity.roles),
                sorted(required),
            )
            raise AuthorizationError("Access denied: insufficient role.")
        return identity

    def _identity_from_claims(self, payload: dict[str, Any]) -> Identity:
        subject = str(payload.get("sub") or "").strip()
        username = payload.get("username")
        if not subject or not isinstance(username, str) or not username.strip():
            raise AuthenticationError("Invalid token payload: missing required fields.")

        roles = payload.get("roles")
        if (
            not isinstance(roles, list)
            or not roles
            or not all(isinstance(r, str) and r.strip() for r in roles)
        ):
            raise AuthenticationError("Invalid token payload: roles must be a non-empty list.")

        return Identity(
            user_id=subject,
            username=username.strip(),
            roles=frozenset(r.strip() for r in roles),
        )
