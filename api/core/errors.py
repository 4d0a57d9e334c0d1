"""
Domain error taxonomy.

Services and the access layer raise these; `main.py` maps each class to an
HTTP status code. Anything that is not a `DomainError` and escapes a
repository call is turned into `InternalError` by `internal_errors()`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class DomainError(RuntimeError):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    status_code = 400


class AuthenticationError(DomainError):
    status_code = 401


class AuthorizationError(DomainError):
    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    status_code = 409


class InternalError(DomainError):
    status_code = 500


@contextmanager
def internal_errors(action: str) -> Iterator[None]:
    """
    Let domain errors through unchanged; wrap everything else.

    The storage failure is logged with its traceback but its text is not
    copied into the raised error.
    """
    try:
        yield
    except DomainError:
        raise
    except Exception as exc:
        logger.exception("internal_error action=%r", action)
        raise InternalError(f"Failed to {action}.") from exc
