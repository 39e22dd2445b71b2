"""Categorical errors raised by the service layer.

Every failure a caller can observe maps to one :class:`ErrorKind`. The API
layer translates kinds into HTTP responses; storage driver messages never
leave the service layer.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Error categories exposed to API callers."""

    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    NOT_FOUND = "NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    INTERNAL = "INTERNAL"


class ServiceError(RuntimeError):
    """Base exception for business-rule and storage failures."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message = "internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotAuthenticatedError(ServiceError):
    """Raised when a mutating operation is attempted without an identity."""

    kind = ErrorKind.NOT_AUTHENTICATED
    default_message = "authentication required"


class NotFoundError(ServiceError):
    """Raised when the target entity is absent or soft-deleted."""

    kind = ErrorKind.NOT_FOUND
    default_message = "not found"


class InvalidInputError(ServiceError):
    """Raised for malformed or out-of-domain input."""

    kind = ErrorKind.INVALID_INPUT
    default_message = "invalid input"


class ForbiddenError(ServiceError):
    """Raised when the actor lacks the required role or ownership."""

    kind = ErrorKind.FORBIDDEN
    default_message = "not authorized"


class VoteConflictError(ServiceError):
    """Raised when a vote insert loses the (user, post) uniqueness race.

    The vote service retries these internally; they only reach callers
    wrapped in an :class:`InternalError` once retries are exhausted.
    """

    kind = ErrorKind.CONFLICT
    default_message = "concurrent vote detected"


class InternalError(ServiceError):
    """Raised when a unit of work fails for reasons unrelated to business rules."""

    kind = ErrorKind.INTERNAL
    default_message = "internal error"
