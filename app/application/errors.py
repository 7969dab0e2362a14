"""Errors raised by use cases and translated into HTTP responses by the API layer."""

from __future__ import annotations


class ApplicationError(ValueError):
    """Base class for expected failures of a use case."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ApplicationError):
    """The resource does not exist or belongs to another user."""

    status_code = 404


class ForbiddenError(ApplicationError):
    """The user is authenticated but lacks access to the resource."""

    status_code = 403


class UnauthorizedError(ApplicationError):
    """The session is missing, expired or revoked."""

    status_code = 401


class ValidationError(ApplicationError):
    """The input is missing or malformed."""

    status_code = 400

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ConflictError(ApplicationError):
    """The operation clashes with existing state (duplicate e-mail, membership...)."""

    status_code = 400


__all__ = [
    "ApplicationError",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
]
