"""Helper utilities shared across API route handlers."""

from typing import NoReturn

from fastapi import HTTPException

from app.application.errors import ApplicationError, ValidationError


def raise_http_error(exc: ApplicationError) -> NoReturn:
    """Translate an application error into the matching HTTP response."""

    detail: str | dict[str, str] = exc.message
    if isinstance(exc, ValidationError) and exc.field:
        detail = {"message": exc.message, "field": exc.field}
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    raise HTTPException(status_code=exc.status_code, detail=detail, headers=headers) from exc
