"""Endpoints handling login, token refresh and logout."""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from app.application.errors import ApplicationError, UnauthorizedError
from app.application.use_cases.users import (
    authenticate_user,
    issue_tokens,
    record_login,
    refresh_access_token,
    revoke_all_sessions,
    revoke_session,
)
from app.config import get_settings
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    get_current_user,
)
from app.interfaces.api.routes_helpers import raise_http_error
from app.interfaces.api.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RefreshRequest,
    RefreshResponse,
    SessionUser,
    UserRead,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _set_cookie(response: Response, key: str, value: str, max_age: int) -> None:
    settings = get_settings()
    response.set_cookie(
        key,
        value,
        max_age=max_age,
        httponly=True,
        secure=settings.cookies_secure,
        samesite="lax",
    )


def _set_access_cookie(response: Response, token: str) -> None:
    _set_cookie(
        response,
        ACCESS_TOKEN_COOKIE,
        token,
        get_settings().access_token_expire_minutes * 60,
    )


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
):
    """Authenticate by e-mail and password and open a cookie session."""

    try:
        user = authenticate_user(db, credentials.email, credentials.password)
    except ApplicationError as exc:
        logger.info("Failed login attempt for %s", credentials.email)
        raise_http_error(exc)

    tokens = issue_tokens(db, user)
    record_login(db, user.id)

    _set_access_cookie(response, tokens.access_token)
    _set_cookie(
        response,
        REFRESH_TOKEN_COOKIE,
        tokens.refresh_token,
        get_settings().refresh_token_expire_days * 24 * 60 * 60,
    )
    return LoginResponse(
        user=SessionUser.model_validate(user), access_token=tokens.access_token
    )


@router.post("/refresh", response_model=RefreshResponse)
def refresh(
    request: Request,
    response: Response,
    payload: RefreshRequest | None = None,
    db: Session = Depends(get_db),
):
    """Exchange a stored refresh token for a new access token."""

    token = (payload.refresh_token if payload else None) or request.cookies.get(
        REFRESH_TOKEN_COOKIE
    )
    if not token:
        raise_http_error(UnauthorizedError("Refresh token required"))

    try:
        _, tokens = refresh_access_token(db, token)
    except ApplicationError as exc:
        raise_http_error(exc)

    _set_access_cookie(response, tokens.access_token)
    return RefreshResponse(access_token=tokens.access_token)


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request, response: Response, db: Session = Depends(get_db)):
    revoke_session(db, request.cookies.get(REFRESH_TOKEN_COOKIE))
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    response.delete_cookie(REFRESH_TOKEN_COOKIE)
    return MessageResponse(message="Logged out")


@router.post("/logout-all", response_model=MessageResponse)
def logout_all(
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Revoke every refresh token of the current user."""

    revoke_all_sessions(db, current_user.id)
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    response.delete_cookie(REFRESH_TOKEN_COOKIE)
    return MessageResponse(message="Logged out from all devices")


@router.get("/me", response_model=UserRead, status_code=status.HTTP_200_OK)
def read_current_user(current_user: User = Depends(get_current_user)):
    return UserRead.model_validate(current_user)
