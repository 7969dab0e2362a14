"""Use cases issuing, rotating and revoking session tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.application.errors import UnauthorizedError
from app.domain.entities import User
from app.infrastructure.repositories import RefreshTokenRepository, UserRepository
from app.infrastructure.security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
)

logger = logging.getLogger(__name__)


@dataclass
class IssuedTokens:
    access_token: str
    refresh_token: str | None = None


def issue_tokens(session: Session, user: User) -> IssuedTokens:
    """Create an access token and a persisted refresh token for ``user``."""

    claims = {"sub": str(user.id), "role": user.role.value}
    refresh_token, expires_at = create_refresh_token({"sub": str(user.id)})
    RefreshTokenRepository(session).save(
        user_id=user.id, token=refresh_token, expires_at=expires_at
    )
    return IssuedTokens(
        access_token=create_access_token(claims), refresh_token=refresh_token
    )


def refresh_access_token(session: Session, refresh_token: str) -> tuple[User, IssuedTokens]:
    """Return a fresh access token for a stored, unexpired refresh token."""

    try:
        payload = decode_refresh_token(refresh_token)
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise UnauthorizedError("Invalid refresh token") from exc

    if not RefreshTokenRepository(session).is_valid(refresh_token):
        raise UnauthorizedError("Refresh token expired or revoked")

    user = UserRepository(session).get(user_id)
    if user is None:
        raise UnauthorizedError("User not found")

    claims = {"sub": str(user.id), "role": user.role.value}
    return user, IssuedTokens(access_token=create_access_token(claims))


def revoke_session(session: Session, refresh_token: str | None) -> None:
    if refresh_token:
        RefreshTokenRepository(session).delete(refresh_token)


def revoke_all_sessions(session: Session, user_id: int) -> int:
    revoked = RefreshTokenRepository(session).delete_for_user(user_id)
    logger.info("Revoked %s sessions for user %s", revoked, user_id)
    return revoked
