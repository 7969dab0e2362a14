"""Persistence helpers for refresh tokens."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from app.infrastructure.models import RefreshTokenModel
from app.utils import ensure_app_naive_datetime, now_in_app_naive_datetime


class RefreshTokenRepository:
    """Store, look up and revoke refresh tokens."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def save(self, *, user_id: int, token: str, expires_at: datetime) -> None:
        model = RefreshTokenModel(
            user_id=user_id,
            token=token,
            expires_at=ensure_app_naive_datetime(expires_at),
        )
        self.session.add(model)
        self.session.commit()

    def is_valid(self, token: str) -> bool:
        """Return ``True`` when ``token`` is stored and not expired.

        Expired tokens are deleted as a side effect.
        """

        model = (
            self.session.query(RefreshTokenModel)
            .filter(RefreshTokenModel.token == token)
            .first()
        )
        if model is None:
            return False
        if model.expires_at < now_in_app_naive_datetime():
            self.session.delete(model)
            self.session.commit()
            return False
        return True

    def delete(self, token: str) -> None:
        self.session.query(RefreshTokenModel).filter(
            RefreshTokenModel.token == token
        ).delete(synchronize_session=False)
        self.session.commit()

    def delete_for_user(self, user_id: int) -> int:
        deleted = (
            self.session.query(RefreshTokenModel)
            .filter(RefreshTokenModel.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    def delete_expired(self) -> int:
        deleted = (
            self.session.query(RefreshTokenModel)
            .filter(RefreshTokenModel.expires_at < now_in_app_naive_datetime())
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted


__all__ = ["RefreshTokenRepository"]
