"""Admin-facing lookups over the band's user directory."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.application.errors import NotFoundError, ValidationError
from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 200


def list_users(session: Session, *, skip: int = 0, limit: int = 100) -> Sequence[User]:
    if skip < 0:
        raise ValidationError("skip must not be negative", field="skip")
    limit = max(1, min(limit, MAX_PAGE_SIZE))
    return UserRepository(session).list(skip=skip, limit=limit)


def get_user(session: Session, user_id: int) -> User:
    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def record_login(session: Session, user_id: int) -> None:
    UserRepository(session).record_login(user_id, now_in_app_timezone())


def delete_user(session: Session, user_id: int, *, current_user: User) -> None:
    """Remove an account; memberships, notifications and tokens go with it."""

    if user_id == current_user.id:
        raise ValidationError("You cannot delete your own account")
    if not UserRepository(session).delete(user_id):
        raise NotFoundError("User not found")
    logger.info("User %s deleted user %s", current_user.id, user_id)
