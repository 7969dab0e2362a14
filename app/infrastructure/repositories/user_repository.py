"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import Role, User
from app.infrastructure.models import UserModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, skip: int = 0, limit: int = 100) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .order_by(UserModel.name.asc(), UserModel.id.asc())
            .offset(skip)
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.email == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def list_ids_by_role(self, role: Role) -> list[int]:
        query = self.session.query(UserModel.id).filter(UserModel.role == role)
        return [user_id for (user_id,) in query.all()]

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def record_login(self, user_id: int, when: datetime) -> None:
        model = self.session.get(UserModel, user_id)
        if model is None:
            return
        model.last_login = ensure_app_naive_datetime(when)
        self.session.commit()

    def delete(self, user_id: int) -> bool:
        deleted = (
            self.session.query(UserModel)
            .filter(UserModel.id == user_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return bool(deleted)

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.role = user.role
        model.name = user.name
        model.email = user.email.strip().lower()
        model.password = user.password
        model.avatar_url = user.avatar_url
        model.last_login = ensure_app_naive_datetime(user.last_login)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            role=model.role,
            name=model.name,
            email=model.email,
            password=model.password,
            avatar_url=model.avatar_url,
            last_login=ensure_app_timezone(model.last_login),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["UserRepository"]
