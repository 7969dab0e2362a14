"""Persistence layer for vibes."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Vibe
from app.infrastructure.models import VibeModel
from app.utils import ensure_app_timezone


class VibeRepository:
    """Provide CRUD operations for :class:`Vibe` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_by_project(self, project_id: int) -> Sequence[Vibe]:
        query = (
            self.session.query(VibeModel)
            .filter(VibeModel.project_id == project_id)
            .order_by(VibeModel.updated_at.desc(), VibeModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, vibe_id: int) -> Vibe | None:
        model = self.session.get(VibeModel, vibe_id)
        return self._to_entity(model) if model else None

    def create(self, vibe: Vibe) -> Vibe:
        model = VibeModel(
            project_id=vibe.project_id,
            name=vibe.name,
            theme=vibe.theme,
            notes=vibe.notes,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: VibeModel) -> Vibe:
        return Vibe(
            id=model.id,
            project_id=model.project_id,
            name=model.name,
            theme=model.theme,
            notes=model.notes,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["VibeRepository"]
