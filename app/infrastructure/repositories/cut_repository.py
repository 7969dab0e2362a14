"""Persistence layer for cuts and their comments."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import Comment, Cut
from app.infrastructure.models import CommentModel, CutModel, ManagedFileModel
from app.utils import ensure_app_timezone


class CutRepository:
    """Provide CRUD operations for cuts and comments."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_by_vibe(self, vibe_id: int) -> Sequence[Cut]:
        query = (
            self.session.query(CutModel)
            .filter(CutModel.vibe_id == vibe_id)
            .order_by(CutModel.order.asc(), CutModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, cut_id: int) -> Cut | None:
        model = self.session.get(CutModel, cut_id)
        return self._to_entity(model) if model else None

    def next_order(self, vibe_id: int) -> int:
        current = (
            self.session.query(func.max(CutModel.order))
            .filter(CutModel.vibe_id == vibe_id)
            .scalar()
        )
        return (current if current is not None else -1) + 1

    def create(self, cut: Cut) -> Cut:
        model = CutModel(
            vibe_id=cut.vibe_id,
            name=cut.name,
            order=cut.order,
            lyrics=list(cut.lyrics),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def move(
        self,
        cut_id: int,
        *,
        vibe_id: int,
        order: int,
        path_prefixes: tuple[str, str] | None = None,
    ) -> Cut | None:
        """Reparent the cut; ``path_prefixes`` (old, new) relocates its file paths.

        Both changes are committed together.
        """

        model = self.session.get(CutModel, cut_id)
        if model is None:
            return None
        model.vibe_id = vibe_id
        model.order = order
        if path_prefixes is not None:
            old_prefix, new_prefix = path_prefixes
            files = self.session.query(ManagedFileModel).filter(
                ManagedFileModel.cut_id == cut_id
            )
            for file_model in files:
                if file_model.path.startswith(old_prefix):
                    file_model.path = new_prefix + file_model.path[len(old_prefix) :]
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_lyrics(self, cut_id: int, lyrics: list[dict[str, Any]]) -> Cut | None:
        model = self.session.get(CutModel, cut_id)
        if model is None:
            return None
        model.lyrics = lyrics
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_comments(self, cut_id: int) -> Sequence[Comment]:
        query = (
            self.session.query(CommentModel)
            .filter(CommentModel.cut_id == cut_id)
            .order_by(CommentModel.created_at.asc(), CommentModel.id.asc())
        )
        return [self._comment_to_entity(model) for model in query.all()]

    def get_comment(self, cut_id: int, comment_id: int) -> Comment | None:
        model = (
            self.session.query(CommentModel)
            .filter(CommentModel.id == comment_id, CommentModel.cut_id == cut_id)
            .first()
        )
        return self._comment_to_entity(model) if model else None

    def add_comment(self, comment: Comment) -> Comment:
        model = CommentModel(
            cut_id=comment.cut_id,
            user_id=comment.user_id,
            parent_id=comment.parent_id,
            content=comment.content,
            timestamp=comment.timestamp,
            audio_file_id=comment.audio_file_id,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._comment_to_entity(model)

    @staticmethod
    def _to_entity(model: CutModel) -> Cut:
        return Cut(
            id=model.id,
            vibe_id=model.vibe_id,
            name=model.name,
            order=model.order,
            lyrics=list(model.lyrics or []),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )

    @staticmethod
    def _comment_to_entity(model: CommentModel) -> Comment:
        return Comment(
            id=model.id,
            cut_id=model.cut_id,
            user_id=model.user_id,
            content=model.content,
            timestamp=model.timestamp,
            audio_file_id=model.audio_file_id,
            parent_id=model.parent_id,
            user_name=model.user.name if model.user is not None else None,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["CutRepository"]
