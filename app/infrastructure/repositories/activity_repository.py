"""Persistence helpers for activities and per-user read/dismiss state."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import exists, func
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.entities import Activity, ActivityActor, ActivityType
from app.infrastructure.models import (
    ActivityDismissModel,
    ActivityModel,
    ActivityReadModel,
)
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_naive_datetime,
)

_BULK_CHUNK_SIZE = 500


class ActivityRepository:
    """Store activities and answer feed queries for a single user.

    ``project_ids`` arguments restrict results to those projects; ``None`` means
    every project (administrators).
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(
        self,
        *,
        activity_type: ActivityType,
        actor_id: int,
        project_id: int,
        metadata: dict[str, Any],
        resource_link: str | None,
    ) -> Activity:
        model = ActivityModel(
            type=activity_type,
            user_id=actor_id,
            project_id=project_id,
            metadata_json=metadata,
            resource_link=resource_link,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, activity_id: int) -> Activity | None:
        model = self.session.get(ActivityModel, activity_id)
        return self._to_entity(model) if model else None

    def list_feed(
        self,
        user_id: int,
        project_ids: Sequence[int] | None,
        *,
        limit: int,
        offset: int,
        activity_type: ActivityType | None = None,
        unread_only: bool = False,
    ) -> tuple[list[Activity], int]:
        """Return one page of visible activities and the filtered total."""

        filters = self._feed_filters(
            user_id, project_ids, activity_type=activity_type, unread_only=unread_only
        )
        total = (
            self.session.query(func.count(ActivityModel.id)).filter(*filters).scalar()
            or 0
        )
        models = (
            self.session.query(ActivityModel)
            .filter(*filters)
            .order_by(ActivityModel.created_at.desc(), ActivityModel.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        read_ids = self.read_ids_for(user_id, [model.id for model in models])
        activities = []
        for model in models:
            activity = self._to_entity(model)
            activity.is_read = model.id in read_ids
            activities.append(activity)
        return activities, total

    def count_unread(self, user_id: int, project_ids: Sequence[int] | None) -> int:
        filters = self._feed_filters(user_id, project_ids, unread_only=True)
        return (
            self.session.query(func.count(ActivityModel.id)).filter(*filters).scalar()
            or 0
        )

    def list_unread_ids(self, user_id: int, project_ids: Sequence[int] | None) -> list[int]:
        filters = self._feed_filters(user_id, project_ids, unread_only=True)
        query = self.session.query(ActivityModel.id).filter(*filters)
        return [activity_id for (activity_id,) in query.all()]

    def list_visible_ids(self, user_id: int, project_ids: Sequence[int] | None) -> list[int]:
        filters = self._feed_filters(user_id, project_ids)
        query = self.session.query(ActivityModel.id).filter(*filters)
        return [activity_id for (activity_id,) in query.all()]

    def read_ids_for(self, user_id: int, activity_ids: Iterable[int]) -> set[int]:
        ids = list(activity_ids)
        if not ids:
            return set()
        query = self.session.query(ActivityReadModel.activity_id).filter(
            ActivityReadModel.user_id == user_id,
            ActivityReadModel.activity_id.in_(ids),
        )
        return {activity_id for (activity_id,) in query.all()}

    def mark_read_many(self, activity_ids: Iterable[int], user_id: int) -> int:
        """Upsert read marks for ``activity_ids`` in one transaction.

        Returns the number of marks that did not exist before.
        """

        now = now_in_app_naive_datetime()
        rows = [
            {"activity_id": activity_id, "user_id": user_id, "read_at": now}
            for activity_id in dict.fromkeys(activity_ids)
        ]
        return self._insert_ignoring_duplicates(ActivityReadModel, rows)

    def dismiss_many(self, activity_ids: Iterable[int], user_id: int) -> int:
        now = now_in_app_naive_datetime()
        rows = [
            {"activity_id": activity_id, "user_id": user_id, "dismissed_at": now}
            for activity_id in dict.fromkeys(activity_ids)
        ]
        return self._insert_ignoring_duplicates(ActivityDismissModel, rows)

    def undismiss(self, activity_id: int, user_id: int) -> bool:
        deleted = (
            self.session.query(ActivityDismissModel)
            .filter(
                ActivityDismissModel.activity_id == activity_id,
                ActivityDismissModel.user_id == user_id,
            )
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return bool(deleted)

    def delete_older_than(self, cutoff: datetime) -> int:
        deleted = (
            self.session.query(ActivityModel)
            .filter(ActivityModel.created_at < ensure_app_naive_datetime(cutoff))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    def _feed_filters(
        self,
        user_id: int,
        project_ids: Sequence[int] | None,
        *,
        activity_type: ActivityType | None = None,
        unread_only: bool = False,
    ) -> list:
        filters = [
            ~exists().where(
                ActivityDismissModel.activity_id == ActivityModel.id,
                ActivityDismissModel.user_id == user_id,
            )
        ]
        if project_ids is not None:
            filters.append(ActivityModel.project_id.in_(list(project_ids)))
        if activity_type is not None:
            filters.append(ActivityModel.type == activity_type)
        if unread_only:
            filters.append(
                ~exists().where(
                    ActivityReadModel.activity_id == ActivityModel.id,
                    ActivityReadModel.user_id == user_id,
                )
            )
        return filters

    def _insert_ignoring_duplicates(self, model, rows: list[dict[str, Any]]) -> int:
        if not rows:
            return 0

        dialect = self.session.get_bind().dialect.name
        inserted = 0
        try:
            if dialect in {"sqlite", "postgresql"}:
                insert = sqlite_insert if dialect == "sqlite" else postgresql_insert
                for start in range(0, len(rows), _BULK_CHUNK_SIZE):
                    statement = (
                        insert(model)
                        .values(rows[start : start + _BULK_CHUNK_SIZE])
                        .on_conflict_do_nothing(index_elements=["activity_id", "user_id"])
                    )
                    result = self.session.execute(statement)
                    inserted += max(result.rowcount or 0, 0)
            else:
                for row in rows:
                    try:
                        with self.session.begin_nested():
                            self.session.add(model(**row))
                    except IntegrityError:
                        continue
                    inserted += 1
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return inserted

    @staticmethod
    def _to_entity(model: ActivityModel) -> Activity:
        user = model.user
        project = model.project
        return Activity(
            id=model.id,
            type=model.type,
            actor_id=model.user_id,
            project_id=model.project_id,
            metadata=dict(model.metadata_json or {}),
            resource_link=model.resource_link,
            created_at=ensure_app_timezone(model.created_at),
            actor=ActivityActor(id=user.id, name=user.name, avatar_url=user.avatar_url)
            if user is not None
            else None,
            project_name=project.name if project is not None else None,
        )


__all__ = ["ActivityRepository"]
