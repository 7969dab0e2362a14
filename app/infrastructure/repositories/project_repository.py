"""Persistence layer for projects and their memberships."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Project, ProjectMember
from app.infrastructure.models import ProjectMemberModel, ProjectModel
from app.utils import ensure_app_timezone


class ProjectRepository:
    """Provide CRUD operations for projects and membership lookups."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_all(self) -> Sequence[Project]:
        query = self.session.query(ProjectModel).order_by(
            ProjectModel.updated_at.desc(), ProjectModel.id.desc()
        )
        return [self._to_entity(model) for model in query.all()]

    def list_for_member(self, user_id: int) -> Sequence[Project]:
        query = (
            self.session.query(ProjectModel)
            .join(ProjectMemberModel, ProjectMemberModel.project_id == ProjectModel.id)
            .filter(ProjectMemberModel.user_id == user_id)
            .order_by(ProjectModel.updated_at.desc(), ProjectModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_all_ids(self) -> list[int]:
        return [project_id for (project_id,) in self.session.query(ProjectModel.id).all()]

    def list_member_project_ids(self, user_id: int) -> list[int]:
        query = self.session.query(ProjectMemberModel.project_id).filter(
            ProjectMemberModel.user_id == user_id
        )
        return [project_id for (project_id,) in query.all()]

    def get(self, project_id: int) -> Project | None:
        model = self.session.get(ProjectModel, project_id)
        return self._to_entity(model) if model else None

    def create(self, name: str, *, creator_id: int) -> Project:
        model = ProjectModel(name=name)
        model.members.append(
            ProjectMemberModel(user_id=creator_id, can_create_vibes=True)
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def rename(self, project_id: int, name: str) -> Project | None:
        model = self.session.get(ProjectModel, project_id)
        if model is None:
            return None
        model.name = name
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, project_id: int) -> bool:
        deleted = (
            self.session.query(ProjectModel)
            .filter(ProjectModel.id == project_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return bool(deleted)

    def get_member(self, project_id: int, user_id: int) -> ProjectMember | None:
        model = self._get_member_model(project_id, user_id)
        return self._member_to_entity(model) if model else None

    def is_member(self, project_id: int, user_id: int) -> bool:
        return self._get_member_model(project_id, user_id) is not None

    def add_member(
        self, project_id: int, user_id: int, *, can_create_vibes: bool = True
    ) -> ProjectMember:
        model = ProjectMemberModel(
            project_id=project_id,
            user_id=user_id,
            can_create_vibes=can_create_vibes,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._member_to_entity(model)

    def remove_member(self, project_id: int, user_id: int) -> bool:
        deleted = (
            self.session.query(ProjectMemberModel)
            .filter(
                ProjectMemberModel.project_id == project_id,
                ProjectMemberModel.user_id == user_id,
            )
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return bool(deleted)

    def _get_member_model(self, project_id: int, user_id: int) -> ProjectMemberModel | None:
        return (
            self.session.query(ProjectMemberModel)
            .filter(
                ProjectMemberModel.project_id == project_id,
                ProjectMemberModel.user_id == user_id,
            )
            .first()
        )

    @classmethod
    def _to_entity(cls, model: ProjectModel) -> Project:
        return Project(
            id=model.id,
            name=model.name,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            members=[cls._member_to_entity(member) for member in model.members],
        )

    @staticmethod
    def _member_to_entity(model: ProjectMemberModel) -> ProjectMember:
        user = model.user
        return ProjectMember(
            id=model.id,
            project_id=model.project_id,
            user_id=model.user_id,
            can_create_vibes=model.can_create_vibes,
            user_name=user.name if user is not None else None,
            user_email=user.email if user is not None else None,
            joined_at=ensure_app_timezone(model.joined_at),
        )


__all__ = ["ProjectRepository"]
