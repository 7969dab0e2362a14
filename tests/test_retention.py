from datetime import timedelta

import pytest

from app.application.errors import ValidationError
from app.application.use_cases.activities import (
    cleanup_old_activities,
    list_activities,
    mark_activity_read,
    record_activity,
)
from app.application.use_cases.notifications import cleanup_old_notifications
from app.domain.entities import ActivityType, ProjectCreatedMetadata, Role
from app.infrastructure.models import ActivityModel, ActivityReadModel
from app.infrastructure.repositories import ProjectRepository, RefreshTokenRepository
from app.utils import now_in_app_naive_datetime, now_in_app_timezone


def _record(session, admin, project):
    return record_activity(
        session,
        activity_type=ActivityType.PROJECT_CREATED,
        actor_id=admin.id,
        project_id=project.id,
        metadata=ProjectCreatedMetadata(project_name=project.name),
    )


def test_cleanup_removes_old_activities_and_their_marks(session, make_user):
    admin = make_user(role=Role.ADMIN)
    project = ProjectRepository(session).create("Archive", creator_id=admin.id)
    old = _record(session, admin, project)
    recent = _record(session, admin, project)
    mark_activity_read(session, admin, old.id)

    model = session.get(ActivityModel, old.id)
    model.created_at = now_in_app_naive_datetime() - timedelta(days=120)
    session.commit()

    assert cleanup_old_activities(session, days=90) == 1

    assert [a.id for a in list_activities(session, admin).activities] == [recent.id]
    assert session.query(ActivityReadModel).filter_by(activity_id=old.id).count() == 0


def test_cleanup_keeps_recent_activities(session, make_user):
    admin = make_user(role=Role.ADMIN)
    project = ProjectRepository(session).create("Archive", creator_id=admin.id)
    _record(session, admin, project)

    assert cleanup_old_activities(session) == 0
    assert list_activities(session, admin).total == 1


@pytest.mark.parametrize("cleanup", [cleanup_old_activities, cleanup_old_notifications])
def test_cleanup_rejects_non_positive_days(session, cleanup):
    with pytest.raises(ValidationError):
        cleanup(session, days=0)


def test_expired_refresh_tokens_are_purged(session, make_user):
    user = make_user()
    repository = RefreshTokenRepository(session)
    repository.save(user_id=user.id, token="stale", expires_at=now_in_app_timezone() - timedelta(days=1))
    repository.save(user_id=user.id, token="fresh", expires_at=now_in_app_timezone() + timedelta(days=1))

    assert repository.delete_expired() == 1
    assert repository.is_valid("fresh")
    assert not repository.is_valid("stale")
