"""Feed visibility, read tracking and dismissal for project activities."""

from __future__ import annotations

import pytest

from app.application.errors import NotFoundError, ValidationError
from app.application.use_cases.activities import (
    dismiss_activity,
    dismiss_all_activities,
    get_unread_activity_count,
    list_activities,
    mark_activity_read,
    mark_all_activities_read,
    record_activity,
    record_activity_safely,
    undismiss_activity,
)
from app.application.use_cases.users import delete_user
from app.domain.entities import (
    ActivityType,
    ProjectCreatedMetadata,
    Role,
    VibeCreatedMetadata,
)
from app.infrastructure.repositories import ProjectRepository


@pytest.fixture()
def band(session, make_user):
    """An admin, two members of one project and an outsider."""

    admin = make_user("Admin", role=Role.ADMIN)
    alice = make_user("Alice")
    bob = make_user("Bob")
    outsider = make_user("Outsider")
    projects = ProjectRepository(session)
    project = projects.create("First Album", creator_id=admin.id)
    projects.add_member(project.id, alice.id)
    projects.add_member(project.id, bob.id)
    other = projects.create("Side Project", creator_id=admin.id)
    return {
        "admin": admin,
        "alice": alice,
        "bob": bob,
        "outsider": outsider,
        "project": project,
        "other": other,
    }


def _record_vibes(session, *, actor, project, count, start=0):
    return [
        record_activity(
            session,
            activity_type=ActivityType.VIBE_CREATED,
            actor_id=actor.id,
            project_id=project.id,
            metadata=VibeCreatedMetadata(vibe_name=f"Song {i}", project_name=project.name),
            resource_link=f"/projects/{project.id}/vibes/{i}",
        )
        for i in range(start, start + count)
    ]


def test_activity_visible_only_to_members_and_admins(session, band):
    activity = _record_vibes(session, actor=band["alice"], project=band["project"], count=1)[0]

    for viewer in (band["admin"], band["alice"], band["bob"]):
        feed = list_activities(session, viewer)
        assert [item.id for item in feed.activities] == [activity.id]
        assert feed.total == 1
        assert feed.unread_count == 1

    outsider_feed = list_activities(session, band["outsider"])
    assert outsider_feed.activities == []
    assert outsider_feed.total == 0
    assert outsider_feed.unread_count == 0


def test_feed_includes_actor_and_project_details(session, band):
    _record_vibes(session, actor=band["alice"], project=band["project"], count=1)

    activity = list_activities(session, band["bob"]).activities[0]

    assert activity.type is ActivityType.VIBE_CREATED
    assert activity.actor.name == "Alice"
    assert activity.project_name == "First Album"
    assert activity.metadata == {"vibeName": "Song 0", "projectName": "First Album"}
    assert activity.is_read is False


def test_deleting_the_actor_keeps_their_activities_in_other_feeds(session, band):
    activity = _record_vibes(session, actor=band["alice"], project=band["project"], count=1)[0]
    assert list_activities(session, band["bob"]).total == 1

    delete_user(session, band["alice"].id, current_user=band["admin"])

    for viewer in (band["bob"], band["admin"]):
        feed = list_activities(session, viewer)
        assert feed.total == 1
        assert feed.unread_count == 1
        assert feed.activities[0].id == activity.id
        assert feed.activities[0].actor_id is None
        assert feed.activities[0].actor is None


def test_user_without_memberships_gets_empty_feed(session, make_user):
    newcomer = make_user("Newcomer")

    feed = list_activities(session, newcomer)

    assert feed.activities == []
    assert feed.total == 0
    assert feed.unread_count == 0
    assert get_unread_activity_count(session, newcomer) == 0
    assert mark_all_activities_read(session, newcomer) == 0
    assert dismiss_all_activities(session, newcomer) == 0


def test_project_filter_for_non_member_short_circuits(session, band):
    _record_vibes(session, actor=band["admin"], project=band["other"], count=2)

    feed = list_activities(session, band["alice"], project_id=band["other"].id)

    assert feed.activities == []
    assert feed.total == 0
    assert feed.unread_count == 0


def test_project_and_type_filters(session, band):
    _record_vibes(session, actor=band["admin"], project=band["project"], count=2)
    _record_vibes(session, actor=band["admin"], project=band["other"], count=1)
    record_activity(
        session,
        activity_type=ActivityType.PROJECT_CREATED,
        actor_id=band["admin"].id,
        project_id=band["other"].id,
        metadata=ProjectCreatedMetadata(project_name="Side Project"),
    )

    by_project = list_activities(session, band["admin"], project_id=band["other"].id)
    assert by_project.total == 2
    assert {a.project_id for a in by_project.activities} == {band["other"].id}
    assert by_project.unread_count == 2

    by_type = list_activities(
        session, band["admin"], activity_type=ActivityType.PROJECT_CREATED
    )
    assert by_type.total == 1
    assert by_type.activities[0].type is ActivityType.PROJECT_CREATED


def test_mark_read_is_idempotent_and_per_user(session, band):
    activity = _record_vibes(session, actor=band["alice"], project=band["project"], count=1)[0]

    mark_activity_read(session, band["bob"], activity.id)
    mark_activity_read(session, band["bob"], activity.id)

    assert get_unread_activity_count(session, band["bob"]) == 0
    assert list_activities(session, band["bob"]).activities[0].is_read is True
    assert get_unread_activity_count(session, band["alice"]) == 1
    assert list_activities(session, band["alice"]).activities[0].is_read is False


def test_mark_all_read_then_again_returns_zero(session, band):
    _record_vibes(session, actor=band["alice"], project=band["project"], count=3)

    assert mark_all_activities_read(session, band["bob"]) == 3
    assert get_unread_activity_count(session, band["bob"]) == 0
    assert mark_all_activities_read(session, band["bob"]) == 0
    assert get_unread_activity_count(session, band["alice"]) == 3


def test_mark_all_read_only_touches_visible_activities(session, band):
    _record_vibes(session, actor=band["admin"], project=band["project"], count=1)
    _record_vibes(session, actor=band["admin"], project=band["other"], count=2)

    assert mark_all_activities_read(session, band["alice"]) == 1
    assert get_unread_activity_count(session, band["admin"]) == 3
    assert mark_all_activities_read(session, band["admin"]) == 3


def test_unread_only_filter(session, band):
    first, second = _record_vibes(session, actor=band["alice"], project=band["project"], count=2)
    mark_activity_read(session, band["bob"], first.id)

    feed = list_activities(session, band["bob"], unread_only=True)

    assert [a.id for a in feed.activities] == [second.id]
    assert feed.total == 1
    assert feed.unread_count == 1


def test_marking_foreign_activity_is_not_found(session, band):
    activity = _record_vibes(session, actor=band["admin"], project=band["other"], count=1)[0]

    with pytest.raises(NotFoundError):
        mark_activity_read(session, band["alice"], activity.id)
    with pytest.raises(NotFoundError):
        dismiss_activity(session, band["alice"], activity.id)
    with pytest.raises(NotFoundError):
        mark_activity_read(session, band["alice"], 999_999)


def test_dismiss_then_undismiss_restores_position_and_read_state(session, band):
    activities = _record_vibes(session, actor=band["alice"], project=band["project"], count=3)
    middle = activities[1]
    mark_activity_read(session, band["bob"], middle.id)
    before = [a.id for a in list_activities(session, band["bob"]).activities]

    dismiss_activity(session, band["bob"], middle.id)
    dismissed_feed = list_activities(session, band["bob"])
    assert middle.id not in [a.id for a in dismissed_feed.activities]
    assert dismissed_feed.total == 2

    undismiss_activity(session, band["bob"], middle.id)
    restored = list_activities(session, band["bob"])
    assert [a.id for a in restored.activities] == before
    assert {a.id: a.is_read for a in restored.activities}[middle.id] is True
    assert restored.unread_count == 2


def test_dismissed_activity_leaves_unread_count(session, band):
    activity = _record_vibes(session, actor=band["alice"], project=band["project"], count=1)[0]

    dismiss_activity(session, band["bob"], activity.id)

    assert get_unread_activity_count(session, band["bob"]) == 0
    feed = list_activities(session, band["bob"])
    assert feed.total == 0
    assert feed.unread_count == 0


def test_dismiss_all_only_affects_the_caller(session, band):
    _record_vibes(session, actor=band["alice"], project=band["project"], count=4)
    mark_activity_read(session, band["alice"], list_activities(session, band["alice"]).activities[0].id)
    alice_before = list_activities(session, band["alice"])

    assert dismiss_all_activities(session, band["bob"]) == 4
    assert dismiss_all_activities(session, band["bob"]) == 0

    bob_feed = list_activities(session, band["bob"])
    assert bob_feed.total == 0
    assert bob_feed.unread_count == 0

    alice_after = list_activities(session, band["alice"])
    assert alice_after.total == alice_before.total == 4
    assert alice_after.unread_count == alice_before.unread_count == 3
    assert [a.is_read for a in alice_after.activities] == [
        a.is_read for a in alice_before.activities
    ]


def test_membership_change_hides_and_restores_activity(session, band):
    activity = _record_vibes(session, actor=band["alice"], project=band["project"], count=1)[0]
    projects = ProjectRepository(session)
    mark_activity_read(session, band["bob"], activity.id)

    projects.remove_member(band["project"].id, band["bob"].id)
    assert list_activities(session, band["bob"]).total == 0
    with pytest.raises(NotFoundError):
        mark_activity_read(session, band["bob"], activity.id)

    projects.add_member(band["project"].id, band["bob"].id)
    feed = list_activities(session, band["bob"])
    assert [a.id for a in feed.activities] == [activity.id]
    assert feed.activities[0].is_read is True
    assert feed.unread_count == 0


def test_pagination_returns_disjoint_pages(session, band):
    created = _record_vibes(session, actor=band["alice"], project=band["project"], count=15)

    first = list_activities(session, band["bob"], limit=10, offset=0)
    second = list_activities(session, band["bob"], limit=10, offset=10)

    first_ids = [a.id for a in first.activities]
    second_ids = [a.id for a in second.activities]
    assert len(first_ids) == 10
    assert len(second_ids) == 5
    assert set(first_ids).isdisjoint(second_ids)
    assert set(first_ids) | set(second_ids) == {a.id for a in created}
    assert first_ids == sorted(first_ids, reverse=True)
    assert first.total == second.total == 15


def test_default_page_size_is_twenty(session, band):
    _record_vibes(session, actor=band["alice"], project=band["project"], count=25)

    feed = list_activities(session, band["bob"])

    assert len(feed.activities) == 20
    assert feed.total == 25


def test_invalid_pagination_is_rejected(session, band):
    with pytest.raises(ValidationError):
        list_activities(session, band["bob"], limit=0)
    with pytest.raises(ValidationError):
        list_activities(session, band["bob"], offset=-1)


def test_record_activity_rejects_mismatched_metadata(session, band):
    with pytest.raises(ValidationError) as exc_info:
        record_activity(
            session,
            activity_type=ActivityType.CUT_CREATED,
            actor_id=band["admin"].id,
            project_id=band["project"].id,
            metadata=ProjectCreatedMetadata(project_name="First Album"),
        )

    assert exc_info.value.field == "metadata"
    assert list_activities(session, band["admin"]).total == 0


def test_record_activity_broadcasts_to_project_room(session, band, publisher):
    activity = record_activity(
        session,
        activity_type=ActivityType.PROJECT_CREATED,
        actor_id=band["admin"].id,
        project_id=band["project"].id,
        metadata=ProjectCreatedMetadata(project_name="First Album"),
        resource_link=f"/projects/{band['project'].id}",
        publisher=publisher,
    )

    assert len(publisher.project_events) == 1
    project_id, event, payload = publisher.project_events[0]
    assert project_id == band["project"].id
    assert event == "activity"
    assert payload["id"] == activity.id
    assert payload["type"] == "project_created"
    assert payload["user"]["name"] == "Admin"
    assert payload["metadata"] == {"projectName": "First Album"}


def test_broadcast_failure_does_not_lose_the_activity(session, band):
    class ExplodingPublisher:
        def emit_to_project(self, *args, **kwargs):
            raise RuntimeError("socket layer down")

    activity = record_activity(
        session,
        activity_type=ActivityType.PROJECT_CREATED,
        actor_id=band["admin"].id,
        project_id=band["project"].id,
        metadata=ProjectCreatedMetadata(project_name="First Album"),
        publisher=ExplodingPublisher(),
    )

    assert [a.id for a in list_activities(session, band["admin"]).activities] == [activity.id]


def test_record_activity_safely_swallows_failures(session, band):
    result = record_activity_safely(
        session,
        activity_type=ActivityType.VIBE_CREATED,
        actor_id=band["admin"].id,
        project_id=band["project"].id,
        metadata=ProjectCreatedMetadata(project_name="First Album"),
    )

    assert result is None
    assert list_activities(session, band["admin"]).total == 0
