import pytest

from app.domain.entities import Role


@pytest.fixture()
def band(client, make_user, auth_headers):
    admin = make_user("Admin", role=Role.ADMIN, email="admin@example.com")
    member = make_user("Alice", email="alice@example.com")
    outsider = make_user("Olly", email="olly@example.com")
    return {
        "admin": admin,
        "member": member,
        "outsider": outsider,
        "admin_headers": auth_headers("admin@example.com"),
        "member_headers": auth_headers("alice@example.com"),
        "outsider_headers": auth_headers("olly@example.com"),
    }


def _create_project(client, headers, name="First Album"):
    response = client.post("/api/projects/", json={"name": name}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def _add_member(client, headers, project_id, user_id, **extra):
    return client.post(
        f"/api/projects/{project_id}/members",
        json={"userId": user_id, **extra},
        headers=headers,
    )


def test_project_creation_is_recorded_in_the_feed(client, band):
    project = _create_project(client, band["admin_headers"])

    feed = client.get("/api/activities/", headers=band["admin_headers"]).json()

    assert feed["total"] == 1
    assert feed["unreadCount"] == 1
    activity = feed["activities"][0]
    assert activity["type"] == "project_created"
    assert activity["resourceLink"] == f"/projects/{project['id']}"
    assert activity["metadata"] == {"projectName": "First Album"}
    assert activity["user"]["name"] == "Admin"
    assert activity["project"] == {"id": project["id"], "name": "First Album"}
    assert activity["isRead"] is False


def test_member_sees_vibe_activity_and_reads_it(client, band, sent_emails):
    project = _create_project(client, band["admin_headers"])
    assert _add_member(client, band["admin_headers"], project["id"], band["member"].id).status_code == 201

    vibe = client.post(
        f"/api/vibes/project/{project['id']}",
        json={"name": "Song X"},
        headers=band["member_headers"],
    )
    assert vibe.status_code == 201

    feed = client.get(
        "/api/activities/", params={"type": "vibe_created"}, headers=band["member_headers"]
    ).json()
    assert feed["total"] == 1
    activity = feed["activities"][0]
    assert activity["metadata"] == {"vibeName": "Song X", "projectName": "First Album"}
    assert activity["resourceLink"] == f"/projects/{project['id']}/vibes/{vibe.json()['id']}"

    unread = client.get("/api/activities/unread-count", headers=band["member_headers"])
    assert unread.json() == {"count": 3}

    read_all = client.patch("/api/activities/read-all", headers=band["member_headers"])
    assert read_all.json() == {"count": 3}
    unread = client.get("/api/activities/unread-count", headers=band["member_headers"])
    assert unread.json() == {"count": 0}

    admin_unread = client.get("/api/activities/unread-count", headers=band["admin_headers"])
    assert admin_unread.json() == {"count": 3}


def test_outsider_sees_nothing(client, band):
    project = _create_project(client, band["admin_headers"])

    feed = client.get("/api/activities/", headers=band["outsider_headers"]).json()
    filtered = client.get(
        "/api/activities/",
        params={"projectId": project["id"]},
        headers=band["outsider_headers"],
    ).json()

    assert feed == {"activities": [], "total": 0, "unreadCount": 0}
    assert filtered == {"activities": [], "total": 0, "unreadCount": 0}
    assert client.get(
        f"/api/projects/{project['id']}", headers=band["outsider_headers"]
    ).status_code == 403


def test_read_and_dismiss_single_activity(client, band):
    _create_project(client, band["admin_headers"])
    headers = band["admin_headers"]
    activity_id = client.get("/api/activities/", headers=headers).json()["activities"][0]["id"]

    assert client.patch(f"/api/activities/{activity_id}/read", headers=headers).status_code == 204
    feed = client.get("/api/activities/", headers=headers).json()
    assert feed["activities"][0]["isRead"] is True
    assert feed["unreadCount"] == 0

    assert client.delete(f"/api/activities/{activity_id}", headers=headers).status_code == 204
    assert client.get("/api/activities/", headers=headers).json()["total"] == 0

    assert client.patch(f"/api/activities/{activity_id}/undismiss", headers=headers).status_code == 204
    restored = client.get("/api/activities/", headers=headers).json()
    assert [a["id"] for a in restored["activities"]] == [activity_id]
    assert restored["activities"][0]["isRead"] is True


def test_foreign_activity_is_not_found(client, band):
    _create_project(client, band["admin_headers"])
    activity_id = client.get(
        "/api/activities/", headers=band["admin_headers"]
    ).json()["activities"][0]["id"]

    response = client.patch(
        f"/api/activities/{activity_id}/read", headers=band["outsider_headers"]
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Activity not found"


def test_dismiss_all_clears_only_the_callers_feed(client, band):
    project = _create_project(client, band["admin_headers"])
    _add_member(client, band["admin_headers"], project["id"], band["member"].id)

    response = client.delete("/api/activities/", headers=band["member_headers"])

    assert response.json() == {"count": 2}
    assert client.get("/api/activities/", headers=band["member_headers"]).json()["total"] == 0
    assert client.get("/api/activities/", headers=band["admin_headers"]).json()["total"] == 2


@pytest.mark.parametrize("params", [{"limit": 0}, {"limit": 101}, {"offset": -1}, {"type": "bogus"}])
def test_invalid_feed_parameters(client, band, params):
    response = client.get("/api/activities/", params=params, headers=band["admin_headers"])

    assert response.status_code == 422


def test_adding_member_notifies_and_emails_them(client, band, sent_emails):
    project = _create_project(client, band["admin_headers"])

    response = _add_member(client, band["admin_headers"], project["id"], band["member"].id)

    assert response.status_code == 201
    assert response.json()["userId"] == band["member"].id
    assert sent_emails == [
        {
            "to": "alice@example.com",
            "title": "Added to Project",
            "message": 'You have been added to the project "First Album".',
            "link": f"/projects/{project['id']}",
        }
    ]

    inbox = client.get("/api/notifications/", headers=band["member_headers"]).json()
    assert inbox["total"] == 1
    assert inbox["unreadCount"] == 1
    notification = inbox["notifications"][0]
    assert notification["type"] == "SUCCESS"
    assert notification["emailSent"] is True

    feed = client.get(
        "/api/activities/", params={"type": "member_added"}, headers=band["admin_headers"]
    ).json()
    assert feed["activities"][0]["metadata"] == {
        "memberName": "Alice",
        "projectName": "First Album",
    }


def test_adding_existing_member_is_rejected(client, band):
    project = _create_project(client, band["admin_headers"])
    _add_member(client, band["admin_headers"], project["id"], band["member"].id)

    response = _add_member(client, band["admin_headers"], project["id"], band["member"].id)

    assert response.status_code == 400
    assert response.json()["detail"] == "User is already a member of this project"


def test_adding_unknown_user_is_not_found(client, band):
    project = _create_project(client, band["admin_headers"])

    assert _add_member(client, band["admin_headers"], project["id"], 9999).status_code == 404
    assert _add_member(client, band["admin_headers"], 9999, band["member"].id).status_code == 404


def test_removed_member_loses_the_feed(client, band):
    project = _create_project(client, band["admin_headers"])
    _add_member(client, band["admin_headers"], project["id"], band["member"].id)

    response = client.delete(
        f"/api/projects/{project['id']}/members/{band['member'].id}",
        headers=band["admin_headers"],
    )

    assert response.status_code == 204
    assert client.get("/api/activities/", headers=band["member_headers"]).json()["total"] == 0
    assert client.get("/api/projects/", headers=band["member_headers"]).json() == []


def test_members_cannot_create_projects(client, band):
    response = client.post(
        "/api/projects/", json={"name": "Mine"}, headers=band["member_headers"]
    )

    assert response.status_code == 403


def test_member_without_vibe_permission_is_forbidden(client, band):
    project = _create_project(client, band["admin_headers"])
    _add_member(
        client,
        band["admin_headers"],
        project["id"],
        band["member"].id,
        canCreateVibes=False,
    )

    response = client.post(
        f"/api/vibes/project/{project['id']}",
        json={"name": "Song X"},
        headers=band["member_headers"],
    )

    assert response.status_code == 403
