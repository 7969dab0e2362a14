from datetime import timedelta

import pytest

from app.domain.entities import Role
from app.infrastructure.models import InvitationModel
from app.utils import now_in_app_naive_datetime


@pytest.fixture()
def label(client, make_user, auth_headers):
    """An admin with two projects."""

    make_user("Admin", role=Role.ADMIN, email="admin@example.com")
    headers = auth_headers("admin@example.com")
    album = client.post("/api/projects/", json={"name": "First Album"}, headers=headers).json()
    single = client.post("/api/projects/", json={"name": "Single"}, headers=headers).json()
    return {"headers": headers, "album": album, "single": single}


def _invite(client, label, email="keys@example.com", **extra):
    payload = {"email": email, "name": "Kai", "projectIds": [label["album"]["id"]]}
    payload.update(extra)
    return client.post("/api/invitations/", json=payload, headers=label["headers"])


def _token(link):
    return link.split("token=", 1)[1]


def test_admin_invites_and_link_is_emailed(client, label, sent_emails):
    response = _invite(client, label)

    assert response.status_code == 201
    body = response.json()
    assert body["inviteLink"].startswith("http://bandmate.example.com/accept-invite?token=")
    assert body["invitation"]["email"] == "keys@example.com"
    assert body["invitation"]["role"] == "MEMBER"
    assert body["invitation"]["invitedBy"]["name"] == "Admin"

    (mail,) = [mail for mail in sent_emails if mail["title"] == "invitation"]
    assert mail["to"] == "keys@example.com"
    assert mail["link"] == body["inviteLink"]
    assert mail["projects"] == ["First Album"]

    pending = client.get("/api/invitations/", headers=label["headers"]).json()["invitations"]
    assert [item["email"] for item in pending] == ["keys@example.com"]


def test_duplicate_and_existing_addresses_are_rejected(client, label):
    _invite(client, label)

    again = _invite(client, label)
    assert again.status_code == 400
    assert again.json()["detail"] == "An invitation for this email is already pending"

    existing = _invite(client, label, email="admin@example.com")
    assert existing.status_code == 400
    assert existing.json()["detail"] == "A user with this email already exists"


def test_unknown_project_is_rejected(client, label):
    response = _invite(client, label, projectIds=[9999])

    assert response.status_code == 404


def test_members_cannot_invite(client, label, make_user, auth_headers):
    make_user("Dana", email="dana@example.com")

    response = client.post(
        "/api/invitations/",
        json={"email": "new@example.com"},
        headers=auth_headers("dana@example.com"),
    )

    assert response.status_code == 403


def test_validate_shows_invited_projects_without_login(client, label):
    token = _token(_invite(client, label).json()["inviteLink"])

    response = client.get(f"/api/invitations/validate/{token}")

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "keys@example.com"
    assert body["invitedBy"]["name"] == "Admin"
    assert body["projects"] == [{"id": label["album"]["id"], "name": "First Album"}]


def test_accepting_creates_account_and_membership(client, label, auth_headers):
    token = _token(_invite(client, label).json()["inviteLink"])

    accepted = client.post(f"/api/invitations/accept/{token}", json={"password": "Keyboard9!"})

    assert accepted.status_code == 200
    assert accepted.json()["user"]["name"] == "Kai"
    assert accepted.json()["user"]["role"] == "MEMBER"

    headers = auth_headers("keys@example.com", "Keyboard9!")
    projects = client.get("/api/projects/", headers=headers).json()
    assert [project["name"] for project in projects] == ["First Album"]

    feed = client.get(
        "/api/activities/", params={"type": "member_added"}, headers=label["headers"]
    ).json()["activities"]
    assert feed[0]["metadata"] == {"memberName": "Kai", "projectName": "First Album"}
    assert feed[0]["user"]["name"] == "Admin"

    assert client.get(f"/api/invitations/validate/{token}").status_code == 404
    reused = client.post(f"/api/invitations/accept/{token}", json={"password": "Keyboard9!"})
    assert reused.status_code == 404


def test_short_password_is_rejected(client, label):
    token = _token(_invite(client, label).json()["inviteLink"])

    response = client.post(f"/api/invitations/accept/{token}", json={"password": "short"})

    assert response.status_code == 400
    assert response.json()["detail"]["field"] == "password"
    assert client.get(f"/api/invitations/validate/{token}").status_code == 200


def test_expired_invitation_cannot_be_used(client, label, session):
    token = _token(_invite(client, label).json()["inviteLink"])
    session.query(InvitationModel).update(
        {InvitationModel.expires_at: now_in_app_naive_datetime() - timedelta(minutes=1)}
    )
    session.commit()

    assert client.get(f"/api/invitations/validate/{token}").status_code == 404
    response = client.post(f"/api/invitations/accept/{token}", json={"password": "Keyboard9!"})
    assert response.status_code == 404
    assert client.get("/api/invitations/", headers=label["headers"]).json()["invitations"] == []


def test_revoked_invitation_disappears(client, label):
    created = _invite(client, label).json()
    invitation_id = created["invitation"]["id"]

    revoked = client.delete(f"/api/invitations/{invitation_id}", headers=label["headers"])

    assert revoked.status_code == 200
    assert revoked.json() == {"message": "Invitation revoked"}
    assert client.get(f"/api/invitations/validate/{_token(created['inviteLink'])}").status_code == 404
    missing = client.delete(f"/api/invitations/{invitation_id}", headers=label["headers"])
    assert missing.status_code == 404
