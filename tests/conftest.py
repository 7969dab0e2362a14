"""Shared fixtures: a throwaway SQLite database, users and API clients."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

TEST_DB_PATH = Path(tempfile.gettempdir()) / f"bandmate-test-{os.getpid()}.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["APP_URL"] = "http://bandmate.example.com"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

import pytest
from fastapi.testclient import TestClient

from app.application.use_cases.users import create_user
from app.domain.entities import Role
from app.infrastructure import database

DEFAULT_PASSWORD = "Secret123!"


class RecordingPublisher:
    """Stand-in for the realtime publisher that records every call."""

    def __init__(self, online_users: set[int] | None = None) -> None:
        self.online_users = set(online_users or ())
        self.user_events: list[tuple[int, str, dict]] = []
        self.project_events: list[tuple[int, str, dict]] = []
        self.joined: list[tuple[int, int]] = []
        self.left: list[tuple[int, int]] = []

    def is_user_online(self, user_id: int) -> bool:
        return user_id in self.online_users

    def emit_to_user(self, user_id: int, event: str, payload) -> None:
        self.user_events.append((user_id, event, payload))

    def emit_to_project(self, project_id: int, event: str, payload) -> None:
        self.project_events.append((project_id, event, payload))

    def emit_to_all(self, event: str, payload) -> None:
        pass

    def join_project_room(self, user_id: int, project_id: int) -> None:
        self.joined.append((user_id, project_id))

    def leave_project_room(self, user_id: int, project_id: int) -> None:
        self.left.append((user_id, project_id))


@pytest.fixture(autouse=True)
def reset_database():
    """Recreate every table so each test starts from an empty database."""

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.initialize_database()
    yield
    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)


@pytest.fixture(scope="session", autouse=True)
def remove_database_file():
    yield
    database.engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
    """Capture outgoing notification and credential e-mails."""

    outbox: list[dict] = []

    def _send_notification_email(email, title, message, resource_link=None):
        outbox.append(
            {"to": email, "title": title, "message": message, "link": resource_link}
        )
        return True

    def _send_credentials_email(email, password):
        outbox.append({"to": email, "title": "credentials", "password": password})
        return True

    def _send_invitation_email(email, invite_link, *, inviter_name=None, project_names=None):
        outbox.append(
            {"to": email, "title": "invitation", "link": invite_link, "projects": project_names}
        )
        return True

    monkeypatch.setattr(
        "app.application.use_cases.notifications.dispatch.send_notification_email",
        _send_notification_email,
    )
    monkeypatch.setattr(
        "app.interfaces.api.routes.users.send_new_user_credentials_email",
        _send_credentials_email,
    )
    monkeypatch.setattr(
        "app.application.use_cases.invitations.send_invitation_email",
        _send_invitation_email,
    )
    return outbox


@pytest.fixture()
def session():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_user(session):
    """Return a factory creating users with the default password."""

    counter = {"value": 0}

    def _make_user(name: str | None = None, *, role: Role = Role.MEMBER, email: str | None = None):
        counter["value"] += 1
        name = name or f"User {counter['value']}"
        email = email or f"user{counter['value']}@example.com"
        return create_user(
            session, name=name, email=email, password=DEFAULT_PASSWORD, role=role
        )

    return _make_user


@pytest.fixture()
def publisher():
    return RecordingPublisher()


@pytest.fixture()
def make_publisher():
    """Return a factory for publishers that treat ``online_users`` as connected."""

    return RecordingPublisher


@pytest.fixture()
def app():
    from main import create_app

    return create_app()


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers(client):
    """Return a helper that logs a user in and builds a bearer header."""

    def _login(email: str, password: str = DEFAULT_PASSWORD) -> dict[str, str]:
        response = client.post(
            "/api/auth/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['accessToken']}"}

    return _login
