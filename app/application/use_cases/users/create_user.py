"""Use case for creating users."""

from sqlalchemy.orm import Session

from app.application.errors import ConflictError, ValidationError
from app.domain.entities import Role, User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash
from app.utils import now_in_app_timezone


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: Role = Role.MEMBER,
) -> User:
    """Create a new user ensuring unique email addresses."""

    name = name.strip()
    if not name:
        raise ValidationError("Name is required", field="name")
    if len(password) < 8:
        raise ValidationError("Password must be at least 8 characters", field="password")

    repository = UserRepository(session)
    if repository.get_by_email(email):
        raise ConflictError("Email is already registered")

    now = now_in_app_timezone()
    user = User(
        id=None,
        role=role,
        name=name,
        email=email,
        password=get_password_hash(password),
        created_at=now,
        updated_at=now,
    )
    return repository.create(user)
