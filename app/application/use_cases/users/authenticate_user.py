"""Use case for authenticating a user."""

from sqlalchemy.orm import Session

from app.application.errors import UnauthorizedError
from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import verify_password


def authenticate_user(session: Session, email: str, password: str) -> User:
    """Return the user owning ``email`` when ``password`` matches."""

    repository = UserRepository(session)
    user = repository.get_by_email(email)

    if user is None or not user.password:
        raise UnauthorizedError("Invalid email or password")

    if not verify_password(password, user.password):
        raise UnauthorizedError("Invalid email or password")

    return user
