"""Routes to administer users and their credentials."""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.application.errors import ApplicationError
from app.application.use_cases.users import (
    create_user as create_user_uc,
    delete_user as delete_user_uc,
    get_user as get_user_uc,
    list_users as list_users_uc,
)
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.email import send_new_user_credentials_email
from app.infrastructure.security import generate_secure_password
from app.interfaces.api.dependencies import get_current_user, require_admin
from app.interfaces.api.routes_helpers import raise_http_error
from app.interfaces.api.schemas import UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


def _to_read_model(user: User) -> UserRead:
    return UserRead.model_validate(user)


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """Create a user and e-mail them their credentials."""

    password = user_in.password or generate_secure_password()
    try:
        user = create_user_uc(
            db,
            name=user_in.name,
            email=user_in.email,
            password=password,
            role=user_in.role,
        )
    except ApplicationError as exc:
        raise_http_error(exc)

    if not send_new_user_credentials_email(user.email, password):
        logger.warning("Could not e-mail credentials to user %s", user.email)

    return _to_read_model(user)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)):
    return _to_read_model(current_user)


@router.get("/", response_model=list[UserRead])
def list_users(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return [_to_read_model(user) for user in list_users_uc(db, skip=skip, limit=limit)]


@router.get("/{user_id}", response_model=UserRead)
def read_user(
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    try:
        user = get_user_uc(db, user_id)
    except ApplicationError as exc:
        raise_http_error(exc)
    return _to_read_model(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    try:
        delete_user_uc(db, user_id, current_user=current_user)
    except ApplicationError as exc:
        raise_http_error(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
