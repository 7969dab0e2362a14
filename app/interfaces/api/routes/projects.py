"""Routes for projects and their members."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.application.errors import ApplicationError
from app.application.use_cases import projects as projects_uc
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.realtime import RealtimePublisher
from app.interfaces.api.dependencies import (
    get_current_user,
    get_realtime_publisher,
    require_admin,
)
from app.interfaces.api.routes_helpers import raise_http_error
from app.interfaces.api.schemas import (
    ProjectCreate,
    ProjectMemberAdd,
    ProjectMemberRead,
    ProjectRead,
    ProjectUpdate,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("/", response_model=list[ProjectRead])
def list_projects(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return [
        ProjectRead.model_validate(project)
        for project in projects_uc.list_projects(db, current_user)
    ]


@router.get("/{project_id}", response_model=ProjectRead)
def read_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        project = projects_uc.get_project(db, current_user, project_id)
    except ApplicationError as exc:
        raise_http_error(exc)
    return ProjectRead.model_validate(project)


@router.post("/", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(
    project_in: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    publisher: RealtimePublisher = Depends(get_realtime_publisher),
):
    try:
        project = projects_uc.create_project(
            db, current_user, name=project_in.name, publisher=publisher
        )
    except ApplicationError as exc:
        raise_http_error(exc)
    return ProjectRead.model_validate(project)


@router.put("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: int,
    project_in: ProjectUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    try:
        project = projects_uc.rename_project(db, project_id, name=project_in.name)
    except ApplicationError as exc:
        raise_http_error(exc)
    return ProjectRead.model_validate(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    try:
        projects_uc.delete_project(db, project_id)
    except ApplicationError as exc:
        raise_http_error(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{project_id}/members",
    response_model=ProjectMemberRead,
    status_code=status.HTTP_201_CREATED,
)
def add_member(
    project_id: int,
    member_in: ProjectMemberAdd,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    publisher: RealtimePublisher = Depends(get_realtime_publisher),
):
    """Add a user to the project; they are notified by e-mail as well."""

    try:
        member = projects_uc.add_project_member(
            db,
            current_user,
            project_id,
            user_id=member_in.user_id,
            can_create_vibes=member_in.can_create_vibes,
            publisher=publisher,
        )
    except ApplicationError as exc:
        raise_http_error(exc)
    return ProjectMemberRead.model_validate(member)


@router.delete("/{project_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_member(
    project_id: int,
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
    publisher: RealtimePublisher = Depends(get_realtime_publisher),
):
    try:
        projects_uc.remove_project_member(
            db, project_id, user_id=user_id, publisher=publisher
        )
    except ApplicationError as exc:
        raise_http_error(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
