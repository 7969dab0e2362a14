"""Routes for vibes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.application.errors import ApplicationError
from app.application.use_cases import cuts as cuts_uc
from app.application.use_cases import vibes as vibes_uc
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.realtime import RealtimePublisher
from app.interfaces.api.dependencies import get_current_user, get_realtime_publisher
from app.interfaces.api.routes_helpers import raise_http_error
from app.interfaces.api.schemas import CutRead, VibeCreate, VibeDetailRead, VibeRead

router = APIRouter(prefix="/vibes", tags=["vibes"])


@router.get("/project/{project_id}", response_model=list[VibeRead])
def list_vibes(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        vibes = vibes_uc.list_vibes(db, current_user, project_id)
    except ApplicationError as exc:
        raise_http_error(exc)
    return [VibeRead.model_validate(vibe) for vibe in vibes]


@router.post(
    "/project/{project_id}",
    response_model=VibeRead,
    status_code=status.HTTP_201_CREATED,
)
def create_vibe(
    project_id: int,
    vibe_in: VibeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    publisher: RealtimePublisher = Depends(get_realtime_publisher),
):
    try:
        vibe = vibes_uc.create_vibe(
            db,
            current_user,
            project_id,
            name=vibe_in.name,
            theme=vibe_in.theme,
            notes=vibe_in.notes,
            publisher=publisher,
        )
    except ApplicationError as exc:
        raise_http_error(exc)
    return VibeRead.model_validate(vibe)


@router.get("/{vibe_id}", response_model=VibeDetailRead)
def read_vibe(
    vibe_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Return the vibe with its cuts in playlist order."""

    try:
        vibe, project = vibes_uc.get_vibe(db, current_user, vibe_id)
        cuts = cuts_uc.list_cuts(db, current_user, vibe_id)
    except ApplicationError as exc:
        raise_http_error(exc)
    return VibeDetailRead(
        **VibeRead.model_validate(vibe).model_dump(),
        project_name=project.name,
        cuts=[CutRead.model_validate(cut) for cut in cuts],
    )
