from fastapi import FastAPI

from .activities import router as activities_router
from .auth import router as auth_router
from .cuts import router as cuts_router
from .files import public_router as public_files_router
from .files import router as files_router
from .invitations import router as invitations_router
from .notifications import router as notifications_router
from .projects import router as projects_router
from .realtime import router as realtime_router
from .users import router as users_router
from .vibes import router as vibes_router

API_PREFIX = "/api"


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(users_router, prefix=API_PREFIX)
    app.include_router(projects_router, prefix=API_PREFIX)
    app.include_router(vibes_router, prefix=API_PREFIX)
    app.include_router(cuts_router, prefix=API_PREFIX)
    app.include_router(files_router, prefix=API_PREFIX)
    app.include_router(public_files_router, prefix=API_PREFIX)
    app.include_router(invitations_router, prefix=API_PREFIX)
    app.include_router(activities_router, prefix=API_PREFIX)
    app.include_router(notifications_router, prefix=API_PREFIX)
    app.include_router(realtime_router)
