from fastapi import FastAPI

from .access_info import router as access_info_router
from .activity import router as activity_router
from .admin import router as admin_router
from .project_settings import router as project_settings_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(activity_router)
    app.include_router(admin_router)
    app.include_router(project_settings_router)
    app.include_router(access_info_router)
