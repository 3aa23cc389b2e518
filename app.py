"""
app.py — FastAPI application factory.

This is the ASGI application object imported by uvicorn.
It wires the split services and registers routers.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from backend.controllers.occupancy_controller import router as occupancy_router
from backend.controllers.selection_controller import router as selection_router
from backend.domain.constraints import validate_occupancy_policy
from backend.services.redistribution_service import RoomSplitService
from backend.services.selection_service import SelectionWorkflowService
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and wire the FastAPI application.

    Services are created here and stored on app.state so controllers resolve
    them through dependency providers instead of module globals.
    """
    settings = settings or get_settings()
    policy = settings.occupancy_policy()
    validate_occupancy_policy(policy)

    split_service = RoomSplitService(settings=settings, policy=policy)
    selection_service = SelectionWorkflowService(
        split_service=split_service,
        settings=settings,
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
    )

    app.include_router(occupancy_router)
    app.include_router(selection_router)

    app.state.split_service = split_service
    app.state.selection_service = selection_service

    logger.info(
        "Occupancy policy: max %s adults, max %s guests per room",
        policy.max_adults_per_room,
        policy.max_guests_per_room,
    )
    return app


# Module-level app object for uvicorn
app = create_app()
