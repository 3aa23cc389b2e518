"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from fastapi import Request

from backend.services.redistribution_service import RoomSplitService
from backend.services.selection_service import SelectionWorkflowService
from backend.utils.config import get_settings


def get_split_service(request: Request) -> RoomSplitService:
    service = getattr(request.app.state, "split_service", None)
    if service is None:
        service = RoomSplitService(settings=get_settings())
        request.app.state.split_service = service
    return service


def get_selection_service(request: Request) -> SelectionWorkflowService:
    service = getattr(request.app.state, "selection_service", None)
    if service is None:
        service = SelectionWorkflowService(
            split_service=get_split_service(request),
            settings=get_settings(),
        )
        request.app.state.selection_service = service
    return service
