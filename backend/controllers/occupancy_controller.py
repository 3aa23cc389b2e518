"""HTTP controller layer for occupancy checks and room redistribution."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from backend.controllers.dependencies import get_split_service
from backend.controllers.schemas import RedistributeResponse, RoomSelectionRequest
from backend.domain.normalization import normalize_rooms, total_guests
from backend.services.redistribution_service import OccupancyPolicyError, RoomSplitService
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["occupancy"])


class CheckOccupancyResponse(BaseModel):
    exceeds_policy: bool
    total_adults: int = Field(ge=0)
    total_children: int = Field(ge=0)
    room_count: int = Field(ge=0)


class PolicyResponse(BaseModel):
    max_adults_per_room: int = Field(ge=1)
    max_guests_per_room: int = Field(ge=1)
    family_exception_adults: int = Field(ge=0)


@router.get(
    "/policy",
    response_model=PolicyResponse,
    status_code=status.HTTP_200_OK,
)
async def get_policy(
    service: RoomSplitService = Depends(get_split_service),
) -> PolicyResponse:
    policy = service.policy
    return PolicyResponse(
        max_adults_per_room=policy.max_adults_per_room,
        max_guests_per_room=policy.max_guests_per_room,
        family_exception_adults=policy.family_exception_adults,
    )


@router.post(
    "/check_occupancy",
    response_model=CheckOccupancyResponse,
    status_code=status.HTTP_200_OK,
)
async def check_occupancy(
    payload: RoomSelectionRequest,
    service: RoomSplitService = Depends(get_split_service),
) -> CheckOccupancyResponse:
    """Report whether any room in the selection breaches occupancy policy."""
    try:
        rooms = normalize_rooms(payload.raw_rooms())
        flagged = service.check(rooms)
        total_adults, total_children = total_guests(rooms)
        return CheckOccupancyResponse(
            exceeds_policy=flagged,
            total_adults=total_adults,
            total_children=total_children,
            room_count=len(rooms),
        )
    except OccupancyPolicyError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected occupancy check failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to check occupancy",
        ) from exc


@router.post(
    "/redistribute",
    response_model=RedistributeResponse,
    status_code=status.HTTP_200_OK,
)
async def redistribute_rooms(
    payload: RoomSelectionRequest,
    service: RoomSplitService = Depends(get_split_service),
) -> RedistributeResponse:
    """Split every room of the selection into policy-compliant rooms."""
    try:
        result = service.split(payload.raw_rooms())
        return RedistributeResponse.from_domain(result)
    except OccupancyPolicyError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected redistribution failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to redistribute rooms",
        ) from exc
