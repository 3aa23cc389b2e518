"""HTTP controller layer for the split-or-proceed selection workflow."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from backend.controllers.dependencies import get_selection_service
from backend.controllers.schemas import GuestRoomPayload, RedistributeResponse
from backend.domain.normalization import normalize_rooms
from backend.services.redistribution_service import OccupancyPolicyError
from backend.services.selection_service import (
    SelectionDecision,
    SelectionOutcome,
    SelectionPhase,
    SelectionState,
    SelectionWorkflowService,
    SplitChoiceNotPendingError,
)
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(prefix="/selection", tags=["selection"])


class SelectionStatePayload(BaseModel):
    phase: SelectionPhase = SelectionPhase.IDLE
    pending_rooms: list[GuestRoomPayload] = Field(default_factory=list)
    policy_bypassed: bool = False

    def to_domain(self) -> SelectionState:
        return SelectionState(
            phase=self.phase,
            pending_rooms=tuple(
                normalize_rooms([room.model_dump() for room in self.pending_rooms])
            ),
            policy_bypassed=self.policy_bypassed,
        )

    @classmethod
    def from_domain(cls, state: SelectionState) -> "SelectionStatePayload":
        return cls(
            phase=state.phase,
            pending_rooms=[GuestRoomPayload.from_domain(room) for room in state.pending_rooms],
            policy_bypassed=state.policy_bypassed,
        )


class SelectionTransitionRequest(BaseModel):
    state: SelectionStatePayload = Field(default_factory=SelectionStatePayload)


class SelectionSubmitRequest(SelectionTransitionRequest):
    rooms: Optional[list[GuestRoomPayload]] = None


class SelectionOutcomeResponse(BaseModel):
    state: SelectionStatePayload
    decision: SelectionDecision
    rooms: list[GuestRoomPayload]
    redistribution: Optional[RedistributeResponse] = None


def _to_response(outcome: SelectionOutcome) -> SelectionOutcomeResponse:
    return SelectionOutcomeResponse(
        state=SelectionStatePayload.from_domain(outcome.state),
        decision=outcome.decision,
        rooms=[GuestRoomPayload.from_domain(room) for room in outcome.rooms],
        redistribution=(
            RedistributeResponse.from_domain(outcome.redistribution)
            if outcome.redistribution is not None
            else None
        ),
    )


def _policy_unavailable(exc: OccupancyPolicyError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(exc),
    )


def _not_pending(exc: SplitChoiceNotPendingError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=str(exc),
    )


@router.post(
    "/submit",
    response_model=SelectionOutcomeResponse,
    response_model_by_alias=False,
    status_code=status.HTTP_200_OK,
)
async def submit_selection(
    payload: SelectionSubmitRequest,
    service: SelectionWorkflowService = Depends(get_selection_service),
) -> SelectionOutcomeResponse:
    """Commit the selection, or ask the guest to choose between split and proceed."""
    try:
        rooms = [room.model_dump() for room in payload.rooms or []]
        outcome = service.submit(payload.state.to_domain(), rooms)
        return _to_response(outcome)
    except OccupancyPolicyError as exc:
        raise _policy_unavailable(exc) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected selection submit failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit selection",
        ) from exc


@router.post(
    "/split",
    response_model=SelectionOutcomeResponse,
    response_model_by_alias=False,
    status_code=status.HTTP_200_OK,
)
async def choose_split(
    payload: SelectionTransitionRequest,
    service: SelectionWorkflowService = Depends(get_selection_service),
) -> SelectionOutcomeResponse:
    try:
        outcome = service.choose_split(payload.state.to_domain())
        return _to_response(outcome)
    except SplitChoiceNotPendingError as exc:
        raise _not_pending(exc) from exc
    except OccupancyPolicyError as exc:
        raise _policy_unavailable(exc) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected split failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to split rooms",
        ) from exc


@router.post(
    "/proceed",
    response_model=SelectionOutcomeResponse,
    response_model_by_alias=False,
    status_code=status.HTTP_200_OK,
)
async def proceed_anyway(
    payload: SelectionTransitionRequest,
    service: SelectionWorkflowService = Depends(get_selection_service),
) -> SelectionOutcomeResponse:
    try:
        outcome = service.proceed_anyway(payload.state.to_domain())
        return _to_response(outcome)
    except SplitChoiceNotPendingError as exc:
        raise _not_pending(exc) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected proceed-anyway failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to proceed with selection",
        ) from exc


@router.post(
    "/dismiss",
    response_model=SelectionStatePayload,
    response_model_by_alias=False,
    status_code=status.HTTP_200_OK,
)
async def dismiss_selection(
    payload: SelectionTransitionRequest,
    service: SelectionWorkflowService = Depends(get_selection_service),
) -> SelectionStatePayload:
    try:
        return SelectionStatePayload.from_domain(service.dismiss(payload.state.to_domain()))
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected dismiss failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to dismiss selection",
        ) from exc
