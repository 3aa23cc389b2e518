"""Room selection workflow: check occupancy, then split or proceed anyway.

The workflow state belongs to the caller. Every transition takes a
:class:`SelectionState` and returns a new one inside a
:class:`SelectionOutcome`; the service itself keeps nothing between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from backend.domain.models import GuestRoom, RedistributionResult
from backend.domain.normalization import normalize_rooms
from backend.services.redistribution_service import RoomSplitService, to_guest_rooms
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class SelectionWorkflowError(Exception):
    """Raised when a selection transition is not allowed."""


class SplitChoiceNotPendingError(SelectionWorkflowError):
    """Raised when split or proceed is requested without a pending review."""


class SelectionPhase(str, Enum):
    IDLE = "idle"
    REVIEWING_SPLIT_CHOICE = "reviewing_split_choice"


class SelectionDecision(str, Enum):
    COMMITTED = "committed"
    SPLIT_CHOICE_REQUIRED = "split_choice_required"


@dataclass(frozen=True)
class SelectionState:
    phase: SelectionPhase = SelectionPhase.IDLE
    pending_rooms: tuple[GuestRoom, ...] = ()
    policy_bypassed: bool = False


@dataclass(frozen=True)
class SelectionOutcome:
    state: SelectionState
    decision: SelectionDecision
    rooms: tuple[GuestRoom, ...]
    redistribution: Optional[RedistributionResult] = None


INITIAL_STATE = SelectionState()


class SelectionWorkflowService:
    """Coordinates submit -> (split | proceed anyway | dismiss)."""

    def __init__(
        self,
        split_service: Optional[RoomSplitService] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._split_service = split_service or RoomSplitService(settings=self._settings)

    def submit(
        self,
        state: SelectionState,
        rooms: Optional[Iterable[Mapping[str, Any] | GuestRoom | None]],
    ) -> SelectionOutcome:
        # A new submission supersedes any review still pending.
        selection = tuple(normalize_rooms(rooms))
        if state.policy_bypassed or not self._split_service.check(selection):
            return SelectionOutcome(
                state=SelectionState(policy_bypassed=state.policy_bypassed),
                decision=SelectionDecision.COMMITTED,
                rooms=selection,
            )

        logger.info("Selection of %s rooms exceeds occupancy policy", len(selection))
        return SelectionOutcome(
            state=SelectionState(
                phase=SelectionPhase.REVIEWING_SPLIT_CHOICE,
                pending_rooms=selection,
            ),
            decision=SelectionDecision.SPLIT_CHOICE_REQUIRED,
            rooms=selection,
        )

    def _require_pending(self, state: SelectionState, action: str) -> None:
        if state.phase is not SelectionPhase.REVIEWING_SPLIT_CHOICE:
            raise SplitChoiceNotPendingError(
                f"Cannot {action}: no split choice is pending. Submit a selection first."
            )

    def choose_split(self, state: SelectionState) -> SelectionOutcome:
        self._require_pending(state, "split rooms")
        result = self._split_service.split(state.pending_rooms)
        return SelectionOutcome(
            state=SelectionState(),
            decision=SelectionDecision.COMMITTED,
            rooms=tuple(to_guest_rooms(result)),
            redistribution=result,
        )

    def proceed_anyway(self, state: SelectionState) -> SelectionOutcome:
        self._require_pending(state, "proceed anyway")
        logger.info("Proceeding without split for %s rooms", len(state.pending_rooms))
        return SelectionOutcome(
            state=SelectionState(policy_bypassed=True),
            decision=SelectionDecision.COMMITTED,
            rooms=state.pending_rooms,
        )

    def dismiss(self, state: SelectionState) -> SelectionState:
        if state.phase is SelectionPhase.REVIEWING_SPLIT_CHOICE:
            logger.info("Split choice dismissed")
        return SelectionState()
