"""Redistribute a booking's guests into policy-compliant rooms."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from backend.domain.constraints import (
    DEFAULT_POLICY,
    OccupancyPolicy,
    validate_occupancy_policy,
)
from backend.domain.models import (
    AllocationUnit,
    GuestRoom,
    PartitionResult,
    RedistributionResult,
    SplitRoom,
)
from backend.domain.normalization import normalize_rooms
from backend.services.partition_service import partition_room
from backend.services.validation_service import exceeds_policy
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class OccupancyPolicyError(Exception):
    """Raised when the configured occupancy policy is inconsistent."""


def _overflow_shares(unit_count: int, unplaced_children: int) -> list[int]:
    # Round-robin from the first room so no child is ever dropped.
    shares = [0] * unit_count
    for offset in range(unplaced_children):
        shares[offset % unit_count] += 1
    return shares


def _build_split_room(
    source: GuestRoom,
    unit: AllocationUnit,
    *,
    split_room_number: int,
    total_split_rooms: int,
    child_ages: tuple[int, ...],
    overflow_children: int,
) -> SplitRoom:
    return SplitRoom(
        original_room_index=source.room_index,
        split_room_number=split_room_number,
        total_split_rooms=total_split_rooms,
        adult_count=unit.adults,
        child_count=unit.children + overflow_children,
        child_ages=child_ages,
        room_type_code=source.room_type_code,
        room_variant=source.room_variant,
        room_name=source.room_name,
        overflow_children=overflow_children,
    )


def _split_source_room(source: GuestRoom, partition: PartitionResult) -> list[SplitRoom]:
    unit_count = len(partition.units)
    shares = _overflow_shares(unit_count, partition.unplaced_children)
    age_pool = source.child_ages
    cursor = 0
    produced: list[SplitRoom] = []
    for position, unit in enumerate(partition.units):
        seats = unit.children + shares[position]
        # Ages run out quietly when the host sent fewer ages than children.
        ages = age_pool[cursor : cursor + seats]
        cursor += len(ages)
        produced.append(
            _build_split_room(
                source,
                unit,
                split_room_number=position + 1,
                total_split_rooms=unit_count,
                child_ages=tuple(ages),
                overflow_children=shares[position],
            )
        )
    return produced


def redistribute(
    rooms: Optional[Iterable[Mapping[str, Any] | GuestRoom | None]],
    policy: OccupancyPolicy = DEFAULT_POLICY,
) -> RedistributionResult:
    """Split every room of a selection and number the produced rooms.

    Rooms without adults are dropped. Each produced room keeps the source
    room's type code, variant and name, draws its child ages off the front of
    the source room's remaining ages and starts with empty guest details.
    """
    produced: list[SplitRoom] = []
    for source in normalize_rooms(rooms):
        if source.adult_count == 0:
            continue
        partition = partition_room(source.adult_count, source.child_count, policy)
        produced.extend(_split_source_room(source, partition))
    return RedistributionResult(total_rooms=len(produced), produced_rooms=tuple(produced))


def to_guest_rooms(result: RedistributionResult) -> list[GuestRoom]:
    """Turn produced rooms into a fresh selection indexed from zero."""
    return [
        GuestRoom(
            adult_count=room.adult_count,
            child_count=room.child_count,
            child_ages=room.child_ages,
            room_type_code=room.room_type_code,
            room_variant=room.room_variant,
            room_name=room.room_name,
            room_index=position,
        )
        for position, room in enumerate(result.produced_rooms)
    ]


class RoomSplitService:
    """Binds the configured occupancy policy to the split operations."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        policy: Optional[OccupancyPolicy] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._policy = policy or self._settings.occupancy_policy()

    @property
    def policy(self) -> OccupancyPolicy:
        return self._policy

    def _ensure_policy(self) -> None:
        try:
            validate_occupancy_policy(self._policy)
        except ValueError as exc:
            raise OccupancyPolicyError(str(exc)) from exc

    def check(self, rooms: Optional[Iterable[Mapping[str, Any] | GuestRoom | None]]) -> bool:
        self._ensure_policy()
        flagged = exceeds_policy(rooms, self._policy)
        logger.info("Occupancy check completed: exceeds_policy=%s", flagged)
        return flagged

    def split(
        self,
        rooms: Optional[Iterable[Mapping[str, Any] | GuestRoom | None]],
    ) -> RedistributionResult:
        self._ensure_policy()
        normalized = normalize_rooms(rooms)
        result = redistribute(normalized, self._policy)
        if result.partial_placement:
            logger.warning(
                "Partial placement: %s children seated above the guest cap",
                result.overflow_children,
            )
        logger.info(
            "Redistributed %s source rooms into %s rooms",
            len(normalized),
            result.total_rooms,
        )
        return result
