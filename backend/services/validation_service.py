"""Occupancy validation for a guest room selection."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from backend.domain.constraints import DEFAULT_POLICY, OccupancyPolicy, room_exceeds_policy
from backend.domain.models import GuestRoom
from backend.domain.normalization import normalize_rooms


def exceeds_policy(
    rooms: Optional[Iterable[Mapping[str, Any] | GuestRoom | None]],
    policy: OccupancyPolicy = DEFAULT_POLICY,
) -> bool:
    """Return True when any room breaches the occupancy policy.

    A room is flagged when it holds at least two adults and either more than
    two adults or more than three guests in total. Rooms with a single adult
    are never flagged. An empty or absent selection is never flagged.
    """
    return any(
        room_exceeds_policy(room.adult_count, room.child_count, policy)
        for room in normalize_rooms(rooms)
    )


def offending_room_indexes(
    rooms: Optional[Iterable[Mapping[str, Any] | GuestRoom | None]],
    policy: OccupancyPolicy = DEFAULT_POLICY,
) -> list[int]:
    return [
        room.room_index
        for room in normalize_rooms(rooms)
        if room_exceeds_policy(room.adult_count, room.child_count, policy)
    ]
