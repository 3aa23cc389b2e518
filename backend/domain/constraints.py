"""Domain-level occupancy rules for guest rooms."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OccupancyPolicy:
    max_adults_per_room: int = 2
    max_guests_per_room: int = 3
    family_exception_adults: int = 1

    @property
    def max_children_per_room(self) -> int:
        """Children a room can take once its single required adult is seated."""
        return self.max_guests_per_room - 1


DEFAULT_POLICY = OccupancyPolicy()


def validate_occupancy_policy(policy: OccupancyPolicy) -> None:
    if policy.max_adults_per_room < 1:
        raise ValueError("max_adults_per_room must be >= 1")
    if policy.max_guests_per_room < policy.max_adults_per_room:
        raise ValueError("max_guests_per_room must be >= max_adults_per_room")
    if policy.family_exception_adults < 0:
        raise ValueError("family_exception_adults must be >= 0")
    if policy.family_exception_adults > policy.max_adults_per_room:
        raise ValueError("family_exception_adults must be <= max_adults_per_room")


def room_exceeds_policy(adults: int, children: int, policy: OccupancyPolicy = DEFAULT_POLICY) -> bool:
    # A lone guardian is never flagged, whatever the number of children.
    if adults <= policy.family_exception_adults:
        return False
    return adults > policy.max_adults_per_room or adults + children > policy.max_guests_per_room
