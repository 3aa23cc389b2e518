"""Domain models for guest room occupancy and room splitting."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class GuestRoom:
    """One booked room as configured by the guest."""

    adult_count: int
    child_count: int
    room_index: int
    child_ages: tuple[int, ...] = ()
    room_type_code: Optional[str] = None
    room_variant: Optional[str] = None
    room_name: Optional[str] = None

    @property
    def guest_count(self) -> int:
        return self.adult_count + self.child_count


@dataclass(frozen=True)
class AllocationUnit:
    adults: int
    children: int

    @property
    def guests(self) -> int:
        return self.adults + self.children


@dataclass(frozen=True)
class PartitionResult:
    units: tuple[AllocationUnit, ...]
    unplaced_children: int = 0

    @property
    def is_partial(self) -> bool:
        return self.unplaced_children > 0

    @property
    def placed_adults(self) -> int:
        return sum(unit.adults for unit in self.units)

    @property
    def placed_children(self) -> int:
        return sum(unit.children for unit in self.units)


@dataclass(frozen=True)
class SplitRoom:
    """A room produced by splitting an original booking room.

    Guest details, special requests and bedding preference are collected from
    the guest after the split, so they always start out empty.
    """

    original_room_index: int
    split_room_number: int
    total_split_rooms: int
    adult_count: int
    child_count: int
    child_ages: tuple[int, ...]
    room_type_code: Optional[str] = None
    room_variant: Optional[str] = None
    room_name: Optional[str] = None
    guest_details: tuple[dict[str, str], ...] = ()
    special_requests: str = ""
    bedding_preference: Optional[str] = None
    overflow_children: int = 0


@dataclass(frozen=True)
class RedistributionResult:
    total_rooms: int
    produced_rooms: tuple[SplitRoom, ...] = field(default_factory=tuple)

    @property
    def overflow_children(self) -> int:
        return sum(room.overflow_children for room in self.produced_rooms)

    @property
    def partial_placement(self) -> bool:
        return self.overflow_children > 0
