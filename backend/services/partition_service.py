"""Split one room's guests into rooms that respect the occupancy policy.

The allocation runs in three passes:

1. Base allocation: seat adults in pairs and top each room up with children
   until it reaches the guest cap.
2. Overflow spread: push remaining children into rooms with spare capacity.
3. Rebalance: if children are still standing, rebuild with more rooms and
   fewer adults per room, and keep the rebuild only if it seats more children.

For two or more adults the passes seat every child whenever
``children <= adults * (max_guests_per_room - 1)``. Beyond that no
policy-compliant split exists and the remainder is reported as
``unplaced_children`` instead of being dropped.
"""

from __future__ import annotations

import math

from backend.domain.constraints import DEFAULT_POLICY, OccupancyPolicy
from backend.domain.models import AllocationUnit, PartitionResult


def _base_allocation(
    adults: int,
    children: int,
    policy: OccupancyPolicy,
) -> tuple[list[list[int]], int]:
    units: list[list[int]] = []
    remaining_adults = adults
    remaining_children = children
    while remaining_adults > 0:
        unit_adults = min(remaining_adults, policy.max_adults_per_room)
        remaining_adults -= unit_adults
        unit_children = min(remaining_children, policy.max_guests_per_room - unit_adults)
        remaining_children -= unit_children
        units.append([unit_adults, unit_children])
    return units, remaining_children


def _spread_overflow(
    units: list[list[int]],
    remaining_children: int,
    policy: OccupancyPolicy,
) -> int:
    for unit in units:
        if remaining_children == 0:
            break
        spare = policy.max_guests_per_room - (unit[0] + unit[1])
        if spare > 0:
            moved = min(spare, remaining_children)
            unit[1] += moved
            remaining_children -= moved
    return remaining_children


def _rebalanced_allocation(
    adults: int,
    children: int,
    rooms_to_make: int,
    policy: OccupancyPolicy,
) -> tuple[list[list[int]], int]:
    units: list[list[int]] = []
    remaining_adults = adults
    remaining_children = children
    for position in range(rooms_to_make):
        unit_adults = min(
            math.ceil(remaining_adults / (rooms_to_make - position)),
            policy.max_adults_per_room,
        )
        remaining_adults -= unit_adults
        unit_children = min(remaining_children, policy.max_guests_per_room - unit_adults)
        remaining_children -= unit_children
        units.append([unit_adults, unit_children])
    return units, remaining_children


def _freeze(units: list[list[int]], unplaced_children: int) -> PartitionResult:
    return PartitionResult(
        units=tuple(AllocationUnit(adults=a, children=c) for a, c in units),
        unplaced_children=unplaced_children,
    )


def partition_room(
    adults: int,
    children: int,
    policy: OccupancyPolicy = DEFAULT_POLICY,
) -> PartitionResult:
    """Partition ``(adults, children)`` into policy-compliant allocation units.

    Negative counts are treated as zero. A lone guardian (by default a single
    adult) keeps all children in one room, even above the guest cap.
    """
    adults = max(adults, 0)
    children = max(children, 0)

    if adults == 0:
        return PartitionResult(units=(), unplaced_children=children)
    if adults <= policy.family_exception_adults:
        return PartitionResult(units=(AllocationUnit(adults=adults, children=children),))

    units, remaining_children = _base_allocation(adults, children, policy)
    if remaining_children > 0:
        remaining_children = _spread_overflow(units, remaining_children, policy)

    if remaining_children > 0:
        rooms_needed = math.ceil((adults + children) / policy.max_guests_per_room)
        if len(units) < rooms_needed and len(units) < adults:
            rooms_to_make = min(adults, rooms_needed)
            rebuilt_units, rebuilt_remaining = _rebalanced_allocation(
                adults, children, rooms_to_make, policy
            )
            if rebuilt_remaining < remaining_children:
                units, remaining_children = rebuilt_units, rebuilt_remaining

    return _freeze(units, remaining_children)
