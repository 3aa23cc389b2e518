"""Tests for the three-pass room partitioner."""

from __future__ import annotations

import pytest

from backend.domain.constraints import DEFAULT_POLICY, OccupancyPolicy
from backend.services.partition_service import partition_room


def _pairs(adults: int, children: int, policy: OccupancyPolicy = DEFAULT_POLICY) -> list[tuple[int, int]]:
    return [(unit.adults, unit.children) for unit in partition_room(adults, children, policy).units]


# --- Reference scenarios ---

def test_lone_guardian_keeps_all_children() -> None:
    assert _pairs(1, 5) == [(1, 5)]


def test_three_adults_five_children_uses_three_rooms() -> None:
    assert _pairs(3, 5) == [(1, 2), (1, 2), (1, 1)]


def test_four_adults_six_children_uses_four_rooms() -> None:
    assert _pairs(4, 6) == [(1, 2), (1, 2), (1, 2), (1, 0)]


def test_five_adults_two_children_pairs_adults() -> None:
    assert _pairs(5, 2) == [(2, 1), (2, 1), (1, 0)]


def test_two_adults_two_children_rebalances_into_two_rooms() -> None:
    """Pass 1 gives (2, 1) and leaves a child; the rebuild seats everyone."""
    result = partition_room(2, 2)

    assert [(u.adults, u.children) for u in result.units] == [(1, 1), (1, 1)]
    assert result.unplaced_children == 0
    assert result.is_partial is False


# --- Simple cases ---

@pytest.mark.parametrize(
    ("adults", "children", "expected"),
    [
        (1, 0, [(1, 0)]),
        (2, 0, [(2, 0)]),
        (2, 1, [(2, 1)]),
        (3, 0, [(2, 0), (1, 0)]),
        (4, 2, [(2, 1), (2, 1)]),
    ],
)
def test_rooms_already_within_caps(adults, children, expected) -> None:
    assert _pairs(adults, children) == expected


def test_no_adults_means_no_rooms() -> None:
    result = partition_room(0, 3)

    assert result.units == ()
    assert result.unplaced_children == 3


def test_negative_counts_are_treated_as_zero() -> None:
    assert _pairs(2, -1) == [(2, 0)]
    assert partition_room(-2, 3).unplaced_children == 3


def test_deterministic_for_identical_input() -> None:
    assert partition_room(7, 9) == partition_room(7, 9)


# --- Infeasible ratios ---

def test_child_heavy_room_reports_partial_placement() -> None:
    result = partition_room(2, 5)

    assert [(u.adults, u.children) for u in result.units] == [(1, 2), (1, 2)]
    assert result.unplaced_children == 1
    assert result.is_partial is True


# --- Property sweep ---

@pytest.mark.parametrize("adults", range(1, 9))
@pytest.mark.parametrize("children", range(0, 13))
def test_partition_properties(adults: int, children: int) -> None:
    result = partition_room(adults, children)

    assert result.placed_adults == adults
    assert result.placed_children + result.unplaced_children == children

    if adults == 1:
        assert [(u.adults, u.children) for u in result.units] == [(1, children)]
        return

    for unit in result.units:
        assert 1 <= unit.adults <= 2
        assert unit.guests <= 3

    if children <= 2 * adults:
        assert result.unplaced_children == 0
    else:
        assert result.unplaced_children == children - 2 * adults


# --- Custom policy ---

def test_larger_rooms_policy() -> None:
    policy = OccupancyPolicy(max_adults_per_room=3, max_guests_per_room=4)

    assert _pairs(5, 3, policy) == [(3, 1), (2, 2)]


def test_single_adult_rooms_policy() -> None:
    policy = OccupancyPolicy(max_adults_per_room=1, max_guests_per_room=2, family_exception_adults=0)
    result = partition_room(2, 3, policy)

    assert [(u.adults, u.children) for u in result.units] == [(1, 1), (1, 1)]
    assert result.unplaced_children == 1
