from __future__ import annotations

from backend.domain.models import GuestRoom
from backend.domain.normalization import (
    coerce_ages,
    coerce_count,
    normalize_room,
    normalize_rooms,
    total_guests,
)


def test_missing_fields_default_to_empty_values():
    room = normalize_room({}, position=4)

    assert room == GuestRoom(adult_count=0, child_count=0, room_index=4)


def test_none_payload_is_an_empty_room():
    assert normalize_room(None, position=0).guest_count == 0


def test_camel_case_keys_are_accepted():
    room = normalize_room(
        {
            "adultCount": 2,
            "childCount": 1,
            "childAges": [7],
            "roomTypeCode": "DBL",
            "roomVariant": "sea-view",
            "roomName": "Deluxe Double",
            "roomIndex": 3,
        },
        position=0,
    )

    assert room.adult_count == 2
    assert room.child_count == 1
    assert room.child_ages == (7,)
    assert room.room_type_code == "DBL"
    assert room.room_variant == "sea-view"
    assert room.room_name == "Deluxe Double"
    assert room.room_index == 3


def test_negative_and_unusable_counts_become_zero():
    assert coerce_count(-3) == 0
    assert coerce_count("abc") == 0
    assert coerce_count(None) == 0
    assert coerce_count(True) == 0
    assert coerce_count("4") == 4


def test_ages_accept_any_iterable_but_not_text():
    assert coerce_ages((3, 5)) == (3, 5)
    assert coerce_ages("35") == ()
    assert coerce_ages(None) == ()
    assert coerce_ages(12) == ()


def test_unusable_ages_are_skipped_not_zeroed():
    assert coerce_ages([3, None, "x", True, "7"]) == (3, 7)


def test_guest_room_values_are_sanitized():
    room = normalize_room(GuestRoom(adult_count=-1, child_count=-2, room_index=0), position=9)

    assert room.adult_count == 0
    assert room.child_count == 0
    assert room.room_index == 0


def test_absent_selection_is_empty():
    assert normalize_rooms(None) == []


def test_room_index_defaults_to_position():
    rooms = normalize_rooms([{"adult_count": 1}, {"adult_count": 2}])

    assert [room.room_index for room in rooms] == [0, 1]
    assert total_guests(rooms) == (3, 0)
