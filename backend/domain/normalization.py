"""Normalize raw room payloads into domain values.

Host payloads arrive with missing keys, ``None`` values, camelCase or
snake_case names and occasionally negative counts. Everything is mapped onto
:class:`GuestRoom` here so the allocation code never has to guess.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, Mapping, Optional, Sequence

from backend.domain.models import GuestRoom


_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "adult_count": ("adult_count", "adultCount", "adults"),
    "child_count": ("child_count", "childCount", "children"),
    "child_ages": ("child_ages", "childAges"),
    "room_type_code": ("room_type_code", "roomTypeCode"),
    "room_variant": ("room_variant", "roomVariant"),
    "room_name": ("room_name", "roomName"),
    "room_index": ("room_index", "roomIndex"),
}


def _lookup(payload: Mapping[str, Any], field_name: str) -> Any:
    for key in _FIELD_ALIASES[field_name]:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def coerce_count(value: Any) -> int:
    """Return a non-negative integer; anything unusable counts as zero."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(number, 0)


def _is_usable_age(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        int(value)
    except (TypeError, ValueError, OverflowError):
        return False
    return True


def coerce_ages(value: Any) -> tuple[int, ...]:
    if value is None or isinstance(value, (str, bytes)):
        return ()
    try:
        items = list(value)
    except TypeError:
        return ()
    return tuple(coerce_count(item) for item in items if _is_usable_age(item))


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def normalize_room(payload: Mapping[str, Any] | GuestRoom | None, position: int) -> GuestRoom:
    if isinstance(payload, GuestRoom):
        return replace(
            payload,
            adult_count=coerce_count(payload.adult_count),
            child_count=coerce_count(payload.child_count),
        )
    payload = payload or {}

    raw_index = _lookup(payload, "room_index")
    room_index = position if raw_index is None else coerce_count(raw_index)
    return GuestRoom(
        adult_count=coerce_count(_lookup(payload, "adult_count")),
        child_count=coerce_count(_lookup(payload, "child_count")),
        child_ages=coerce_ages(_lookup(payload, "child_ages")),
        room_type_code=_optional_text(_lookup(payload, "room_type_code")),
        room_variant=_optional_text(_lookup(payload, "room_variant")),
        room_name=_optional_text(_lookup(payload, "room_name")),
        room_index=room_index,
    )


def normalize_rooms(
    rooms: Optional[Iterable[Mapping[str, Any] | GuestRoom | None]],
) -> list[GuestRoom]:
    """Normalize a room list; ``None`` is treated as an empty selection."""
    if rooms is None:
        return []
    return [normalize_room(payload, position) for position, payload in enumerate(rooms)]


def total_guests(rooms: Sequence[GuestRoom]) -> tuple[int, int]:
    return (
        sum(room.adult_count for room in rooms),
        sum(room.child_count for room in rooms),
    )
