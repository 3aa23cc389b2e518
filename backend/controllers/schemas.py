"""Request/response DTOs shared by the HTTP controllers."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from backend.domain.models import GuestRoom, RedistributionResult, SplitRoom


class GuestRoomPayload(BaseModel):
    """Room as sent by the host; counts are normalized after parsing."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    adult_count: Optional[Any] = None
    child_count: Optional[Any] = None
    child_ages: Optional[list[Any]] = None
    room_type_code: Optional[str] = None
    room_variant: Optional[str] = None
    room_name: Optional[str] = None
    room_index: Optional[Any] = None

    @classmethod
    def from_domain(cls, room: GuestRoom) -> "GuestRoomPayload":
        return cls(
            adult_count=room.adult_count,
            child_count=room.child_count,
            child_ages=list(room.child_ages),
            room_type_code=room.room_type_code,
            room_variant=room.room_variant,
            room_name=room.room_name,
            room_index=room.room_index,
        )


class RoomSelectionRequest(BaseModel):
    rooms: Optional[list[GuestRoomPayload]] = None

    def raw_rooms(self) -> list[dict[str, Any]]:
        return [room.model_dump() for room in self.rooms or []]


class SplitRoomResponse(BaseModel):
    original_room_index: int = Field(ge=0)
    split_room_number: int = Field(ge=1)
    total_split_rooms: int = Field(ge=1)
    adult_count: int = Field(ge=0)
    child_count: int = Field(ge=0)
    child_ages: list[int]
    room_type_code: Optional[str] = None
    room_variant: Optional[str] = None
    room_name: Optional[str] = None
    guest_details: list[dict[str, str]]
    special_requests: str
    bedding_preference: Optional[str] = None
    overflow_children: int = Field(ge=0)

    @classmethod
    def from_domain(cls, room: SplitRoom) -> "SplitRoomResponse":
        return cls(
            original_room_index=room.original_room_index,
            split_room_number=room.split_room_number,
            total_split_rooms=room.total_split_rooms,
            adult_count=room.adult_count,
            child_count=room.child_count,
            child_ages=list(room.child_ages),
            room_type_code=room.room_type_code,
            room_variant=room.room_variant,
            room_name=room.room_name,
            guest_details=[dict(entry) for entry in room.guest_details],
            special_requests=room.special_requests,
            bedding_preference=room.bedding_preference,
            overflow_children=room.overflow_children,
        )


class RedistributeResponse(BaseModel):
    total_rooms: int = Field(ge=0)
    produced_rooms: list[SplitRoomResponse]
    partial_placement: bool
    overflow_children: int = Field(ge=0)

    @classmethod
    def from_domain(cls, result: RedistributionResult) -> "RedistributeResponse":
        return cls(
            total_rooms=result.total_rooms,
            produced_rooms=[SplitRoomResponse.from_domain(room) for room in result.produced_rooms],
            partial_placement=result.partial_placement,
            overflow_children=result.overflow_children,
        )
