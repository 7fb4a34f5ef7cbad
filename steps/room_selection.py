from typing import List, Optional

from booking_schemas import GuestCount, Room, StepId
from errors import StepValidationError
from pricing import stay_total


def available_rooms(rooms: List[Room], guests: GuestCount) -> List[Room]:
    """Rooms large enough for the whole party."""
    return [room for room in rooms if room.max_occupancy >= guests.total]


def select_room(room_id: Optional[str], rooms: List[Room]) -> Room:
    if not room_id:
        raise StepValidationError("Please select a room to continue", step=StepId.ROOMS, field="rooms")
    room = next((r for r in rooms if r.id == room_id), None)
    if room is None:
        raise StepValidationError("Selected room is no longer available", step=StepId.ROOMS, field="rooms")
    return room


def room_total(room: Room, nights: int) -> float:
    return stay_total(room.price, nights)


def compare_rooms(rooms: List[Room]) -> List[dict]:
    # side-by-side rows for the comparison sheet
    return [
        {
            "id": room.id,
            "name": room.name,
            "price": room.price,
            "size": room.size,
            "max_occupancy": room.max_occupancy,
            "bed_type": room.bed_type,
            "amenities": [a.name for a in room.amenities],
            "cancellation_policy": room.cancellation_policy,
        }
        for room in rooms
    ]
