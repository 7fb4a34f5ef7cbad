from typing import List

from booking_schemas import (
    BookingData,
    BookingPreferences,
    BookingSummary,
    ReferenceData,
    SummaryDates,
    SummaryHotel,
    SummaryRoom,
)
from catalog import preference_index
from errors import SequenceViolation
from pricing import compute_costs, format_currency


def build_summary(reference_data: ReferenceData, booking_data: BookingData) -> BookingSummary:
    missing = [
        name for name in ("rooms", "guest_info", "preferences", "payment_method")
        if getattr(booking_data, name) is None
    ]
    if missing:
        raise SequenceViolation(missing=missing)

    hotel = reference_data.hotel
    details = reference_data.booking_details
    room = booking_data.rooms

    return BookingSummary(
        hotel=SummaryHotel(
            name=hotel.name,
            address=hotel.location.address1 or "",
            image=hotel.image_url or "",
        ),
        dates=SummaryDates(check_in=details.check_in, check_out=details.check_out, nights=details.nights),
        guests=details.guests,
        room=SummaryRoom(name=room.name, price=room.price),
        pricing=compute_costs(room.price, details.nights),
    )


def selected_preference_titles(preferences: BookingPreferences) -> List[str]:
    options = preference_index()
    return [options[p].title for p in preferences.preferences if p in options]


def confirmation_message(summary: BookingSummary) -> str:
    return f"Total amount: {format_currency(summary.pricing.total)}. Would you like to proceed?"
