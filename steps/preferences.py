from typing import List, Optional

from booking_schemas import BookingData, BookingPreferences, StepId
from catalog import preference_index
from validators import SPECIAL_REQUESTS_MAX, validate_max_length


def toggle_preference(selected: List[str], preference_id: str) -> List[str]:
    if preference_id in selected:
        return [p for p in selected if p != preference_id]
    return selected + [preference_id]


def build_preferences(selected: List[str], special_requests: Optional[str] = None) -> BookingPreferences:
    """
    Shape the preferences step. Unknown preference ids are dropped; special
    requests over the limit are refused rather than truncated.
    """
    special_requests = special_requests or ""
    validate_max_length(
        special_requests, SPECIAL_REQUESTS_MAX, "Special requests", "special_requests"
    ).raise_for_error(StepId.PREFERENCES)

    known = preference_index()
    return BookingPreferences(
        preferences=[p for p in selected if p in known],
        special_requests=special_requests.strip(),
    )


def prefill(booking_data: BookingData) -> BookingPreferences:
    return booking_data.preferences.model_copy() if booking_data.preferences else BookingPreferences()
