from typing import Dict, Optional

from booking_schemas import BookingData, GuestInfo
from validators import guest_info_errors


def build_guest_info(first_name: str = "", last_name: str = "", email: str = "", phone: str = "",
                     special_requests: Optional[str] = None) -> GuestInfo:
    special_requests = (special_requests or "").strip() or None
    return GuestInfo(
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        email=email.strip(),
        phone=phone.strip(),
        special_requests=special_requests,
    )


def prefill(booking_data: BookingData) -> GuestInfo:
    """Values to show when the guest step is revisited."""
    return booking_data.guest_info.model_copy() if booking_data.guest_info else GuestInfo()


def form_errors(guest: GuestInfo) -> Dict[str, str]:
    return guest_info_errors(guest)
