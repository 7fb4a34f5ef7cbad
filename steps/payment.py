import re
from typing import Optional

from accumulator import billing_from_guest, masked_card
from booking_schemas import CardDetails, CheckoutSnapshot, Costs, GuestInfo, PaymentInfo
from catalog import NEW_CARD
from pricing import compute_costs


def format_card_number(text: str) -> str:
    digits = re.sub(r"\D", "", text or "")
    return " ".join(digits[i:i + 4] for i in range(0, len(digits), 4))


def format_expiry(text: str) -> str:
    digits = re.sub(r"\D", "", text or "")
    if len(digits) >= 2:
        return f"{digits[:2]}/{digits[2:4]}"
    return digits


def build_payment_info(method_id: str, guest: Optional[GuestInfo],
                       card_details: Optional[CardDetails] = None) -> PaymentInfo:
    """
    Payment step contribution. Saved methods get a masked card synthesized;
    a new card is passed through for validation. Billing mirrors the guest.
    """
    if method_id == NEW_CARD:
        card = card_details
    else:
        card = masked_card(method_id, guest)
    return PaymentInfo(
        payment_method=method_id or "",
        card_details=card,
        billing_info=billing_from_guest(guest),
    )


def default_cardholder_name(guest: Optional[GuestInfo]) -> str:
    return guest.full_name if guest else ""


def payment_costs(snapshot: CheckoutSnapshot) -> Costs:
    room = snapshot.accumulator.rooms
    return compute_costs(room.price if room else None, snapshot.booking_details.nights)
