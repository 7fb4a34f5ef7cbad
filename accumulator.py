from typing import List, Optional

from booking_schemas import BillingInfo, BookingData, CardDetails, GuestInfo, PaymentInfo, StepId
from catalog import find_payment_method, saved_method_ids
from logger_config import get_logger

logger = get_logger(__name__)

# Accumulator field written by each data-entry step
STEP_FIELDS = {
    StepId.ROOMS: "rooms",
    StepId.GUEST_INFO: "guest_info",
    StepId.PREFERENCES: "preferences",
    StepId.PAYMENT: "payment_method",
}


def masked_card(method_id: str, guest: Optional[GuestInfo]) -> Optional[CardDetails]:
    method = find_payment_method(method_id)
    if not method or not method.last4:
        return None
    return CardDetails(
        number=f"**** **** **** {method.last4}",
        expiry="**/**",
        cvv="***",
        name=guest.full_name if guest else "",
        last4=method.last4,
    )


def billing_from_guest(guest: Optional[GuestInfo]) -> BillingInfo:
    """Billing contact always mirrors the primary guest; there is no separate billing address."""
    guest = guest or GuestInfo()
    return BillingInfo(
        first_name=guest.first_name,
        last_name=guest.last_name,
        email=guest.email,
        phone=guest.phone,
    )


class BookingAccumulator:
    """
    Collects each step's validated contribution for one checkout session.

    Owned by a single CheckoutStateMachine. merge() fully overwrites the
    field of the submitted step and leaves the others alone.
    """

    def __init__(self):
        self._data = BookingData()

    def merge(self, step: StepId, payload) -> None:
        field = STEP_FIELDS.get(step)
        if field is None:
            raise ValueError(f"Step '{step.value}' does not contribute booking data")

        if step == StepId.PAYMENT:
            payload = self._with_derived_fields(payload)

        setattr(self._data, field, payload.model_copy(deep=True))
        logger.debug("Accumulator updated", step=step.value, field=field)

    def _with_derived_fields(self, payment: PaymentInfo) -> PaymentInfo:
        guest = self._data.guest_info
        update = {"billing_info": billing_from_guest(guest)}
        if payment.payment_method in saved_method_ids():
            # saved cards are never entered, only shown masked
            update["card_details"] = masked_card(payment.payment_method, guest)
        return payment.model_copy(update=update)

    def get(self, step: StepId):
        field = STEP_FIELDS.get(step)
        return getattr(self._data, field) if field else None

    def has(self, step: StepId) -> bool:
        if step not in STEP_FIELDS:
            # review has no field of its own; it is "filled" once everything else is
            return self.is_complete()
        return self.get(step) is not None

    def missing_steps(self) -> List[StepId]:
        return [step for step in STEP_FIELDS if self.get(step) is None]

    def is_complete(self) -> bool:
        return not self.missing_steps()

    @property
    def data(self) -> BookingData:
        return self._data

    def snapshot(self) -> BookingData:
        return self._data.model_copy(deep=True)

    def clear(self) -> None:
        self._data = BookingData()
