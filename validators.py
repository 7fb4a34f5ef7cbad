"""
Field and step validators for checkout.

Every validator returns a ValidationResult instead of raising, so a failed
step submission can report its first error and leave the session untouched.
"""

import re
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple, Optional

from booking_schemas import (
    BookingData,
    BookingPreferences,
    CardDetails,
    GuestInfo,
    PaymentInfo,
    ReviewConfirmation,
    Room,
    StepId,
)
from catalog import NEW_CARD, saved_method_ids
from errors import StepValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[+]?[(]?[0-9]{3}[)]?[-\s.]?[0-9]{3}[-\s.]?[0-9]{4,6}$")
EXPIRY_PATTERN = re.compile(r"([0-9]{2})/([0-9]{2})")
CARD_SEPARATORS = re.compile(r"[\s-]")
CARD_NUMBER_PATTERN = re.compile(r"[0-9]{16}")
CVV_PATTERN = re.compile(r"[0-9]{3}")

SPECIAL_REQUESTS_MAX = 500

MISSING_INFORMATION = "Missing required booking information"


class ValidationResult(NamedTuple):
    ok: bool
    reason: Optional[str] = None
    field: Optional[str] = None

    def raise_for_error(self, step: StepId = None) -> None:
        if not self.ok:
            raise StepValidationError(self.reason, step=step, field=self.field)


PASSED = ValidationResult(True)


def _fail(reason: str, field: str = None) -> ValidationResult:
    return ValidationResult(False, reason, field)


# ======================================================
# FIELD VALIDATORS
# ======================================================

def validate_required(value: Optional[str], label: str = "This field", field: str = None) -> ValidationResult:
    if value and value.strip():
        return PASSED
    return _fail(f"{label} is required", field)


def validate_email(value: Optional[str]) -> ValidationResult:
    if value and EMAIL_PATTERN.match(value):
        return PASSED
    return _fail("Please enter a valid email address", "email")


def validate_phone(value: Optional[str]) -> ValidationResult:
    if value and PHONE_PATTERN.match(value):
        return PASSED
    return _fail("Please enter a valid phone number", "phone")


def validate_card_number(value: Optional[str]) -> ValidationResult:
    digits = CARD_SEPARATORS.sub("", value or "")
    if CARD_NUMBER_PATTERN.fullmatch(digits):
        return PASSED
    return _fail("Please enter a valid 16-digit card number", "number")


def validate_expiry(value: Optional[str], now: datetime = None) -> ValidationResult:
    """
    MM/YY, not before the current month.

    The card is treated as expiring on the first day of its month, so a card
    that expires this month is already rejected.
    """
    match = EXPIRY_PATTERN.fullmatch(value or "")
    if not match:
        return _fail("Please enter a valid expiry date (MM/YY)", "expiry")

    month, year = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        return _fail("Please enter a valid expiry date (MM/YY)", "expiry")

    now = now or datetime.now()
    if datetime(2000 + year, month, 1, tzinfo=now.tzinfo) < now:
        return _fail("Card has expired", "expiry")
    return PASSED


def validate_cvv(value: Optional[str]) -> ValidationResult:
    if value and CVV_PATTERN.fullmatch(value):
        return PASSED
    return _fail("Please enter a valid 3-digit CVV", "cvv")


def validate_max_length(value: Optional[str], limit: int, label: str, field: str = None) -> ValidationResult:
    if value is None or len(value) <= limit:
        return PASSED
    return _fail(f"{label} must be less than {limit} characters", field)


def first_failure(results) -> ValidationResult:
    for result in results:
        if not result.ok:
            return result
    return PASSED


# ======================================================
# COMPOSITE VALIDATORS
# ======================================================

def guest_info_errors(guest: GuestInfo) -> Dict[str, str]:
    """All failing guest fields at once, keyed by field name (form display)."""
    results = [
        validate_required(guest.first_name, "First name", "first_name"),
        validate_required(guest.last_name, "Last name", "last_name"),
        validate_email(guest.email),
        validate_phone(guest.phone),
    ]
    return {r.field: r.reason for r in results if not r.ok}


def card_details_errors(card: Optional[CardDetails], now: datetime = None) -> List[ValidationResult]:
    card = card or CardDetails()
    results = [
        validate_card_number(card.number),
        validate_expiry(card.expiry, now=now),
        validate_cvv(card.cvv),
        validate_required(card.name, "Cardholder name", "name"),
    ]
    return [r for r in results if not r.ok]


# ======================================================
# STEP VALIDATORS
# ======================================================
# Signature: (payload, booking_data) -> ValidationResult.
# booking_data is the accumulator's current content, for cross-step checks.

def validate_rooms(room: Optional[Room], booking_data: BookingData = None) -> ValidationResult:
    if not room:
        return _fail("Please select a room to continue", "rooms")
    return PASSED


def validate_guest_info(guest: GuestInfo, booking_data: BookingData = None) -> ValidationResult:
    return first_failure([
        validate_required(guest.first_name, "First name", "first_name"),
        validate_required(guest.last_name, "Last name", "last_name"),
        validate_email(guest.email),
        validate_phone(guest.phone),
    ])


def validate_preferences(preferences: BookingPreferences, booking_data: BookingData = None) -> ValidationResult:
    # optional step, nothing is required
    return PASSED


def validate_payment(payment: PaymentInfo, booking_data: BookingData = None, now: datetime = None) -> ValidationResult:
    method = payment.payment_method if payment else None
    if not method:
        return _fail("Please select a payment method", "payment_method")
    if method in saved_method_ids():
        return PASSED
    if method != NEW_CARD:
        return _fail("Unknown payment method", "payment_method")

    errors = card_details_errors(payment.card_details, now=now)
    if not errors:
        return PASSED
    if payment.card_details is None:
        return _fail("Please enter your card details", "card_details")
    return errors[0]


def validate_review(confirmation: ReviewConfirmation, booking_data: BookingData = None) -> ValidationResult:
    if confirmation is not None and not confirmation.confirmed:
        return _fail("Please confirm your booking", "confirmed")
    data = booking_data or BookingData()
    if not (data.rooms and data.guest_info and data.preferences and data.payment_method):
        return _fail(MISSING_INFORMATION)
    return PASSED


StepValidator = Callable[..., ValidationResult]

STEP_VALIDATORS: Dict[StepId, StepValidator] = {
    StepId.ROOMS: validate_rooms,
    StepId.GUEST_INFO: validate_guest_info,
    StepId.PREFERENCES: validate_preferences,
    StepId.PAYMENT: validate_payment,
    StepId.REVIEW: validate_review,
}
