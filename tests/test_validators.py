from datetime import datetime, timezone

import pytest

from booking_schemas import BookingData, CardDetails, GuestInfo, PaymentInfo, ReviewConfirmation
from errors import StepValidationError
from validators import (
    MISSING_INFORMATION,
    guest_info_errors,
    validate_card_number,
    validate_cvv,
    validate_email,
    validate_expiry,
    validate_guest_info,
    validate_max_length,
    validate_payment,
    validate_phone,
    validate_required,
    validate_review,
)

JUNE_2024 = datetime(2024, 6, 15, 12, 0)


@pytest.mark.parametrize("email", ["jane@x.com", "a.b+c@mail.example.org"])
def test_validate_email_accepts(email):
    assert validate_email(email).ok


@pytest.mark.parametrize("email", ["", "jane", "jane@x", "jane doe@x.com", "@x.com"])
def test_validate_email_rejects(email):
    result = validate_email(email)
    assert not result.ok
    assert result.reason == "Please enter a valid email address"


@pytest.mark.parametrize("phone", ["555-123-4567", "5551234567", "+(555) 123-4567", "555.123.456789"])
def test_validate_phone_accepts(phone):
    assert validate_phone(phone).ok


@pytest.mark.parametrize("phone", ["", "12345", "555-123-45", "phone"])
def test_validate_phone_rejects(phone):
    assert validate_phone(phone).reason == "Please enter a valid phone number"


def test_validate_required_trims():
    assert validate_required("Jane").ok
    result = validate_required("   ", "First name", "first_name")
    assert not result.ok
    assert result.reason == "First name is required"
    assert result.field == "first_name"


def test_card_number_length_boundary():
    assert validate_card_number("4242424242424242").ok
    assert validate_card_number("4242 4242 4242 4242").ok
    assert validate_card_number("4242-4242-4242-4242").ok
    assert not validate_card_number("424242424242424").ok      # 15 digits
    assert not validate_card_number("42424242424242421").ok    # 17 digits
    assert not validate_card_number("4242abcd42424242").ok


def test_expiry_in_the_past_fails():
    result = validate_expiry("01/20")
    assert not result.ok
    assert result.reason == "Card has expired"


def test_expiry_next_month_passes(future_expiry):
    assert validate_expiry(future_expiry).ok


def test_expiry_current_month_is_already_expired():
    assert validate_expiry("06/24", now=JUNE_2024).reason == "Card has expired"
    assert validate_expiry("07/24", now=JUNE_2024).ok


@pytest.mark.parametrize("expiry", ["", "1/25", "13/30", "00/30", "12-30", "1230"])
def test_expiry_format(expiry):
    assert validate_expiry(expiry, now=JUNE_2024).reason == "Please enter a valid expiry date (MM/YY)"


def test_validate_cvv():
    assert validate_cvv("123").ok
    assert not validate_cvv("12").ok
    assert not validate_cvv("1234").ok
    assert not validate_cvv("12a").ok


def test_only_ascii_digits_count():
    assert not validate_cvv("\u0661\u0662\u0663").ok
    assert not validate_cvv("123\n").ok
    assert not validate_card_number("\u0664" * 16).ok
    assert not validate_expiry("\u0660\u0667/\u0663\u0660", now=JUNE_2024).ok


def test_expiry_with_timezone_aware_now():
    aware = JUNE_2024.replace(tzinfo=timezone.utc)
    assert validate_expiry("07/24", now=aware).ok
    assert validate_expiry("06/24", now=aware).reason == "Card has expired"


def test_validate_max_length():
    assert validate_max_length("a" * 500, 500, "Special requests").ok
    result = validate_max_length("a" * 501, 500, "Special requests")
    assert result.reason == "Special requests must be less than 500 characters"


def test_raise_for_error():
    with pytest.raises(StepValidationError) as exc_info:
        validate_cvv("1").raise_for_error()
    assert exc_info.value.field == "cvv"
    validate_cvv("123").raise_for_error()


def test_guest_info_first_error_wins():
    guest = GuestInfo(first_name="", last_name="", email="bad", phone="1")
    assert validate_guest_info(guest).reason == "First name is required"


def test_guest_info_errors_reports_every_field():
    errors = guest_info_errors(GuestInfo(first_name="Jane", last_name="", email="bad", phone="1"))
    assert set(errors) == {"last_name", "email", "phone"}


def test_payment_with_saved_method():
    assert validate_payment(PaymentInfo(payment_method="visa")).ok
    assert validate_payment(PaymentInfo(payment_method="mastercard")).ok


def test_payment_requires_method():
    assert validate_payment(PaymentInfo()).reason == "Please select a payment method"
    assert validate_payment(PaymentInfo(payment_method="amex")).reason == "Unknown payment method"


def test_payment_new_card():
    card = CardDetails(number="4242 4242 4242 4242", expiry="07/24", cvv="123", name="Jane Doe")
    assert validate_payment(PaymentInfo(payment_method="new-card", card_details=card), now=JUNE_2024).ok

    missing = validate_payment(PaymentInfo(payment_method="new-card"), now=JUNE_2024)
    assert missing.reason == "Please enter your card details"

    expired = card.model_copy(update={"expiry": "01/20"})
    result = validate_payment(PaymentInfo(payment_method="new-card", card_details=expired), now=JUNE_2024)
    assert result.reason == "Card has expired"

    nameless = card.model_copy(update={"name": " "})
    result = validate_payment(PaymentInfo(payment_method="new-card", card_details=nameless), now=JUNE_2024)
    assert result.reason == "Cardholder name is required"


def test_review_requires_complete_booking(deluxe, guest):
    assert validate_review(ReviewConfirmation(), BookingData()).reason == MISSING_INFORMATION
    partial = BookingData(rooms=deluxe, guest_info=guest)
    assert validate_review(ReviewConfirmation(), partial).reason == MISSING_INFORMATION
    assert validate_review(ReviewConfirmation(confirmed=False), partial).reason == "Please confirm your booking"
