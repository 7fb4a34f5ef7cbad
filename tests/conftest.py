import os

os.environ["YELP_API_KEY"] = os.getenv("YELP_API_KEY", "test-yelp-key")
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import date, datetime

import pytest

from booking_schemas import (
    BookingDetails,
    GuestCount,
    GuestInfo,
    HotelDetails,
    HotelLocation,
    ReferenceData,
    StepId,
)
from booking_tools import MockHotelBookingProvider
from catalog import ROOM_TYPES
from checkout_machine import CheckoutStateMachine
from steps.payment import build_payment_info
from steps.preferences import build_preferences
from steps.room_selection import available_rooms


# ======================================================
# FIXTURES
# ======================================================

@pytest.fixture
def hotel():
    return HotelDetails(
        id="hotel-123",
        name="Test Hotel Boston",
        image_url="https://example.com/hotel.jpg",
        location=HotelLocation(address1="123 Test St", city="Boston", state="MA", zip_code="02110"),
        price="$$",
        rating=4.5,
        review_count=120,
    )


@pytest.fixture
def booking_details():
    return BookingDetails(
        check_in=date(2024, 6, 1),
        check_out=date(2024, 6, 4),
        guests=GuestCount(adults=2, children=0),
    )


@pytest.fixture
def reference_data(hotel, booking_details):
    return ReferenceData(
        hotel=hotel,
        booking_details=booking_details,
        available_rooms=available_rooms(ROOM_TYPES, booking_details.guests),
    )


@pytest.fixture
def provider():
    return MockHotelBookingProvider()


@pytest.fixture
def machine(reference_data, provider):
    m = CheckoutStateMachine(submitter=provider, reference_id_factory=lambda: "BOOK-TEST")
    m.initialize(reference_data)
    return m


@pytest.fixture
def deluxe():
    return next(r for r in ROOM_TYPES if r.id == "deluxe")


@pytest.fixture
def guest():
    return GuestInfo(first_name="Jane", last_name="Doe", email="jane@x.com", phone="555-123-4567")


@pytest.fixture
def guest_payload():
    return {"firstName": "Jane", "lastName": "Doe", "email": "jane@x.com", "phone": "555-123-4567"}


@pytest.fixture
def future_expiry():
    today = datetime.now()
    year, month = (today.year, today.month + 1) if today.month < 12 else (today.year + 1, 1)
    return f"{month:02d}/{year % 100:02d}"


@pytest.fixture
def at_review(machine, deluxe, guest):
    """Machine with every data-entry step filled in, sitting at review."""
    machine.submit_step(StepId.ROOMS, deluxe)
    machine.submit_step(StepId.GUEST_INFO, guest)
    machine.submit_step(StepId.PREFERENCES, build_preferences([]))
    machine.submit_step(StepId.PAYMENT, build_payment_info("visa", guest))
    assert machine.current_step == StepId.REVIEW
    return machine
