"""
Run this script to see a full mocked checkout flow:
 - build reference data for one hotel and a 3-night stay
 - select a room, enter guest details, skip preferences, pay with a saved card
 - review the priced summary
 - confirm against the mock booking provider and print the result
"""

from datetime import date

from booking_schemas import BookingDetails, GuestCount, HotelDetails, HotelLocation, ReferenceData, StepId
from booking_tools import MockHotelBookingProvider
from catalog import ROOM_TYPES
from checkout_machine import CheckoutStateMachine
from logger_config import configure_logger
from pricing import format_currency
from providers.listings import listing_card
from steps.guest_form import build_guest_info
from steps.payment import build_payment_info
from steps.preferences import build_preferences
from steps.review import confirmation_message
from steps.room_selection import available_rooms, select_room


def main():
    configure_logger()

    hotel = HotelDetails(
        id="demo-hotel-1",
        name="Harbor View Hotel",
        image_url="https://example.com/harbor.jpg",
        location=HotelLocation(address1="1 Pier Rd", city="Boston", state="MA", zip_code="02110"),
        price="$$",
        rating=4.5,
        review_count=321,
    )
    details = BookingDetails(
        check_in=date(2024, 6, 1),
        check_out=date(2024, 6, 4),
        guests=GuestCount(adults=2, children=0),
    )
    card = listing_card(hotel)
    print(f"{card['name']} ({card['address']}): from {card['price_label']}")

    rooms = available_rooms(ROOM_TYPES, details.guests)

    machine = CheckoutStateMachine(submitter=MockHotelBookingProvider())
    machine.initialize(ReferenceData(hotel=hotel, booking_details=details, available_rooms=rooms))

    print("=== Checkout steps ===")
    room = select_room("deluxe", rooms)
    print("- rooms:", machine.submit_step(StepId.ROOMS, room))

    guest = build_guest_info(first_name="Jane", last_name="Doe", email="jane@example.com", phone="555-123-4567")
    print("- guest-info:", machine.submit_step(StepId.GUEST_INFO, guest))

    print("- preferences:", machine.submit_step(StepId.PREFERENCES, build_preferences([])))

    payment = build_payment_info("visa", machine.current_snapshot().accumulator.guest_info)
    print("- payment:", machine.submit_step(StepId.PAYMENT, payment))

    print("\n=== Review ===")
    summary = machine.booking_summary()
    print(f"{summary.hotel.name}: {summary.room.name} x {summary.dates.nights} nights")
    print("Room total:", format_currency(summary.pricing.room_total))
    print("Taxes:", format_currency(summary.pricing.taxes))
    print("Fees:", format_currency(summary.pricing.fees))
    print(confirmation_message(summary))

    print("\n=== Confirm ===")
    outcome = machine.finalize()
    if outcome.ok:
        booking = outcome.booking
        print(f"Booking {booking.reference_id}: status={booking.status}, confirmed_id={booking.confirmed_id}")
    else:
        print("Booking failed:", outcome.error)
    return outcome


if __name__ == "__main__":
    main()
