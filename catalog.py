"""
Static reference data for checkout: room catalog, stay preferences and the
user's saved payment methods. Swap these for a provider feed in production.
"""

import random
from typing import Dict, List, Optional

from booking_schemas import PaymentMethod, PreferenceOption, Room, RoomAmenity

NEW_CARD = "new-card"

ROOM_TYPES: List[Room] = [
    Room(
        id="standard",
        name="Standard Room",
        description="Comfortable room with essential amenities",
        price=100,
        size="28m²",
        max_occupancy=2,
        bed_type="1 Queen Bed",
        images=[
            "https://s3-media4.fl.yelpcdn.com/bphoto/mlQBkVlzHnYEG0Ockbw6gA/o.jpg",
            "https://s3-media1.fl.yelpcdn.com/bphoto/_BPj03zxONFflKrkzgdx0Q/o.jpg",
        ],
        amenities=[
            RoomAmenity(icon="wifi", name="Free WiFi"),
            RoomAmenity(icon="tv", name="Smart TV"),
            RoomAmenity(icon="thermometer", name="AC"),
            RoomAmenity(icon="business", name="Work Desk"),
        ],
        features=["City View", "Daily Housekeeping", "Free Toiletries"],
        cancellation_policy="Free cancellation up to 24 hours before check-in",
    ),
    Room(
        id="deluxe",
        name="Deluxe Room",
        description="Spacious room with premium amenities and city view",
        price=150,
        size="35m²",
        max_occupancy=3,
        bed_type="1 King Bed",
        images=[
            "https://s3-media1.fl.yelpcdn.com/bphoto/4cy6jOUCmm_5g-9WYk_HJg/o.jpg",
            "https://s3-media2.fl.yelpcdn.com/bphoto/2gxkuYgoXWPoCsD0sPXDXw/o.jpg",
        ],
        amenities=[
            RoomAmenity(icon="wifi", name="Free WiFi"),
            RoomAmenity(icon="tv", name="Smart TV"),
            RoomAmenity(icon="thermometer", name="AC"),
            RoomAmenity(icon="business", name="Work Desk"),
            RoomAmenity(icon="cafe", name="Coffee Maker"),
            RoomAmenity(icon="wine", name="Mini Bar"),
        ],
        features=["City View", "Daily Housekeeping", "Premium Toiletries", "Bathrobe & Slippers"],
        cancellation_policy="Free cancellation up to 24 hours before check-in",
    ),
    Room(
        id="suite",
        name="Executive Suite",
        description="Luxury suite with separate living area and premium services",
        price=250,
        size="48m²",
        max_occupancy=4,
        bed_type="1 King Bed + Sofa Bed",
        images=[
            "https://s3-media3.fl.yelpcdn.com/bphoto/fIFd2Kf9RsW16m3MKQiNqw/o.jpg",
            "https://s3-media2.fl.yelpcdn.com/bphoto/xfFEmjstKCCGMEqeiMNo7A/o.jpg",
        ],
        amenities=[
            RoomAmenity(icon="wifi", name="Free WiFi"),
            RoomAmenity(icon="tv", name="Smart TV"),
            RoomAmenity(icon="thermometer", name="AC"),
            RoomAmenity(icon="business", name="Work Desk"),
            RoomAmenity(icon="cafe", name="Coffee Maker"),
            RoomAmenity(icon="wine", name="Mini Bar"),
            RoomAmenity(icon="restaurant", name="Room Service"),
            RoomAmenity(icon="shirt", name="Iron"),
        ],
        features=[
            "City View",
            "Daily Housekeeping",
            "Premium Toiletries",
            "Bathrobe & Slippers",
            "Separate Living Area",
            "Executive Lounge Access",
        ],
        cancellation_policy="Free cancellation up to 48 hours before check-in",
    ),
]

PREFERENCES: List[PreferenceOption] = [
    PreferenceOption(id="early-checkin", icon="time", title="Early Check-in",
                     description="Subject to availability"),
    PreferenceOption(id="late-checkout", icon="time-outline", title="Late Check-out",
                     description="Subject to availability"),
    PreferenceOption(id="high-floor", icon="business", title="High Floor",
                     description="Room on higher floors"),
    PreferenceOption(id="quiet-room", icon="moon", title="Quiet Room",
                     description="Away from elevator and street noise"),
    PreferenceOption(id="airport-transfer", icon="car", title="Airport Transfer",
                     description="Additional charges apply"),
]

PAYMENT_METHODS: List[PaymentMethod] = [
    PaymentMethod(id="visa", name="Visa", icon="🏦", last4="4242"),
    PaymentMethod(id="mastercard", name="Mastercard", icon="💳", last4="8888"),
    PaymentMethod(id=NEW_CARD, name="Add New Card", icon="➕"),
]

# Amenities shown on the hotel details page
HOTEL_AMENITIES: List[RoomAmenity] = [
    RoomAmenity(icon=icon, name=name)
    for icon, name in [
        ("car", "Parking"),
        ("wifi", "Free Wifi"),
        ("shirt", "Laundry"),
        ("thermometer", "AC"),
        ("wine", "Bar"),
        ("restaurant", "Restaurant"),
        ("fitness", "Gym"),
        ("water", "Pool"),
        ("bed", "King Bed"),
        ("tv", "Smart TV"),
        ("cafe", "Breakfast"),
        ("business", "Business"),
        ("snow", "Mini Bar"),
        ("key", "24/7 Access"),
    ]
]


def preference_index() -> Dict[str, PreferenceOption]:
    return {p.id: p for p in PREFERENCES}


def saved_payment_methods() -> List[PaymentMethod]:
    return [m for m in PAYMENT_METHODS if m.id != NEW_CARD]


def saved_method_ids() -> List[str]:
    return [m.id for m in saved_payment_methods()]


def find_payment_method(method_id: str) -> Optional[PaymentMethod]:
    return next((m for m in PAYMENT_METHODS if m.id == method_id), None)


def display_amenities(amenities: List[RoomAmenity] = None, rng: random.Random = None) -> List[RoomAmenity]:
    """
    Pick a shuffled subset of 5-8 amenities for the hotel details page.
    Pass a seeded random.Random to get a stable selection.
    """
    amenities = list(HOTEL_AMENITIES if amenities is None else amenities)
    rng = rng or random.Random()
    rng.shuffle(amenities)
    return amenities[:rng.randint(5, 8)]
