from datetime import date, datetime, timezone
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase input, dumps camelCase with by_alias=True."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StepId(str, Enum):
    ROOMS = "rooms"
    GUEST_INFO = "guest-info"
    PREFERENCES = "preferences"
    PAYMENT = "payment"
    REVIEW = "review"

    @property
    def position(self) -> int:
        return STEP_ORDER.index(self)

    @property
    def label(self) -> str:
        return STEP_TITLES[self][0]

    @property
    def short_label(self) -> str:
        return STEP_TITLES[self][1]


STEP_ORDER: List[StepId] = [
    StepId.ROOMS,
    StepId.GUEST_INFO,
    StepId.PREFERENCES,
    StepId.PAYMENT,
    StepId.REVIEW,
]

STEP_TITLES: Dict[StepId, tuple] = {
    StepId.ROOMS: ("Select Room", "Room"),
    StepId.GUEST_INFO: ("Guest Details", "Guest"),
    StepId.PREFERENCES: ("Preferences", "Prefs"),
    StepId.PAYMENT: ("Payment", "Pay"),
    StepId.REVIEW: ("Review", "Review"),
}


# --- Reference data ---

class RoomAmenity(CamelModel):
    icon: str
    name: str


class Room(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str
    description: str = ""
    price: float = Field(gt=0, description="Per-night rate")
    size: str = ""
    max_occupancy: int = Field(ge=1)
    bed_type: str = ""
    images: List[str] = Field(default_factory=list)
    amenities: List[RoomAmenity] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    cancellation_policy: str = ""


class PreferenceOption(CamelModel):
    id: str
    icon: str
    title: str
    description: str


class PaymentMethod(CamelModel):
    id: str
    name: str
    icon: str
    last4: Optional[str] = None


class Category(CamelModel):
    alias: Optional[str] = None
    title: str


class Coordinates(CamelModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class HotelLocation(CamelModel):
    address1: Optional[str] = ""
    city: Optional[str] = ""
    state: Optional[str] = ""
    zip_code: Optional[str] = ""


class HotelDetails(CamelModel):
    """A listing record as returned by the business-search API."""
    id: str
    name: str
    image_url: Optional[str] = ""
    location: HotelLocation = Field(default_factory=HotelLocation)
    price: Optional[str] = None      # price tier, e.g. "$$"
    rating: float = 0.0
    review_count: int = 0
    categories: List[Category] = Field(default_factory=list)
    coordinates: Optional[Coordinates] = None
    photos: List[str] = Field(default_factory=list)


class GuestCount(CamelModel):
    adults: int = Field(default=1, ge=1)
    children: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.adults + self.children


class BookingDetails(CamelModel):
    check_in: date
    check_out: date
    guests: GuestCount = Field(default_factory=GuestCount)

    @model_validator(mode="after")
    def check_stay_window(self) -> "BookingDetails":
        if self.check_out <= self.check_in:
            raise ValueError("Check-out date must be after check-in date")
        return self

    @computed_field
    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days


class ReferenceData(CamelModel):
    hotel: HotelDetails
    booking_details: BookingDetails
    available_rooms: List[Room] = Field(default_factory=list)


# --- Step payloads ---

class GuestInfo(CamelModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    special_requests: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class BookingPreferences(CamelModel):
    preferences: List[str] = Field(default_factory=list)
    special_requests: Optional[str] = None

    @field_validator("preferences")
    @classmethod
    def collapse_duplicates(cls, v: List[str]) -> List[str]:
        return list(dict.fromkeys(v))


class CardDetails(CamelModel):
    number: str = ""
    expiry: str = ""   # MM/YY
    cvv: str = ""
    name: str = ""
    last4: Optional[str] = None


class BillingInfo(CamelModel):
    first_name: str
    last_name: str
    email: str
    phone: str


class PaymentInfo(CamelModel):
    payment_method: str = ""     # saved method id or "new-card"
    card_details: Optional[CardDetails] = None
    billing_info: Optional[BillingInfo] = None


class ReviewConfirmation(CamelModel):
    confirmed: bool = True


STEP_PAYLOAD_TYPES = {
    StepId.ROOMS: Room,
    StepId.GUEST_INFO: GuestInfo,
    StepId.PREFERENCES: BookingPreferences,
    StepId.PAYMENT: PaymentInfo,
    StepId.REVIEW: ReviewConfirmation,
}


class BookingData(CamelModel):
    """Partial booking data collected across the checkout steps."""
    rooms: Optional[Room] = None
    guest_info: Optional[GuestInfo] = None
    preferences: Optional[BookingPreferences] = None
    payment_method: Optional[PaymentInfo] = None


# --- Derived / results ---

class Costs(CamelModel):
    room_total: float
    taxes: float
    fees: float
    total: float


class SummaryHotel(CamelModel):
    name: str
    address: str
    image: str


class SummaryDates(CamelModel):
    check_in: date
    check_out: date
    nights: int


class SummaryRoom(CamelModel):
    name: str
    price: float


class BookingSummary(CamelModel):
    hotel: SummaryHotel
    dates: SummaryDates
    guests: GuestCount
    room: SummaryRoom
    pricing: Costs


class StepResult(CamelModel):
    accepted: bool
    error: Optional[str] = None
    step: Optional[StepId] = None     # pointer after the operation


class CheckoutSnapshot(CamelModel):
    step: StepId
    accumulator: BookingData
    booking_details: BookingDetails
    completed_steps: List[StepId] = Field(default_factory=list)
    costs: Costs


class FinalizedBooking(CamelModel):
    reference_id: str
    hotel_id: str
    check_in: date
    check_out: date
    guests: GuestCount
    nights: int
    rooms: Room
    guest_info: GuestInfo
    preferences: BookingPreferences
    payment_method: PaymentInfo
    status: Literal["pending", "confirmed", "failed"] = "pending"
    confirmed_id: Optional[str] = None   # provider booking reference
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    meta: dict = Field(default_factory=dict)  # raw provider response

    def payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class FinalizationResult(CamelModel):
    booking: Optional[FinalizedBooking] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.booking is not None and self.error is None
