import time

from errors import FinalizationError


class ProviderResponse:
    def __init__(self, success: bool, confirmed_id: str = None, raw: dict = None):
        self.success = success
        self.confirmed_id = confirmed_id
        self.raw = raw or {}


class MockHotelBookingProvider:
    """
    Mock booking backend: accepts a FinalizedBooking and returns a deterministic
    confirmation. Set fail=True to simulate a refused submission, or
    raise_error=True to simulate the backend being unreachable.
    """

    def __init__(self, fail: bool = False, raise_error: bool = False, latency: float = 0.0):
        self.fail = fail
        self.raise_error = raise_error
        self.latency = latency
        self.submitted = []

    def submit(self, booking):
        # Simulate some latency
        if self.latency:
            time.sleep(self.latency)
        if self.raise_error:
            raise FinalizationError(raw={"error": "booking_service_unavailable"})

        payload = booking.payload()
        self.submitted.append(payload)
        if self.fail:
            return ProviderResponse(success=False, raw={"error": "room_unavailable"})

        confirmed_id = f"CONF-HOT-{booking.reference_id}"
        return ProviderResponse(
            success=True,
            confirmed_id=confirmed_id,
            raw={"booking_reference": "BOOK-" + booking.hotel_id, "provider": "mock_hotel"},
        )
