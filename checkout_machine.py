import uuid
from datetime import date
from typing import Callable, List, Optional, Union

from pydantic import ValidationError

from accumulator import STEP_FIELDS, BookingAccumulator
from booking_schemas import (
    STEP_ORDER,
    STEP_PAYLOAD_TYPES,
    BookingDetails,
    BookingSummary,
    CheckoutSnapshot,
    FinalizationResult,
    FinalizedBooking,
    GuestCount,
    ReferenceData,
    Room,
    StepId,
    StepResult,
)
from catalog import ROOM_TYPES
from errors import FinalizationError, ReferenceDataError, SequenceViolation
from logger_config import get_logger
from pricing import compute_costs
from steps.review import build_summary
from steps.room_selection import available_rooms
from validators import MISSING_INFORMATION, STEP_VALIDATORS

logger = get_logger(__name__)

NOT_READY = "Checkout is not ready yet"
SESSION_ENDED = "Checkout session has ended"


def new_reference_id() -> str:
    return f"BOOK-{uuid.uuid4().hex[:12].upper()}"


def first_error_message(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error['msg']}" if location else error["msg"]


class CheckoutStateMachine:
    """
    Multi-step checkout: rooms -> guest-info -> preferences -> payment -> review.

    The machine is "not ready" until initialize() receives resolved reference
    data, and "ended" after a successful finalize() or abandon(). Each session
    owns its BookingAccumulator.

    The optional submitter must implement .submit(booking) -> ProviderResponse
    and may raise FinalizationError (see booking_tools).
    """

    def __init__(self, submitter=None, reference_id_factory: Callable[[], str] = new_reference_id):
        self.submitter = submitter
        self.reference_id_factory = reference_id_factory
        self.reference_data: Optional[ReferenceData] = None
        self.accumulator: Optional[BookingAccumulator] = None
        self.ended = False
        self._pointer = 0

    # ------------------------------------------------------------------
    # state
    # ------------------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        return self.reference_data is not None and not self.ended

    @property
    def current_step(self) -> Optional[StepId]:
        if self.reference_data is None:
            return None
        return STEP_ORDER[self._pointer]

    def initialize(self, reference_data: ReferenceData) -> None:
        if reference_data is None:
            raise ReferenceDataError("Hotel details are not loaded")
        self.reference_data = reference_data
        self.accumulator = BookingAccumulator()
        self.ended = False
        self._pointer = 0
        logger.info(
            "Checkout initialized",
            hotel_id=reference_data.hotel.id,
            nights=reference_data.booking_details.nights,
            rooms=len(reference_data.available_rooms),
        )

    def _blocked(self) -> Optional[str]:
        if self.ended:
            return SESSION_ENDED
        if self.reference_data is None:
            return NOT_READY
        return None

    def _reject(self, message: str) -> StepResult:
        return StepResult(accepted=False, error=message, step=self.current_step)

    # ------------------------------------------------------------------
    # operations
    # ------------------------------------------------------------------

    def submit_step(self, step: Union[StepId, str], payload=None) -> StepResult:
        """
        Validate and record one step's payload.

        A visited step may be resubmitted to edit it; the pointer never moves
        backwards and never advances more than one past the submitted step.
        Submitting review is the confirm action and runs finalize().
        """
        blocked = self._blocked()
        if blocked:
            logger.warning("Step submission rejected", reason=blocked)
            return self._reject(blocked)

        try:
            step = StepId(step)
        except ValueError:
            return self._reject(f"Unknown checkout step '{step}'")

        if step != StepId.REVIEW and step.position > self._pointer:
            logger.warning("Step submitted out of order", step=step.value, current=self.current_step.value)
            return self._reject(f"Please complete {self.current_step.label} first")

        try:
            payload = self._coerce(step, payload)
        except ValidationError as exc:
            message = first_error_message(exc)
            logger.info("Step payload malformed", step=step.value, error=message)
            return self._reject(message)

        result = STEP_VALIDATORS[step](payload, self.accumulator.data)
        if not result.ok:
            if result.reason == MISSING_INFORMATION:
                logger.error(
                    "Sequence violation: confirmation with incomplete booking",
                    missing=[s.value for s in self.accumulator.missing_steps()],
                )
            else:
                logger.info("Step rejected", step=step.value, field=result.field, reason=result.reason)
            return self._reject(result.reason)

        if step == StepId.REVIEW:
            outcome = self.finalize()
            if not outcome.ok:
                return self._reject(outcome.error)
            return StepResult(accepted=True, step=StepId.REVIEW)

        self.accumulator.merge(step, payload)
        self._pointer = max(self._pointer, step.position + 1)
        logger.info("Step accepted", step=step.value, next_step=self.current_step.value)
        return StepResult(accepted=True, step=self.current_step)

    @staticmethod
    def _coerce(step: StepId, payload):
        model = STEP_PAYLOAD_TYPES[step]
        if payload is None:
            # no room means no selection; other steps validate an empty form
            return None if step == StepId.ROOMS else model()
        if isinstance(payload, model):
            return payload
        if step == StepId.REVIEW and isinstance(payload, bool):
            return model(confirmed=payload)
        return model.model_validate(payload)

    def go_back(self) -> bool:
        """Step back once. Returns True when the caller should leave checkout instead."""
        if not self.is_ready or self._pointer == 0:
            logger.info("Leaving checkout", step=self.current_step.value if self.current_step else None)
            return True
        self._pointer -= 1
        logger.info("Moved back", step=self.current_step.value)
        return False

    def jump_to(self, step: Union[StepId, str]) -> StepResult:
        """Jump to a step for editing; never past the first unfilled step."""
        blocked = self._blocked()
        if blocked:
            return self._reject(blocked)

        try:
            target = StepId(step)
        except ValueError:
            return self._reject(f"Unknown checkout step '{step}'")

        if target.position > self._pointer + 1:
            logger.warning("Jump rejected", target=target.value, current=self.current_step.value)
            return self._reject(f"Cannot skip ahead to {target.label}")

        for earlier in STEP_ORDER[:target.position]:
            if not self.accumulator.has(earlier):
                return self._reject(f"Please complete {earlier.label} first")

        self._pointer = target.position
        logger.info("Jumped to step", step=target.value)
        return StepResult(accepted=True, step=target)

    def current_snapshot(self) -> CheckoutSnapshot:
        if self.reference_data is None:
            raise SequenceViolation(NOT_READY)
        data = self.accumulator.snapshot()
        return CheckoutSnapshot(
            step=self.current_step,
            accumulator=data,
            booking_details=self.reference_data.booking_details,
            completed_steps=[step for step in STEP_FIELDS if self.accumulator.has(step)],
            costs=compute_costs(
                data.rooms.price if data.rooms else None,
                self.reference_data.booking_details.nights,
            ),
        )

    def booking_summary(self) -> BookingSummary:
        if self.reference_data is None:
            raise SequenceViolation(NOT_READY)
        return build_summary(self.reference_data, self.accumulator.data)

    def finalize(self) -> FinalizationResult:
        """
        Confirm the booking from review. On a submission failure the session
        stays at review with everything entered so far.
        """
        blocked = self._blocked()
        if blocked:
            return FinalizationResult(error=blocked)

        missing = self.accumulator.missing_steps()
        if missing:
            logger.error(
                "Sequence violation: finalize with incomplete booking",
                missing=[s.value for s in missing],
            )
            return FinalizationResult(error=MISSING_INFORMATION)

        if self.current_step != StepId.REVIEW:
            return FinalizationResult(error="Please review your booking before confirming")

        booking = self._build_booking()

        if self.submitter is not None:
            try:
                resp = self.submitter.submit(booking)
            except FinalizationError as exc:
                logger.error("Booking submission failed", reference_id=booking.reference_id, error=str(exc))
                return FinalizationResult(error=str(exc))

            if not getattr(resp, "success", False):
                logger.error(
                    "Booking submission refused",
                    reference_id=booking.reference_id,
                    raw=getattr(resp, "raw", {}),
                )
                return FinalizationResult(error=FinalizationError.default_message)

            booking.status = "confirmed"
            booking.confirmed_id = resp.confirmed_id
            booking.meta = resp.raw

        logger.info("Booking finalized", reference_id=booking.reference_id, status=booking.status)
        self._end()
        return FinalizationResult(booking=booking)

    def _build_booking(self) -> FinalizedBooking:
        data = self.accumulator.snapshot()
        details = self.reference_data.booking_details
        return FinalizedBooking(
            reference_id=self.reference_id_factory(),
            hotel_id=self.reference_data.hotel.id,
            check_in=details.check_in,
            check_out=details.check_out,
            guests=details.guests,
            nights=details.nights,
            rooms=data.rooms,
            guest_info=data.guest_info,
            preferences=data.preferences,
            payment_method=data.payment_method,
        )

    def abandon(self) -> None:
        """Drop everything entered; nothing was persisted mid-flow."""
        if self.accumulator is not None:
            logger.info("Checkout abandoned", step=self.current_step.value if self.current_step else None)
        self._end()

    def _end(self) -> None:
        if self.accumulator is not None:
            self.accumulator.clear()
        self.ended = True


def prepare_checkout(listing_client, hotel_id: str, check_in: Union[date, str], check_out: Union[date, str],
                     adults: int = 1, children: int = 0, rooms: List[Room] = None,
                     submitter=None) -> CheckoutStateMachine:
    """
    Resolve reference data (hotel lookup, stay window, rooms that fit the
    party) and return an initialized machine. Raises ReferenceDataError when
    checkout cannot start; retry the lookup, not the checkout.
    """
    if not hotel_id:
        raise ReferenceDataError("Missing hotel ID")

    try:
        details = BookingDetails(
            check_in=check_in,
            check_out=check_out,
            guests=GuestCount(adults=adults, children=children),
        )
    except ValidationError as exc:
        raise ReferenceDataError(f"Invalid booking parameters: {first_error_message(exc)}") from exc

    hotel = listing_client.fetch_listing_details(hotel_id)

    machine = CheckoutStateMachine(submitter=submitter)
    machine.initialize(ReferenceData(
        hotel=hotel,
        booking_details=details,
        available_rooms=available_rooms(ROOM_TYPES if rooms is None else rooms, details.guests),
    ))
    return machine
