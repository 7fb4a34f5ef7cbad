class CheckoutError(Exception):
    """Base class for checkout failures."""


class StepValidationError(CheckoutError):
    """A step payload failed one of its field rules. Recoverable: fix and resubmit."""

    def __init__(self, message: str, step=None, field: str = None):
        super().__init__(message)
        self.step = step
        self.field = field


class SequenceViolation(CheckoutError):
    """Confirmation or advancement was attempted with prerequisite data missing."""

    def __init__(self, message: str = "Missing required booking information", missing=None):
        super().__init__(message)
        self.missing = list(missing or [])


class ReferenceDataError(CheckoutError):
    """Hotel lookup (or the booking window) could not be resolved; checkout cannot start."""


class FinalizationError(CheckoutError):
    """The booking backend refused or failed the submission."""

    default_message = "Failed to create booking. Please try again."

    def __init__(self, message: str = None, raw: dict = None):
        super().__init__(message or self.default_message)
        self.raw = raw or {}


class AuthError(Exception):
    """Login, sign-up or session lookup failed. Message is user-facing."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code
