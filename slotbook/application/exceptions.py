class BookingEngineError(RuntimeError):
    """Base class for booking engine failures."""
    pass


class EventLookupError(BookingEngineError):
    """Raised when event metadata cannot be fetched for a slug."""
    pass


class BookingSubmissionError(BookingEngineError):
    """Raised when the booking-creation call fails (transport error or non-2xx)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class GuestDetailsError(BookingEngineError, ValueError):
    """Raised when guest name or email is missing or malformed."""
    pass


class ProviderAuthError(BookingEngineError):
    """Raised when the provider credential exchange fails."""
    pass


class ProviderApiError(BookingEngineError):
    """Raised when the provider answers a create-event call with a non-2xx status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InvalidTransitionError(BookingEngineError):
    """Raised when a workflow action is not allowed in the current state."""
    pass
