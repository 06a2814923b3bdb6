class BookingFlowError(ValueError):
    """Base class for rejected booking-flow operations."""
    pass


class InvalidDateError(BookingFlowError):
    """Raised when the selected date precedes today."""
    pass


class NoDateSelectedError(BookingFlowError):
    """Raised when a time is chosen before a date."""
    pass


class StepGateError(BookingFlowError):
    """Raised when a step transition is attempted without its completion condition."""
    pass


class IncompleteBookingError(BookingFlowError):
    """Raised when submission is attempted with missing or invalid fields."""

    def __init__(self, fields: list[str]) -> None:
        super().__init__(f"Booking is incomplete: {', '.join(fields)}")
        self.fields = list(fields)


class AvailabilityUnavailable(RuntimeError):
    """Raised by availability sources on transient failures (network, 5xx, timeouts)."""
    pass


class CatalogUnavailable(RuntimeError):
    """Raised when the service catalog cannot be fetched."""
    pass


class BookingTransportError(RuntimeError):
    """Raised by booking gateways when the create call could not complete."""
    pass


class BookingError(RuntimeError):
    """Booking creation failed remotely; `reason` carries the server message or "unknown"."""

    def __init__(self, reason: str, transport: bool = False) -> None:
        super().__init__(reason)
        self.reason = reason
        self.transport = transport
