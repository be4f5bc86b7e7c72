"""Error taxonomy for booking allocation.

Every error is an ``HTTPException`` so the web layer can let it through
unchanged; ``code`` names the precise condition and ``kind`` groups codes
into the broad categories clients act on.
"""
from typing import Optional
from fastapi import HTTPException, status

VALIDATION = "VALIDATION"
NOT_FOUND = "NOT_FOUND"
FORBIDDEN = "FORBIDDEN"
CONFLICT = "CONFLICT"
STATE = "STATE"


class BookingError(HTTPException):
    code = "BOOKING_ERROR"
    kind = VALIDATION
    http_status = status.HTTP_400_BAD_REQUEST
    message = "Invalid booking request"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(status_code=self.http_status, detail=detail or self.message)


# Validation


class MissingFieldError(BookingError):
    code = "MISSING_FIELD"
    message = "User ID, property ID, start time, and end time are required"


class InvalidTimestampError(BookingError):
    code = "INVALID_TIMESTAMP"
    message = "Start time and end time must be valid timestamps"


class InvalidIntervalError(BookingError):
    code = "INVALID_INTERVAL"
    message = "Start time must be before end time"


class PastBookingError(BookingError):
    code = "PAST_BOOKING"
    message = "Cannot book in the past"


class TooShortError(BookingError):
    code = "TOO_SHORT"
    message = "Minimum booking duration is 1 hour"


class OutsideAvailabilityError(BookingError):
    code = "OUTSIDE_AVAILABILITY"
    message = "Requested time is outside the property's availability window"


class InvalidStatusError(BookingError):
    code = "INVALID_STATUS"
    message = "Unknown booking status"


# Lookup


class PropertyNotFoundError(BookingError):
    code = "PROPERTY_NOT_FOUND"
    kind = NOT_FOUND
    http_status = status.HTTP_404_NOT_FOUND
    message = "Property not found"


class BookingNotFoundError(BookingError):
    code = "NOT_FOUND"
    kind = NOT_FOUND
    http_status = status.HTTP_404_NOT_FOUND
    message = "Booking not found"


# Ownership


class SelfBookingForbiddenError(BookingError):
    code = "SELF_BOOKING_FORBIDDEN"
    kind = FORBIDDEN
    message = "Cannot book your own property"


class ForbiddenError(BookingError):
    code = "FORBIDDEN"
    kind = FORBIDDEN
    http_status = status.HTTP_403_FORBIDDEN
    message = "Not authorized to cancel this booking"


# Allocation and state


class SlotConflictError(BookingError):
    code = "SLOT_CONFLICT"
    kind = CONFLICT
    http_status = status.HTTP_409_CONFLICT
    message = "Property is already booked for the selected time period"


class AlreadyCancelledError(BookingError):
    code = "ALREADY_CANCELLED"
    kind = STATE
    message = "Booking is already cancelled"


class TerminalStateError(BookingError):
    code = "TERMINAL_STATE"
    kind = STATE
    message = "Cannot cancel completed booking"
