from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, List, Optional
from parkspot.config import MIN_BOOKING_HOURS
from parkspot.database import DatabaseClient
from parkspot.errors import (
    BookingNotFoundError,
    ForbiddenError,
    AlreadyCancelledError,
    InvalidIntervalError,
    MissingFieldError,
    OutsideAvailabilityError,
    PastBookingError,
    PropertyNotFoundError,
    SelfBookingForbiddenError,
    SlotConflictError,
    TerminalStateError,
    TooShortError,
)
from parkspot.models.booking_model import ACTIVE_STATUSES, ALLOWED_TRANSITIONS, Booking, BookingStatus
from parkspot.models.property_model import ParkingProperty
from parkspot.schemas.booking_schema import BookingResponse
from parkspot.services.booking_store import BookingStore, booking_store
from parkspot.services.property_directory import PropertyDirectory, property_directory
from parkspot.utils.intervals import duration_hours, parse_timestamp
from parkspot.utils.pricing import compute_total_cost
from parkspot.utils.property_locks import PropertyLockRegistry
from parkspot.logger import get_logger

logger = get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class BookingAllocator:
    """Allocates booking intervals on parking properties.

    Creation runs lookup, ownership check, interval validation, overlap check
    and insert inside one transaction while holding the property's lock, so
    two overlapping requests for the same property can never both succeed.
    The property row is also read ``FOR UPDATE`` so databases with row locks
    serialise competing processes.
    """

    def __init__(
            self,
            client: DatabaseClient,
            directory: Optional[PropertyDirectory] = None,
            store: Optional[BookingStore] = None,
            locks: Optional[PropertyLockRegistry] = None,
            clock: Callable[[], datetime] = utc_now,
            min_duration_hours: Decimal = MIN_BOOKING_HOURS,
    ):
        self.client = client
        self.directory = directory or property_directory
        self.store = store or booking_store
        self.locks = locks or PropertyLockRegistry()
        self.clock = clock
        self.min_duration_hours = Decimal(min_duration_hours)

    def create_booking(self, user_id, property_id, start_time, end_time) -> BookingResponse:
        """Create a confirmed booking or raise the matching BookingError"""
        if any(_is_blank(value) for value in (user_id, property_id, start_time, end_time)):
            raise MissingFieldError()

        start = parse_timestamp(start_time)
        end = parse_timestamp(end_time)
        user_id = str(user_id)
        property_id = str(property_id)

        with self.locks.hold(property_id):
            with self.client.session_scope() as db:
                parking = self.directory.get_property_by_id(db, property_id, for_update=True)
                if not parking:
                    raise PropertyNotFoundError()

                if str(parking.owner_id) == user_id:
                    logger.warning(f"User {user_id} attempted to book own property {property_id}")
                    raise SelfBookingForbiddenError()

                self._validate_interval(parking, start, end)

                if self.store.find_overlapping(db, property_id, start, end, ACTIVE_STATUSES):
                    logger.info(f"Slot conflict on property {property_id} for {start} - {end}")
                    raise SlotConflictError()

                booking = self.store.insert(
                    db,
                    Booking(
                        user_id=user_id,
                        property_id=property_id,
                        start_time=start,
                        end_time=end,
                        total_cost=compute_total_cost(start, end, parking.hourly_rate),
                        status=BookingStatus.confirmed,
                    ),
                )
                result = BookingResponse.from_booking(booking)

        logger.info(f"Booking created: {result.id} by user {user_id} on property {property_id}")
        return result

    def _validate_interval(self, parking: ParkingProperty, start: datetime, end: datetime) -> None:
        if start >= end:
            raise InvalidIntervalError()

        if start < self.clock():
            raise PastBookingError()

        if duration_hours(start, end) < self.min_duration_hours:
            if self.min_duration_hours == 1:
                raise TooShortError()
            raise TooShortError(f"Minimum booking duration is {self.min_duration_hours} hours")

        if parking.starting_date is not None and start < parking.starting_date:
            raise OutsideAvailabilityError()
        if parking.ending_date is not None and end > parking.ending_date:
            raise OutsideAvailabilityError()

    def cancel_booking(self, booking_id, user_id) -> BookingResponse:
        """Cancel a booking on behalf of the user who made it"""
        if _is_blank(booking_id) or _is_blank(user_id):
            raise MissingFieldError("Booking ID and user ID are required")

        with self.client.session_scope() as db:
            booking = self.store.find_by_id(db, booking_id)
            if not booking:
                raise BookingNotFoundError()

            if str(booking.user_id) != str(user_id):
                logger.warning(f"User {user_id} attempted to cancel booking {booking_id} of another user")
                raise ForbiddenError()

            if booking.status == BookingStatus.cancelled:
                raise AlreadyCancelledError()
            if BookingStatus.cancelled not in ALLOWED_TRANSITIONS[booking.status]:
                raise TerminalStateError()

            self.store.update_status(db, booking.id, BookingStatus.cancelled)
            result = BookingResponse.from_booking(booking)

        logger.info(f"Booking cancelled: {booking_id} by user {user_id}")
        return result

    def get_user_bookings(self, user_id) -> List[BookingResponse]:
        """Get all bookings made by a user, newest first"""
        if _is_blank(user_id):
            raise MissingFieldError("User ID is required")

        with self.client.session_scope() as db:
            return [BookingResponse.from_booking(b) for b in self.store.find_by_user(db, user_id)]
