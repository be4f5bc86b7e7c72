from sqlalchemy.orm import Session, joinedload
from typing import Iterable, List, Optional
from datetime import datetime
from parkspot.models.booking_model import ACTIVE_STATUSES, Booking, BookingStatus
from parkspot.models.property_model import ParkingProperty
from parkspot.errors import InvalidStatusError
from parkspot.utils.intervals import overlap_clause
from parkspot.logger import get_logger

logger = get_logger(__name__)


def coerce_status(value) -> BookingStatus:
    """Map a raw value onto the closed status enum, rejecting anything else."""
    try:
        return BookingStatus(value)
    except ValueError:
        raise InvalidStatusError(f"Unknown booking status: {value!r}")


class BookingStore:
    @staticmethod
    def find_overlapping(
            db: Session,
            property_id: str,
            start_time: datetime,
            end_time: datetime,
            statuses: Iterable = ACTIVE_STATUSES,
    ) -> List[Booking]:
        """Bookings on the property whose interval intersects [start_time, end_time)"""
        status_values = [coerce_status(s) for s in statuses]
        return (
            db.query(Booking)
            .filter(
                Booking.property_id == str(property_id),
                Booking.status.in_(status_values),
                overlap_clause(Booking.start_time, Booking.end_time, start_time, end_time),
            )
            .order_by(Booking.start_time)
            .all()
        )

    @staticmethod
    def insert(db: Session, booking: Booking) -> Booking:
        """Persist a new booking and flush so its id is assigned"""
        db.add(booking)
        db.flush()
        db.refresh(booking)
        logger.debug(f"Booking row inserted: {booking.id}")
        return booking

    @staticmethod
    def find_by_id(db: Session, booking_id: str) -> Optional[Booking]:
        return (
            db.query(Booking)
            .options(joinedload(Booking.property).joinedload(ParkingProperty.owner))
            .filter(Booking.id == str(booking_id))
            .first()
        )

    @staticmethod
    def find_by_user(db: Session, user_id: str) -> List[Booking]:
        """Get all bookings made by a user, newest first"""
        return (
            db.query(Booking)
            .options(joinedload(Booking.property).joinedload(ParkingProperty.owner))
            .filter(Booking.user_id == str(user_id))
            .order_by(Booking.created_at.desc(), Booking.start_time.desc())
            .all()
        )

    @staticmethod
    def update_status(db: Session, booking_id: str, status) -> bool:
        """Set a booking's status; returns False when no row was updated"""
        new_status = coerce_status(status)
        booking = db.query(Booking).filter(Booking.id == str(booking_id)).first()
        if not booking:
            return False
        booking.status = new_status
        db.flush()
        logger.debug(f"Booking {booking_id} status set to {new_status.value}")
        return True


booking_store = BookingStore()
