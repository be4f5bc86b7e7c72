from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal
from parkspot.models.booking_model import Booking, BookingStatus


class BookingCreate(BaseModel):
    user_id: str = Field(..., min_length=1, description="ID of the user making the booking")
    property_id: str = Field(..., min_length=1, description="ID of the parking property being booked")
    start_time: datetime = Field(..., description="Booking start time")
    end_time: datetime = Field(..., description="Booking end time")

    @field_validator("user_id", "property_id", mode="before")
    @classmethod
    def ids_as_strings(cls, v):
        # Clients may send numeric ids
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class BookingCancel(BaseModel):
    user_id: str = Field(..., min_length=1, description="ID of the user who made the booking")

    @field_validator("user_id", mode="before")
    @classmethod
    def id_as_string(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class BookingResponse(BaseModel):
    id: str
    user_id: str
    property_id: str
    title: str
    address: str
    start_time: datetime
    end_time: datetime
    total_cost: Decimal
    hourly_rate: Decimal
    status: BookingStatus
    owner_name: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("total_cost", "hourly_rate")
    def serialize_money(self, value: Decimal) -> float:
        return float(value)

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingResponse":
        """Flatten a booking with its property and owner for display."""
        parking = booking.property
        owner = parking.owner if parking is not None else None
        return cls(
            id=booking.id,
            user_id=booking.user_id,
            property_id=booking.property_id,
            title=(parking.spot_title if parking is not None else None) or "Parking Space",
            address=parking.address if parking is not None else "",
            start_time=booking.start_time,
            end_time=booking.end_time,
            total_cost=booking.total_cost,
            hourly_rate=parking.hourly_rate if parking is not None else Decimal("0"),
            status=booking.status,
            owner_name=owner.full_name if owner is not None else "",
            created_at=booking.created_at,
        )


class BookingMessageResponse(BaseModel):
    message: str
    booking: BookingResponse
