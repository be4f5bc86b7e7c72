from fastapi import APIRouter, Depends, HTTPException, Request, status
from typing import List
from parkspot.schemas.booking_schema import (
    BookingCreate,
    BookingCancel,
    BookingResponse,
    BookingMessageResponse,
)
from parkspot.services.booking_allocator import BookingAllocator
from parkspot.logger import get_logger

booking_router = APIRouter()
logger = get_logger(__name__)


def get_allocator(request: Request) -> BookingAllocator:
    return request.app.state.allocator


@booking_router.post(
    "/bookings", response_model=BookingMessageResponse, status_code=status.HTTP_201_CREATED
)
def create_booking(
    booking: BookingCreate,
    allocator: BookingAllocator = Depends(get_allocator),
):
    """Create a new booking for a parking property"""
    try:
        logger.info(
            f"User {booking.user_id} creating booking for property {booking.property_id}"
        )
        created = allocator.create_booking(
            booking.user_id, booking.property_id, booking.start_time, booking.end_time
        )
        return BookingMessageResponse(
            message="Booking created successfully", booking=created
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating booking: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while creating booking",
        )


@booking_router.put(
    "/bookings/{booking_id}/cancel",
    response_model=BookingMessageResponse,
    status_code=status.HTTP_200_OK,
)
def cancel_booking(
    booking_id: str,
    body: BookingCancel,
    allocator: BookingAllocator = Depends(get_allocator),
):
    """Cancel a booking (only the user who made it)"""
    try:
        logger.info(f"User {body.user_id} cancelling booking: {booking_id}")
        cancelled = allocator.cancel_booking(booking_id, body.user_id)
        return BookingMessageResponse(
            message="Booking cancelled successfully", booking=cancelled
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error cancelling booking {booking_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while cancelling booking",
        )


@booking_router.get(
    "/profile/{user_id}/bookings",
    response_model=List[BookingResponse],
    status_code=status.HTTP_200_OK,
)
def get_user_bookings(
    user_id: str,
    allocator: BookingAllocator = Depends(get_allocator),
):
    """Get every booking made by a user, newest first"""
    try:
        logger.info(f"Fetching bookings for user {user_id}")
        return allocator.get_user_bookings(user_id)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching bookings for user {user_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while fetching bookings",
        )
