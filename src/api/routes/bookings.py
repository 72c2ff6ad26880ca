"""
Booking API endpoints.
"""
from fastapi import APIRouter, Depends
from ..models import BookingListResponse, BookingResponse, CreateBookingRequest, ErrorResponse
from ..dependencies import get_booking_service, get_current_user_id, internal_error
from ..services.booking_service import BookingService
from ...utils.exceptions import MarketplaceError


router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post(
    "",
    response_model=BookingResponse,
    summary="Create a new booking",
    description="Book a listing for a date range. Overlapping dates are rejected with 409.",
    responses={
        200: {"description": "Booking created successfully"},
        401: {"description": "Not authenticated", "model": ErrorResponse},
        404: {"description": "Listing not found", "model": ErrorResponse},
        409: {"description": "Dates not available", "model": ErrorResponse},
        422: {"description": "Invalid dates or guest count", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def create_booking(
    request: CreateBookingRequest,
    user_id: str = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service)
):
    """
    Create a new booking.

    Args:
        request: Booking creation request
        user_id: Authenticated guest
        booking_service: Injected booking service

    Returns:
        Created booking response
    """
    try:
        booking = booking_service.create_booking(
            user_id,
            request.listing_id,
            request.check_in,
            request.check_out,
            request.guests,
        )
        return BookingResponse(success=True, message="Booking confirmed", data=booking)
    except MarketplaceError:
        raise
    except Exception as e:
        raise internal_error("Failed to create booking", "CREATION_FAILED", e, listing_id=request.listing_id) from e


@router.get(
    "/user",
    response_model=BookingListResponse,
    summary="Get the current user's trips",
    responses={
        401: {"description": "Not authenticated", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def get_user_bookings(
    user_id: str = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service)
):
    try:
        bookings = booking_service.get_user_bookings(user_id)
        return BookingListResponse(success=True, message=f"Retrieved {len(bookings)} bookings", data=bookings)
    except MarketplaceError:
        raise
    except Exception as e:
        raise internal_error("Failed to retrieve bookings", "FETCH_FAILED", e) from e


@router.get(
    "/host",
    response_model=BookingListResponse,
    summary="Get bookings on the current user's listings",
    responses={
        401: {"description": "Not authenticated", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def get_host_bookings(
    user_id: str = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service)
):
    try:
        bookings = booking_service.get_host_bookings(user_id)
        return BookingListResponse(success=True, message=f"Retrieved {len(bookings)} bookings", data=bookings)
    except MarketplaceError:
        raise
    except Exception as e:
        raise internal_error("Failed to retrieve bookings", "FETCH_FAILED", e) from e


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Get a booking",
    responses={
        401: {"description": "Not authenticated", "model": ErrorResponse},
        403: {"description": "Not the guest or host", "model": ErrorResponse},
        404: {"description": "Booking not found", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def get_booking(
    booking_id: str,
    user_id: str = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service)
):
    try:
        booking = booking_service.get_booking(user_id, booking_id)
        return BookingResponse(success=True, message="Booking retrieved successfully", data=booking)
    except MarketplaceError:
        raise
    except Exception as e:
        raise internal_error("Failed to retrieve booking", "FETCH_FAILED", e) from e


@router.put(
    "/{booking_id}/cancel",
    response_model=BookingResponse,
    summary="Cancel a booking",
    description="Cancel as guest or host. The dates become bookable again.",
    responses={
        401: {"description": "Not authenticated", "model": ErrorResponse},
        403: {"description": "Not the guest or host", "model": ErrorResponse},
        404: {"description": "Booking not found", "model": ErrorResponse},
        409: {"description": "Booking already completed", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def cancel_booking(
    booking_id: str,
    user_id: str = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service)
):
    try:
        booking = booking_service.cancel_booking(user_id, booking_id)
        return BookingResponse(success=True, message="Booking cancelled", data=booking)
    except MarketplaceError:
        raise
    except Exception as e:
        raise internal_error("Failed to cancel booking", "CANCEL_FAILED", e) from e
