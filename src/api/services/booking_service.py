"""
Booking service for handling booking-related business logic.
"""
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from .listing_service import ListingService
from ...marketplace.availability import find_conflicts
from ...marketplace.pricing import count_nights
from ...storage import Repositories
from ...utils.exceptions import ConflictError, ForbiddenError, NotFoundError, UnauthenticatedError, ValidationError
from ...utils.logger import get_logger
from ...utils.models import Booking, BookingStatus, Listing, parse_date, utcnow_iso
from config.settings import app_config

DateLike = Union[date, datetime, str]


class BookingService:
    """Service for handling booking operations."""

    def __init__(self, repositories: Repositories, listing_service: ListingService, logger=None, config=app_config):
        self.repositories = repositories
        self.listing_service = listing_service
        self.logger = logger or get_logger("booking_service")
        self.config = config

    def create_booking(
        self,
        actor_id: Optional[str],
        listing_id: str,
        check_in: DateLike,
        check_out: DateLike,
        guests: int,
    ) -> Dict[str, Any]:
        """
        Book a listing for a date range.

        The conflict scan and the insert run inside the bookings repository
        transaction, so two overlapping requests cannot both pass the check.

        Args:
            actor_id: Guest making the booking
            listing_id: Listing to book
            check_in: Check-in date
            check_out: Check-out date
            guests: Number of guests

        Returns:
            Created booking as a dictionary

        Raises:
            UnauthenticatedError, ValidationError, NotFoundError, ConflictError
        """
        if not actor_id:
            raise UnauthenticatedError("Not authenticated")

        start, end = parse_date(check_in), parse_date(check_out)
        nights = count_nights(start, end)
        listing = self.listing_service.require_listing(listing_id)

        if not isinstance(guests, int) or guests < 1:
            raise ValidationError("At least one guest is required", {"guests": guests})
        if guests > listing.max_guests:
            raise ValidationError(
                f"This listing hosts at most {listing.max_guests} guests",
                {"guests": guests, "max_guests": listing.max_guests},
            )
        if not listing.is_available:
            raise ConflictError("Listing is not accepting bookings", {"listing_id": listing_id})

        bookings = self.repositories.bookings
        with bookings.transaction():
            existing = [Booking.from_dict(row) for row in bookings.find(listing_id=listing_id)]
            conflicts = find_conflicts(existing, listing_id, start, end, self.config.inclusive_overlap)
            if conflicts:
                self.logger.warning(
                    "booking_conflict",
                    listing_id=listing_id,
                    check_in=start.isoformat(),
                    check_out=end.isoformat(),
                    conflicts=len(conflicts),
                )
                raise ConflictError(
                    "Listing not available for selected dates",
                    {"blocked_dates": [
                        {"check_in": b.check_in.isoformat(), "check_out": b.check_out.isoformat()}
                        for b in conflicts
                    ]},
                )

            now = utcnow_iso()
            row = bookings.insert({
                "listing_id": listing_id,
                "guest_id": actor_id,
                "host_id": listing.host_id,
                "check_in": start.isoformat(),
                "check_out": end.isoformat(),
                "guests": guests,
                "total_price": nights * listing.price,
                "status": BookingStatus.CONFIRMED.value,
                "created_at": now,
                "updated_at": now,
            })

        booking = Booking.from_dict(row)
        self.logger.info(
            "booking_created",
            booking_id=booking.id,
            listing_id=listing_id,
            nights=nights,
            total_price=booking.total_price,
        )
        return booking.to_dict()

    def _with_listing(self, booking: Booking) -> Dict[str, Any]:
        row = self.repositories.listings.get(booking.listing_id)
        return {**booking.to_dict(), "listing": Listing.from_dict(row).summary() if row else None}

    def get_user_bookings(self, actor_id: Optional[str]) -> List[Dict[str, Any]]:
        """Bookings made by the actor as a guest."""
        if not actor_id:
            raise UnauthenticatedError("Not authenticated")
        return [self._with_listing(Booking.from_dict(row)) for row in self.repositories.bookings.find(guest_id=actor_id)]

    def get_host_bookings(self, actor_id: Optional[str]) -> List[Dict[str, Any]]:
        """Bookings on listings the actor hosts."""
        if not actor_id:
            raise UnauthenticatedError("Not authenticated")
        return [self._with_listing(Booking.from_dict(row)) for row in self.repositories.bookings.find(host_id=actor_id)]

    def _require_party(self, actor_id: Optional[str], booking_id: str, action: str) -> Booking:
        if not actor_id:
            raise UnauthenticatedError("Not authenticated")
        row = self.repositories.bookings.get(booking_id)
        if not row:
            raise NotFoundError("Booking not found", {"booking_id": booking_id})
        booking = Booking.from_dict(row)
        if actor_id not in (booking.guest_id, booking.host_id):
            self.logger.warning("booking_forbidden", booking_id=booking_id, actor_id=actor_id, action=action)
            raise ForbiddenError(f"Not authorized to {action} this booking", {"booking_id": booking_id})
        return booking

    def get_booking(self, actor_id: Optional[str], booking_id: str) -> Dict[str, Any]:
        return self._with_listing(self._require_party(actor_id, booking_id, "view"))

    def cancel_booking(self, actor_id: Optional[str], booking_id: str) -> Dict[str, Any]:
        """
        Cancel a booking as its guest or host, freeing the dates.

        Cancelling twice returns the booking unchanged; completed stays
        cannot be cancelled.
        """
        booking = self._require_party(actor_id, booking_id, "cancel")

        if booking.status == BookingStatus.CANCELLED:
            return booking.to_dict()
        if booking.status == BookingStatus.COMPLETED:
            raise ConflictError("Completed bookings cannot be cancelled", {"booking_id": booking_id})

        row = self.repositories.bookings.update(booking_id, {
            "status": BookingStatus.CANCELLED.value,
            "updated_at": utcnow_iso(),
        })
        self.logger.info("booking_cancelled", booking_id=booking_id, actor_id=actor_id)
        return Booking.from_dict(row).to_dict()
