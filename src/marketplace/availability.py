"""
Date-range conflict detection for listing bookings.
"""
from datetime import date
from typing import Iterable, List

from ..utils.exceptions import ValidationError
from ..utils.models import AvailabilityResult, Booking


def ranges_overlap(
    existing_start: date,
    existing_end: date,
    start: date,
    end: date,
    inclusive: bool = False,
) -> bool:
    """
    Test whether an existing stay intersects a requested one.

    With ``inclusive=False`` both ranges are half-open ``[check_in, check_out)``,
    so a stay may begin on the day the previous guest leaves. With
    ``inclusive=True`` a shared boundary date also counts as a conflict.
    """
    if inclusive:
        return (
            (start <= existing_start <= end)
            or (start <= existing_end <= end)
            or (existing_start <= start and existing_end >= end)
        )
    return existing_start < end and existing_end > start


def validate_range(start: date, end: date) -> None:
    if start >= end:
        raise ValidationError(
            "Check-out must be after check-in",
            {"check_in": start.isoformat(), "check_out": end.isoformat()},
        )


def find_conflicts(
    bookings: Iterable[Booking],
    listing_id: str,
    start: date,
    end: date,
    inclusive: bool = False,
) -> List[Booking]:
    """Active bookings on the listing that overlap the requested range."""
    return [
        booking for booking in bookings
        if booking.listing_id == listing_id
        and booking.is_active
        and ranges_overlap(booking.check_in, booking.check_out, start, end, inclusive)
    ]


def check_availability(
    bookings: Iterable[Booking],
    listing_id: str,
    start: date,
    end: date,
    inclusive: bool = False,
) -> AvailabilityResult:
    """
    Report whether a listing is free for the range.

    Args:
        bookings: Bookings to scan (any listing, any status)
        listing_id: Listing to check
        start: Requested check-in
        end: Requested check-out
        inclusive: Treat shared boundary dates as conflicts

    Returns:
        AvailabilityResult with the conflicting ranges in ``blocked_dates``
    """
    validate_range(start, end)
    conflicts = find_conflicts(bookings, listing_id, start, end, inclusive)
    return AvailabilityResult(
        available=not conflicts,
        blocked_dates=[
            {"check_in": b.check_in.isoformat(), "check_out": b.check_out.isoformat()}
            for b in conflicts
        ],
    )
