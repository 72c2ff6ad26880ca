"""
Unit tests for booking creation, listing and cancellation.
"""
import threading
import pytest
from dataclasses import replace
from datetime import datetime

from src.api.services.container import build_services
from src.utils.exceptions import (
    ConflictError, ForbiddenError, NotFoundError, UnauthenticatedError, ValidationError
)


class TestCreateBooking:
    """Test cases for the booking creator."""

    def test_confirmed_with_total(self, services):
        booking = services.booking_service.create_booking("user-3", "listing-2", "2025-03-01", "2025-03-04", 2)
        assert booking["status"] == "confirmed"
        assert booking["total_price"] == 540
        assert booking["host_id"] == "user-1"
        assert booking["guest_id"] == "user-3"
        assert booking["check_in"] == "2025-03-01"
        assert services.repositories.bookings.get(booking["id"]) is not None

    def test_overlap_is_conflict(self, services):
        with pytest.raises(ConflictError) as exc_info:
            services.booking_service.create_booking("user-2", "listing-1", "2024-07-04", "2024-07-08", 2)
        assert exc_info.value.message == "Listing not available for selected dates"
        assert exc_info.value.details["blocked_dates"] == [{"check_in": "2024-07-01", "check_out": "2024-07-05"}]

    def test_pending_booking_blocks(self, services):
        with pytest.raises(ConflictError):
            services.booking_service.create_booking("user-1", "listing-3", "2024-12-26", "2024-12-28", 1)

    def test_back_to_back_allowed(self, services):
        booking = services.booking_service.create_booking("user-2", "listing-1", "2024-07-05", "2024-07-08", 2)
        assert booking["status"] == "confirmed"

    def test_back_to_back_conflicts_when_inclusive(self, config):
        services = build_services(config=replace(config, overlap_policy="inclusive"), seed=True)
        with pytest.raises(ConflictError):
            services.booking_service.create_booking("user-2", "listing-1", "2024-07-05", "2024-07-08", 2)

    def test_cancelled_dates_are_bookable(self, services):
        booking = services.booking_service.create_booking("user-3", "listing-2", "2024-05-10", "2024-05-12", 1)
        assert booking["total_price"] == 360

    def test_requires_login(self, services):
        with pytest.raises(UnauthenticatedError):
            services.booking_service.create_booking(None, "listing-2", "2025-03-01", "2025-03-04", 1)

    def test_unknown_listing(self, services):
        with pytest.raises(NotFoundError):
            services.booking_service.create_booking("user-3", "listing-404", "2025-03-01", "2025-03-04", 1)

    @pytest.mark.parametrize("check_in,check_out", [
        ("2025-03-04", "2025-03-01"),
        ("2025-03-01", "2025-03-01"),
    ])
    def test_invalid_dates(self, services, check_in, check_out):
        with pytest.raises(ValidationError):
            services.booking_service.create_booking("user-3", "listing-2", check_in, check_out, 1)

    def test_same_day_datetimes_rejected(self, services):
        with pytest.raises(ValidationError):
            services.booking_service.create_booking(
                "user-3", "listing-2", datetime(2025, 3, 1, 10), datetime(2025, 3, 1, 20), 1
            )
        assert services.repositories.bookings.find(listing_id="listing-2", check_in="2025-03-01") == []

    def test_datetimes_priced_on_stored_dates(self, services):
        booking = services.booking_service.create_booking(
            "user-3", "listing-2", datetime(2025, 3, 1, 10), datetime(2025, 3, 3, 20), 1
        )
        assert booking["check_in"] == "2025-03-01"
        assert booking["check_out"] == "2025-03-03"
        assert booking["total_price"] == 360

    def test_malformed_date(self, services):
        with pytest.raises(ValidationError) as exc_info:
            services.booking_service.create_booking("user-3", "listing-2", "2025-02-30", "2025-03-04", 1)
        assert exc_info.value.message == "Invalid date"

    @pytest.mark.parametrize("guests", [0, -1, 4])
    def test_guest_count(self, services, guests):
        with pytest.raises(ValidationError):
            services.booking_service.create_booking("user-3", "listing-2", "2025-03-01", "2025-03-04", guests)

    def test_unavailable_listing(self, services):
        services.listing_service.update_listing("user-1", "listing-2", {"is_available": False})
        with pytest.raises(ConflictError):
            services.booking_service.create_booking("user-3", "listing-2", "2025-03-01", "2025-03-04", 1)

    def test_concurrent_requests_book_once(self, services):
        results = []
        barrier = threading.Barrier(8)

        def attempt(i):
            barrier.wait()
            try:
                services.booking_service.create_booking(f"guest-{i}", "listing-4", "2025-06-01", "2025-06-05", 1)
                results.append("ok")
            except ConflictError:
                results.append("conflict")

        threads = [threading.Thread(target=attempt, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count("ok") == 1
        assert results.count("conflict") == 7


class TestBookingQueries:

    def test_user_bookings_include_listing(self, services):
        bookings = services.booking_service.get_user_bookings("user-3")
        assert {b["id"] for b in bookings} == {"booking-1", "booking-2"}
        assert all(b["listing"]["title"] for b in bookings)

    def test_host_bookings(self, services):
        bookings = services.booking_service.get_host_bookings("user-1")
        assert {b["id"] for b in bookings} == {"booking-1", "booking-3"}

    def test_deleted_listing_summary_is_none(self, services):
        services.listing_service.delete_listing("user-1", "listing-1")
        booking = services.booking_service.get_booking("user-3", "booking-1")
        assert booking["listing"] is None

    def test_queries_require_login(self, services):
        with pytest.raises(UnauthenticatedError):
            services.booking_service.get_user_bookings(None)
        with pytest.raises(UnauthenticatedError):
            services.booking_service.get_host_bookings("")

    def test_get_booking_as_guest_and_host(self, services):
        assert services.booking_service.get_booking("user-3", "booking-1")["id"] == "booking-1"
        assert services.booking_service.get_booking("user-1", "booking-1")["id"] == "booking-1"

    def test_get_booking_forbidden(self, services):
        with pytest.raises(ForbiddenError):
            services.booking_service.get_booking("user-2", "booking-1")

    def test_get_booking_not_found(self, services):
        with pytest.raises(NotFoundError):
            services.booking_service.get_booking("user-3", "booking-404")


class TestCancelBooking:

    def test_cancel_frees_dates(self, services):
        cancelled = services.booking_service.cancel_booking("user-3", "booking-1")
        assert cancelled["status"] == "cancelled"
        booking = services.booking_service.create_booking("user-2", "listing-1", "2024-07-02", "2024-07-04", 2)
        assert booking["status"] == "confirmed"

    def test_host_can_cancel(self, services):
        assert services.booking_service.cancel_booking("user-2", "booking-2")["status"] == "cancelled"

    def test_cancel_twice_is_noop(self, services):
        first = services.booking_service.cancel_booking("user-2", "booking-3")
        assert first["status"] == "cancelled"

    def test_completed_cannot_be_cancelled(self, services):
        services.repositories.bookings.update("booking-1", {"status": "completed"})
        with pytest.raises(ConflictError):
            services.booking_service.cancel_booking("user-3", "booking-1")

    def test_cancel_forbidden(self, services):
        with pytest.raises(ForbiddenError):
            services.booking_service.cancel_booking("user-2", "booking-1")
