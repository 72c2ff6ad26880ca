"""
Marketplace client interface shared by the HTTP and in-process backends.
"""
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from ..utils.models import AvailabilityResult, PriceQuote, SearchFilters

DateLike = Union[date, datetime, str]
Filters = Union[SearchFilters, Dict[str, Any], None]


class MarketplaceClient(ABC):
    """Abstract base class for marketplace backends.

    Both backends return the same shapes: plain dictionaries for listings,
    bookings, users and sessions, and dataclasses for availability and quotes.
    Failures raise the ``MarketplaceError`` subclass matching the category.
    """

    # Listings
    @abstractmethod
    def search_listings(self, filters: Filters = None, page: int = 1, limit: Optional[int] = None) -> Dict[str, Any]:
        """Return ``{"listings": [...], "pagination": {...}}``."""
        pass

    @abstractmethod
    def get_listing(self, listing_id: str) -> Dict[str, Any]:
        """Return ``{"listing": {...}, "reviews": [...]}``."""
        pass

    @abstractmethod
    def create_listing(self, data: Dict[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def update_listing(self, listing_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def delete_listing(self, listing_id: str) -> None:
        pass

    @abstractmethod
    def get_availability(self, listing_id: str, start_date: DateLike, end_date: DateLike) -> AvailabilityResult:
        pass

    @abstractmethod
    def get_quote(self, listing_id: str, check_in: DateLike, check_out: DateLike) -> PriceQuote:
        pass

    # Bookings
    @abstractmethod
    def create_booking(self, listing_id: str, check_in: DateLike, check_out: DateLike, guests: int = 1) -> Dict[str, Any]:
        pass

    @abstractmethod
    def get_user_bookings(self) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def get_host_bookings(self) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def get_booking(self, booking_id: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    def cancel_booking(self, booking_id: str) -> Dict[str, Any]:
        pass

    # Auth
    @abstractmethod
    def register(self, email: str, password: str, first_name: str, last_name: str) -> Dict[str, Any]:
        """Create an account and start a session; returns ``{"token", "user"}``."""
        pass

    @abstractmethod
    def login(self, email: str, password: str) -> Dict[str, Any]:
        """Start a session; returns ``{"token", "user"}``."""
        pass

    @abstractmethod
    def logout(self) -> None:
        pass

    @abstractmethod
    def get_profile(self) -> Dict[str, Any]:
        pass

    @abstractmethod
    def update_profile(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def get_backend_name(self) -> str:
        """Get the backend name."""
        pass


def as_filters(filters: Filters) -> Optional[SearchFilters]:
    if filters is None or isinstance(filters, SearchFilters):
        return filters
    return SearchFilters.from_dict(filters)
