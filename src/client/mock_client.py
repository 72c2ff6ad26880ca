"""
In-process marketplace backend for local development and tests.
"""
import time
from typing import Any, Callable, Dict, List, Optional

from .base import DateLike, Filters, MarketplaceClient, as_filters
from ..api.services.container import ServiceContainer, build_services
from ..utils.exceptions import UnauthenticatedError
from ..utils.logger import get_logger
from config.settings import app_config


class MockMarketplaceClient(MarketplaceClient):
    """Calls the service layer directly over seeded in-memory storage.

    The logged-in user is kept on the client instead of a token. Each call
    waits ``latency_ms`` through the injected ``sleep`` to mimic the network.
    """

    def __init__(
        self,
        services: Optional[ServiceContainer] = None,
        latency_ms: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
        config=app_config,
    ):
        self.services = services or build_services(config=config, seed=True)
        self.latency_ms = config.mock_latency_ms if latency_ms is None else latency_ms
        self._sleep = sleep
        self.user_id: Optional[str] = None
        self.logger = get_logger("mock_client")

    def _delay(self) -> None:
        if self.latency_ms > 0:
            self._sleep(self.latency_ms / 1000)

    # Listings
    def search_listings(self, filters: Filters = None, page: int = 1, limit: Optional[int] = None) -> Dict[str, Any]:
        self._delay()
        return self.services.listing_service.search_listings(as_filters(filters), page=page, limit=limit)

    def get_listing(self, listing_id: str) -> Dict[str, Any]:
        self._delay()
        return self.services.listing_service.get_listing(listing_id)

    def create_listing(self, data: Dict[str, Any]) -> Dict[str, Any]:
        self._delay()
        return self.services.listing_service.create_listing(self.user_id, data)

    def update_listing(self, listing_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        self._delay()
        return self.services.listing_service.update_listing(self.user_id, listing_id, changes)

    def delete_listing(self, listing_id: str) -> None:
        self._delay()
        self.services.listing_service.delete_listing(self.user_id, listing_id)

    def get_availability(self, listing_id: str, start_date: DateLike, end_date: DateLike):
        self._delay()
        return self.services.listing_service.get_availability(listing_id, start_date, end_date)

    def get_quote(self, listing_id: str, check_in: DateLike, check_out: DateLike):
        self._delay()
        return self.services.listing_service.get_quote(listing_id, check_in, check_out)

    # Bookings
    def create_booking(self, listing_id: str, check_in: DateLike, check_out: DateLike, guests: int = 1) -> Dict[str, Any]:
        self._delay()
        return self.services.booking_service.create_booking(self.user_id, listing_id, check_in, check_out, guests)

    def get_user_bookings(self) -> List[Dict[str, Any]]:
        self._delay()
        return self.services.booking_service.get_user_bookings(self.user_id)

    def get_host_bookings(self) -> List[Dict[str, Any]]:
        self._delay()
        return self.services.booking_service.get_host_bookings(self.user_id)

    def get_booking(self, booking_id: str) -> Dict[str, Any]:
        self._delay()
        return self.services.booking_service.get_booking(self.user_id, booking_id)

    def cancel_booking(self, booking_id: str) -> Dict[str, Any]:
        self._delay()
        return self.services.booking_service.cancel_booking(self.user_id, booking_id)

    # Auth
    def register(self, email: str, password: str, first_name: str, last_name: str) -> Dict[str, Any]:
        self._delay()
        session = self.services.auth_service.register(email, password, first_name, last_name)
        self.user_id = session["user"]["id"]
        return session

    def login(self, email: str, password: str) -> Dict[str, Any]:
        self._delay()
        session = self.services.auth_service.login(email, password)
        self.user_id = session["user"]["id"]
        self.logger.info("mock_session_started", user_id=self.user_id)
        return session

    def logout(self) -> None:
        self.user_id = None

    def get_profile(self) -> Dict[str, Any]:
        self._delay()
        if not self.user_id:
            raise UnauthenticatedError("Not authenticated")
        return self.services.auth_service.get_profile(self.user_id)

    def update_profile(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        self._delay()
        return self.services.auth_service.update_profile(self.user_id, changes)

    def get_backend_name(self) -> str:
        return "mock"
