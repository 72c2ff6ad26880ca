"""
REST client for the marketplace API.
"""
from typing import Any, Dict, List, Optional

import requests

from .base import DateLike, Filters, MarketplaceClient, as_filters
from ..utils.exceptions import MarketplaceError, error_for_status
from ..utils.logger import get_logger
from ..utils.models import AvailabilityResult, PriceQuote, parse_date
from config.settings import api_config

# Query parameter names the API expects for multi-word filters
QUERY_ALIASES = {
    "property_type": "propertyType",
    "min_price": "minPrice",
    "max_price": "maxPrice",
    "check_in": "checkIn",
    "check_out": "checkOut",
}


def filters_to_params(filters: Filters) -> Dict[str, Any]:
    """
    Serialise search filters as query parameters.

    Empty values are dropped and lists are comma-joined.
    """
    search = as_filters(filters)
    if search is None:
        return {}
    params = {}
    for key, value in search.to_dict().items():
        if value in (None, "", [], 0):
            continue
        if isinstance(value, list):
            value = ",".join(value)
        params[QUERY_ALIASES.get(key, key)] = value
    return params


def _iso(value: DateLike) -> str:
    return parse_date(value).isoformat()


class HttpMarketplaceClient(MarketplaceClient):
    """Marketplace backend talking to the REST API over HTTP."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        token: Optional[str] = None,
    ):
        self.base_url = (base_url or api_config.base_url).rstrip("/")
        self.timeout = timeout or api_config.timeout_seconds
        self.session = session or requests.Session()
        self.token = token
        self.logger = get_logger("http_client")

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None,
                 payload: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send a request and unwrap the ``data`` field of the response envelope.

        Raises:
            MarketplaceError: Subclass matching the response status, or the
                base class for transport failures
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=payload,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            self.logger.error("api_request_failed", method=method, path=path, error=str(e))
            raise MarketplaceError(f"Request failed: {e}", {"path": path}) from e

        self.logger.debug("api_request", method=method, path=path, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code >= 400:
            raise self._error_from_response(response.status_code, body)
        return body.get("data") if isinstance(body, dict) else None

    @staticmethod
    def _error_from_response(status_code: int, body: Any) -> MarketplaceError:
        # Error envelopes are flat; framework errors such as unknown routes nest under "detail"
        payload = body if isinstance(body, dict) else {}
        detail = payload.get("detail")
        if isinstance(detail, dict):
            payload = detail
        elif isinstance(detail, str):
            payload = {"message": detail}
        message = payload.get("message") or f"Request failed with status {status_code}"
        details = payload.get("details") or {}
        return error_for_status(status_code, message, details)

    # Listings
    def search_listings(self, filters: Filters = None, page: int = 1, limit: Optional[int] = None) -> Dict[str, Any]:
        params = filters_to_params(filters)
        params["page"] = page
        if limit:
            params["limit"] = limit
        return self._request("GET", "/listings", params=params)

    def get_listing(self, listing_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/listings/{listing_id}")

    def create_listing(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/listings", payload=data)

    def update_listing(self, listing_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/listings/{listing_id}", payload=changes)

    def delete_listing(self, listing_id: str) -> None:
        self._request("DELETE", f"/listings/{listing_id}")

    def get_availability(self, listing_id: str, start_date: DateLike, end_date: DateLike) -> AvailabilityResult:
        data = self._request(
            "GET", f"/listings/{listing_id}/availability",
            params={"startDate": _iso(start_date), "endDate": _iso(end_date)},
        )
        return AvailabilityResult(available=data["available"], blocked_dates=data.get("blocked_dates", []))

    def get_quote(self, listing_id: str, check_in: DateLike, check_out: DateLike) -> PriceQuote:
        data = self._request(
            "GET", f"/listings/{listing_id}/quote",
            params={"checkIn": _iso(check_in), "checkOut": _iso(check_out)},
        )
        return PriceQuote(**data)

    # Bookings
    def create_booking(self, listing_id: str, check_in: DateLike, check_out: DateLike, guests: int = 1) -> Dict[str, Any]:
        return self._request("POST", "/bookings", payload={
            "listing_id": listing_id,
            "check_in": _iso(check_in),
            "check_out": _iso(check_out),
            "guests": guests,
        })

    def get_user_bookings(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/bookings/user")

    def get_host_bookings(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/bookings/host")

    def get_booking(self, booking_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/bookings/{booking_id}")

    def cancel_booking(self, booking_id: str) -> Dict[str, Any]:
        return self._request("PUT", f"/bookings/{booking_id}/cancel")

    # Auth
    def register(self, email: str, password: str, first_name: str, last_name: str) -> Dict[str, Any]:
        session = self._request("POST", "/auth/register", payload={
            "email": email,
            "password": password,
            "first_name": first_name,
            "last_name": last_name,
        })
        self.token = session["token"]
        return session

    def login(self, email: str, password: str) -> Dict[str, Any]:
        session = self._request("POST", "/auth/login", payload={"email": email, "password": password})
        self.token = session["token"]
        return session

    def logout(self) -> None:
        self.token = None

    def get_profile(self) -> Dict[str, Any]:
        return self._request("GET", "/auth/profile")

    def update_profile(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", "/auth/profile", payload=changes)

    def get_backend_name(self) -> str:
        return "http"
