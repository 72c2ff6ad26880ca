"""
Unit tests for the HTTP and in-process marketplace clients.
"""
import pytest
import requests
from datetime import date
from unittest.mock import Mock

from src.client import (
    HttpMarketplaceClient, MockMarketplaceClient, filters_to_params, get_marketplace_client
)
from src.utils.exceptions import (
    ConflictError, MarketplaceError, NotFoundError, UnauthenticatedError, ValidationError
)
from src.utils.models import AvailabilityResult, PriceQuote, SearchFilters
from config.settings import api_config
from dataclasses import replace


def _response(status_code=200, body=None):
    response = Mock()
    response.status_code = status_code
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body if body is not None else {}
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def http_client(session):
    return HttpMarketplaceClient(base_url="http://api.test/api/v1/", timeout=5, session=session)


class TestFiltersToParams:

    def test_aliases_and_lists(self):
        params = filters_to_params(SearchFilters(
            city="Aspen", property_type="Cabin", min_price=100, amenities=["WiFi", "Fireplace"],
            check_in="2024-12-01", check_out="2024-12-05",
        ))
        assert params == {
            "city": "Aspen",
            "propertyType": "Cabin",
            "minPrice": 100,
            "amenities": "WiFi,Fireplace",
            "checkIn": "2024-12-01",
            "checkOut": "2024-12-05",
        }

    def test_empty_values_dropped(self):
        assert filters_to_params({"city": "", "guests": 0, "amenities": []}) == {}
        assert filters_to_params(None) == {}


class TestHttpMarketplaceClient:
    """Test cases for the REST client with a mocked session."""

    def test_search_unwraps_envelope(self, http_client, session):
        data = {"listings": [], "pagination": {"page": 2, "limit": 5, "total": 0, "pages": 0}}
        session.request.return_value = _response(200, {"success": True, "message": "ok", "data": data})

        assert http_client.search_listings({"city": "Milan"}, page=2, limit=5) == data
        session.request.assert_called_once_with(
            "GET",
            "http://api.test/api/v1/listings",
            params={"city": "Milan", "page": 2, "limit": 5},
            json=None,
            headers={"Content-Type": "application/json"},
            timeout=5,
        )

    def test_login_stores_token(self, http_client, session):
        session.request.return_value = _response(200, {"data": {"token": "tok", "user": {"id": "user-3"}}})
        http_client.login("alex.guest@example.com", "pw")
        assert http_client.token == "tok"

        session.request.return_value = _response(200, {"data": []})
        http_client.get_user_bookings()
        headers = session.request.call_args.kwargs["headers"]
        assert headers["Authorization"] == "Bearer tok"

        http_client.logout()
        assert http_client.token is None

    def test_create_booking_payload(self, http_client, session):
        session.request.return_value = _response(200, {"data": {"id": "b"}})
        http_client.create_booking("listing-2", date(2025, 3, 1), "2025-03-04T00:00:00", 2)
        assert session.request.call_args.kwargs["json"] == {
            "listing_id": "listing-2", "check_in": "2025-03-01", "check_out": "2025-03-04", "guests": 2,
        }

    def test_availability_and_quote_types(self, http_client, session):
        session.request.return_value = _response(200, {"data": {"available": True, "blocked_dates": []}})
        result = http_client.get_availability("listing-1", "2024-08-01", "2024-08-03")
        assert result == AvailabilityResult(available=True, blocked_dates=[])
        assert session.request.call_args.kwargs["params"] == {"startDate": "2024-08-01", "endDate": "2024-08-03"}

        quote = {"nightly_price": 100, "nights": 2, "subtotal": 200, "service_fee": 28, "total": 228}
        session.request.return_value = _response(200, {"data": quote})
        assert http_client.get_quote("listing-1", "2024-08-01", "2024-08-03") == PriceQuote(**quote)

    @pytest.mark.parametrize("status,cls", [
        (401, UnauthenticatedError),
        (404, NotFoundError),
        (409, ConflictError),
        (422, ValidationError),
    ])
    def test_error_envelope_maps_to_exception(self, http_client, session, status, cls):
        session.request.return_value = _response(status, {
            "success": False, "message": "nope", "error_code": "X", "details": {"k": "v"},
        })
        with pytest.raises(cls) as exc_info:
            http_client.get_listing("listing-1")
        assert exc_info.value.message == "nope"
        assert exc_info.value.details == {"k": "v"}

    def test_http_exception_detail(self, http_client, session):
        session.request.return_value = _response(500, {"detail": {"message": "Failed", "details": {"error": "x"}}})
        with pytest.raises(MarketplaceError) as exc_info:
            http_client.get_listing("listing-1")
        assert exc_info.value.message == "Failed"

    def test_plain_detail_and_non_json(self, http_client, session):
        session.request.return_value = _response(404, {"detail": "Not Found"})
        with pytest.raises(NotFoundError, match="Not Found"):
            http_client.get_listing("listing-1")

        session.request.return_value = _response(502, ValueError("no json"))
        with pytest.raises(MarketplaceError, match="502"):
            http_client.get_listing("listing-1")

    def test_transport_error(self, http_client, session):
        session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(MarketplaceError, match="Request failed"):
            http_client.search_listings()


class TestMockMarketplaceClient:
    """Test cases for the in-process client."""

    def test_latency_uses_injected_sleep(self, services):
        sleep = Mock()
        client = MockMarketplaceClient(services=services, latency_ms=250, sleep=sleep)
        client.search_listings()
        sleep.assert_called_once_with(0.25)

    def test_zero_latency_skips_sleep(self, services):
        sleep = Mock()
        MockMarketplaceClient(services=services, latency_ms=0, sleep=sleep).get_listing("listing-1")
        sleep.assert_not_called()

    def test_session_flow(self, mock_client):
        with pytest.raises(UnauthenticatedError):
            mock_client.get_user_bookings()

        mock_client.login("alex.guest@example.com", "password123")
        assert mock_client.get_profile()["id"] == "user-3"

        booking = mock_client.create_booking("listing-4", "2025-06-01", "2025-06-03", 1)
        assert booking["total_price"] == 280
        assert booking["id"] in {b["id"] for b in mock_client.get_user_bookings()}
        assert mock_client.cancel_booking(booking["id"])["status"] == "cancelled"

        mock_client.logout()
        with pytest.raises(UnauthenticatedError):
            mock_client.get_profile()

    def test_search_accepts_dict_filters(self, mock_client):
        result = mock_client.search_listings({"country": "Italy"})
        assert result["pagination"]["total"] == 2

    def test_availability_and_quote(self, mock_client):
        assert isinstance(mock_client.get_availability("listing-1", "2024-07-04", "2024-07-08"), AvailabilityResult)
        assert mock_client.get_quote("listing-2", "2024-05-10", "2024-05-13").total == 616

    def test_register_starts_session(self, mock_client, listing_payload):
        mock_client.register("nia@example.com", "pw", "Nia", "Lee")
        listing = mock_client.create_listing(listing_payload)
        assert mock_client.get_host_bookings() == []
        updated = mock_client.update_listing(listing["id"], {"price": 120})
        assert updated["price"] == 120
        mock_client.delete_listing(listing["id"])
        with pytest.raises(NotFoundError):
            mock_client.get_listing(listing["id"])


def test_get_marketplace_client_selects_backend(services):
    assert isinstance(get_marketplace_client(replace(api_config, mock_api=True), services=services, latency_ms=0),
                      MockMarketplaceClient)
    assert isinstance(get_marketplace_client(replace(api_config, mock_api=False), base_url="http://x"),
                      HttpMarketplaceClient)
