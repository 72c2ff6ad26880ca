"""
Shared fixtures for the marketplace tests.
"""
import pytest
from dataclasses import replace

from src.api.services.container import build_services
from src.client import MockMarketplaceClient
from src.utils.models import Booking, Listing, Location
from config.settings import app_config


@pytest.fixture
def config():
    """Default config with the legacy inclusive overlap switched off."""
    return replace(app_config, overlap_policy="half_open", mock_latency_ms=0)


@pytest.fixture
def services(config):
    """Services over freshly seeded in-memory repositories."""
    return build_services(config=config, seed=True)


@pytest.fixture
def empty_services(config):
    return build_services(config=config, seed=False)


@pytest.fixture
def mock_client(services):
    return MockMarketplaceClient(services=services, latency_ms=0)


@pytest.fixture
def make_listing():
    def _make(listing_id="listing-x", **overrides):
        data = {
            "id": listing_id,
            "host_id": "host-1",
            "title": "Test Listing",
            "property_type": "Apartment",
            "location": Location(city="Lisbon", country="Portugal"),
            "price": 100,
            "max_guests": 2,
            "bedrooms": 1,
            "bathrooms": 1,
            "amenities": ["WiFi"],
        }
        data.update(overrides)
        return Listing(**data)
    return _make


@pytest.fixture
def make_booking():
    def _make(check_in, check_out, status="confirmed", listing_id="listing-x", booking_id="b-1"):
        return Booking(
            id=booking_id,
            listing_id=listing_id,
            guest_id="guest-1",
            host_id="host-1",
            check_in=check_in,
            check_out=check_out,
            guests=1,
            total_price=0,
            status=status,
        )
    return _make


@pytest.fixture
def listing_payload():
    """A complete host wizard submission."""
    return {
        "title": "Harbour Studio",
        "description": "Small studio by the marina.",
        "property_type": "Apartment",
        "location": {"address": "1 Quay St", "city": "Lisbon", "state": "", "country": "Portugal", "zip_code": "1100"},
        "price": 95,
        "max_guests": 2,
        "bedrooms": 1,
        "bathrooms": 1,
        "amenities": ["WiFi", "Kitchen", "WiFi"],
        "images": ["https://images.example.com/studio.jpg"],
    }
