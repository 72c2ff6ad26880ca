"""
Marketplace services used by the API routes and the mock client.
"""

from .listing_service import ListingService
from .booking_service import BookingService
from .auth_service import AuthService
from .container import ServiceContainer, build_services

__all__ = ['ListingService', 'BookingService', 'AuthService', 'ServiceContainer', 'build_services']
