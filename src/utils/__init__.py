"""
Utility modules for the rental marketplace.
"""

from .models import (
    BookingStatus, PropertyType, Location, Listing, Booking, User, Review,
    SearchFilters, Pagination, AvailabilityResult, PriceQuote
)
from .exceptions import (
    MarketplaceError, UnauthenticatedError, ForbiddenError, NotFoundError,
    ConflictError, ValidationError
)
from .logger import setup_logger, get_logger

__all__ = [
    'BookingStatus', 'PropertyType', 'Location', 'Listing', 'Booking', 'User',
    'Review', 'SearchFilters', 'Pagination', 'AvailabilityResult', 'PriceQuote',
    'MarketplaceError', 'UnauthenticatedError', 'ForbiddenError', 'NotFoundError',
    'ConflictError', 'ValidationError', 'setup_logger', 'get_logger'
]
