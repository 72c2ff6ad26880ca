"""
API routes and endpoints.
"""

from . import auth, bookings, health, listings

__all__ = ["auth", "bookings", "health", "listings"]
