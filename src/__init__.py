"""
Rental Marketplace.

Listing search, availability checks and bookings for a short-term rental
marketplace, served over a REST API and usable in-process through the
mock client.
"""

__version__ = "1.0.0"
__author__ = "Rental Marketplace Team"
__description__ = "Short-term rental listings, availability and bookings"
