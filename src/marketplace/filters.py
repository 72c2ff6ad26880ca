"""
Search filtering and pagination over listing collections.
"""
import math
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

from ..utils.exceptions import ValidationError
from ..utils.models import Listing, Pagination, SearchFilters

T = TypeVar("T")


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in (haystack or "").lower()


def matches_filters(listing: Listing, filters: Optional[SearchFilters]) -> bool:
    """
    Check a single listing against every populated filter field.

    Empty strings, empty lists, None and zero are treated as "not set",
    the same as a cleared search form field.
    """
    if filters is None:
        return True

    if filters.city and not _contains(listing.location.city, filters.city):
        return False
    if filters.country and not _contains(listing.location.country, filters.country):
        return False
    if filters.property_type and listing.property_type != filters.property_type:
        return False
    if filters.guests and listing.max_guests < filters.guests:
        return False
    if filters.bedrooms and listing.bedrooms < filters.bedrooms:
        return False
    if filters.bathrooms and listing.bathrooms < filters.bathrooms:
        return False
    if filters.min_price and listing.price < filters.min_price:
        return False
    if filters.max_price and listing.price > filters.max_price:
        return False
    if filters.amenities and not set(filters.amenities).issubset(listing.amenities):
        return False
    return True


def apply_filters(listings: Iterable[Listing], filters: Optional[SearchFilters]) -> List[Listing]:
    """Return the listings matching all filters, preserving input order."""
    return [listing for listing in listings if matches_filters(listing, filters)]


def paginate(items: Sequence[T], page: int, limit: int) -> Tuple[List[T], Pagination]:
    """
    Slice a sequence into a 1-indexed page.

    Args:
        items: Filtered, ordered items
        page: Page number (starts at 1)
        limit: Page size

    Returns:
        Tuple of page items and pagination metadata. A page past the end
        yields an empty list rather than an error.
    """
    if page < 1:
        raise ValidationError("page must be at least 1", {"page": page})
    if limit < 1:
        raise ValidationError("limit must be at least 1", {"limit": limit})

    total = len(items)
    offset = (page - 1) * limit
    pages = math.ceil(total / limit)
    return list(items[offset:offset + limit]), Pagination(page=page, limit=limit, total=total, pages=pages)
