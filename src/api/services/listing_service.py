"""
Listing service: search, detail, host CRUD, availability and quotes.
"""
from datetime import date
from typing import Any, Dict, List, Optional

from ...marketplace.availability import check_availability, find_conflicts, validate_range
from ...marketplace.filters import apply_filters, paginate
from ...marketplace.pricing import quote
from ...storage import Repositories
from ...utils.exceptions import ForbiddenError, NotFoundError, UnauthenticatedError, ValidationError
from ...utils.logger import get_logger
from ...utils.models import (
    AvailabilityResult, Booking, Listing, Location, PriceQuote, PropertyType, Review,
    SearchFilters, User, parse_date, utcnow_iso
)
from config.settings import app_config

UPDATABLE_FIELDS = (
    "title", "description", "property_type", "price", "location", "max_guests",
    "bedrooms", "bathrooms", "amenities", "images", "is_available",
)

PROPERTY_TYPES = tuple(p.value for p in PropertyType)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _normalize(payload: Dict[str, Any]) -> Dict[str, Any]:
    if isinstance(payload.get("property_type"), PropertyType):
        payload["property_type"] = payload["property_type"].value
    if isinstance(payload.get("location"), Location):
        payload["location"] = payload["location"].to_dict()
    return payload


def validate_listing_data(data: Dict[str, Any]) -> None:
    """
    Apply the host onboarding rules to a complete listing payload.

    Raises:
        ValidationError: with the first failing rule as the message and
            every failing field under ``details["errors"]``
    """
    errors: Dict[str, str] = {}
    location = data.get("location") or {}

    if not data.get("property_type"):
        errors["property_type"] = "Please select a property type"
    elif data["property_type"] not in PROPERTY_TYPES:
        errors["property_type"] = f"Property type must be one of: {', '.join(PROPERTY_TYPES)}"
    if not location.get("city") or not location.get("country"):
        errors["location"] = "Please fill in location details"
    if not data.get("title") or not data.get("description"):
        errors["title"] = "Please provide title and description"
    if not _is_number(data.get("price")) or data["price"] <= 0:
        errors["price"] = "Price per night must be greater than zero"
    if not _is_number(data.get("max_guests")) or data["max_guests"] < 1:
        errors["max_guests"] = "Listing must host at least one guest"
    for room in ("bedrooms", "bathrooms"):
        if not _is_number(data.get(room, 0)) or data.get(room, 0) < 0:
            errors[room] = f"{room.capitalize()} cannot be negative"
    if not data.get("images"):
        errors["images"] = "Please add at least one image"
    if not data.get("amenities"):
        errors["amenities"] = "Please select at least one amenity"

    if errors:
        raise ValidationError(next(iter(errors.values())), {"errors": errors})


class ListingService:
    """Service for listing discovery and host listing management."""

    def __init__(self, repositories: Repositories, logger=None, config=app_config):
        self.repositories = repositories
        self.logger = logger or get_logger("listing_service")
        self.config = config

    # Lookups
    def require_listing(self, listing_id: str) -> Listing:
        row = self.repositories.listings.get(listing_id)
        if not row:
            raise NotFoundError("Listing not found", {"listing_id": listing_id})
        return Listing.from_dict(row)

    def _user(self, user_id: str) -> Optional[User]:
        row = self.repositories.users.get(user_id)
        return User.from_dict(row) if row else None

    def _with_host(self, listing: Listing, detailed: bool = False) -> Dict[str, Any]:
        host = self._user(listing.host_id)
        return {**listing.to_dict(), "host": host.host_summary(detailed) if host else None}

    def _bookings_for(self, listing_id: str) -> List[Booking]:
        return [Booking.from_dict(row) for row in self.repositories.bookings.find(listing_id=listing_id)]

    # Discovery
    def search_listings(self, filters: Optional[SearchFilters] = None, page: int = 1,
                        limit: Optional[int] = None) -> Dict[str, Any]:
        """
        Filter, optionally drop listings booked for the requested dates, and paginate.

        Args:
            filters: Search predicates, all optional
            page: Page number (starts at 1)
            limit: Page size, capped at ``max_page_size``

        Returns:
            Dictionary with ``listings`` (each with a host summary) and ``pagination``
        """
        limit = min(limit or self.config.default_page_size, self.config.max_page_size)
        listings = [Listing.from_dict(row) for row in self.repositories.listings.list()]
        matched = apply_filters(listings, filters)

        if filters and filters.has_dates:
            validate_range(filters.check_in, filters.check_out)
            matched = [
                listing for listing in matched
                if not find_conflicts(self._bookings_for(listing.id), listing.id,
                                      filters.check_in, filters.check_out,
                                      self.config.inclusive_overlap)
            ]

        page_items, pagination = paginate(matched, page, limit)
        self.logger.info("listings_searched", total=pagination.total, page=page, limit=limit)
        return {
            "listings": [self._with_host(listing) for listing in page_items],
            "pagination": pagination.to_dict(),
        }

    def get_listing(self, listing_id: str) -> Dict[str, Any]:
        listing = self.require_listing(listing_id)
        reviews = []
        for row in self.repositories.reviews.find(listing_id=listing_id):
            review = Review.from_dict(row)
            reviewer = self._user(review.user_id)
            reviews.append({**review.to_dict(), "user": reviewer.host_summary() if reviewer else None})
        return {"listing": self._with_host(listing, detailed=True), "reviews": reviews}

    # Host management
    def create_listing(self, actor_id: Optional[str], data: Dict[str, Any]) -> Dict[str, Any]:
        if not actor_id:
            raise UnauthenticatedError("Not authenticated")

        payload = _normalize({key: data[key] for key in UPDATABLE_FIELDS if key in data})
        payload.setdefault("bedrooms", 0)
        payload.setdefault("bathrooms", 0)
        payload.setdefault("description", "")
        validate_listing_data(payload)

        now = utcnow_iso()
        row = {
            **payload,
            "host_id": actor_id,
            "location": Location.from_dict(payload["location"]).to_dict(),
            "amenities": list(dict.fromkeys(payload["amenities"])),
            "images": list(payload["images"]),
            "rating": 0.0,
            "review_count": 0,
            "is_available": True,
            "created_at": now,
            "updated_at": now,
        }
        stored = Listing.from_dict(self.repositories.listings.insert(row))

        host = self.repositories.users.get(actor_id)
        if host and not host.get("is_host"):
            self.repositories.users.update(actor_id, {"is_host": True, "updated_at": now})

        self.logger.info("listing_created", listing_id=stored.id, host_id=actor_id)
        return stored.to_dict()

    def _require_owned(self, actor_id: Optional[str], listing_id: str, action: str) -> Listing:
        if not actor_id:
            raise UnauthenticatedError("Not authenticated")
        listing = self.require_listing(listing_id)
        if listing.host_id != actor_id:
            self.logger.warning("listing_forbidden", listing_id=listing_id, actor_id=actor_id, action=action)
            raise ForbiddenError(f"Not authorized to {action} this listing", {"listing_id": listing_id})
        return listing

    def update_listing(self, actor_id: Optional[str], listing_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        listing = self._require_owned(actor_id, listing_id, "update")

        updates = _normalize({key: value for key, value in changes.items() if key in UPDATABLE_FIELDS and value is not None})
        if "location" in updates:
            updates["location"] = {**listing.location.to_dict(), **updates["location"]}
        merged = {**listing.to_dict(), **updates}
        validate_listing_data(merged)

        updates["updated_at"] = utcnow_iso()
        row = self.repositories.listings.update(listing_id, updates)
        self.logger.info("listing_updated", listing_id=listing_id, fields=sorted(updates))
        return Listing.from_dict(row).to_dict()

    def delete_listing(self, actor_id: Optional[str], listing_id: str) -> None:
        self._require_owned(actor_id, listing_id, "delete")
        self.repositories.listings.delete(listing_id)
        self.logger.info("listing_deleted", listing_id=listing_id, host_id=actor_id)

    # Availability and pricing
    def get_availability(self, listing_id: str, start_date: date, end_date: date) -> AvailabilityResult:
        self.require_listing(listing_id)
        return check_availability(
            self._bookings_for(listing_id), listing_id,
            parse_date(start_date), parse_date(end_date),
            self.config.inclusive_overlap,
        )

    def get_quote(self, listing_id: str, check_in: date, check_out: date) -> PriceQuote:
        listing = self.require_listing(listing_id)
        return quote(listing.price, parse_date(check_in), parse_date(check_out), self.config.service_fee_rate)
