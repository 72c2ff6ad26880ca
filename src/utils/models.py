"""
Data models for the rental marketplace.
"""
from dataclasses import dataclass, field, fields
from datetime import date, datetime, timezone
from typing import Optional, Dict, Any, List
from enum import Enum

from .exceptions import ValidationError


class BookingStatus(Enum):
    """Booking lifecycle states."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


# Statuses that hold a listing's dates
ACTIVE_BOOKING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)


class PropertyType(Enum):
    """Property types offered when creating a listing."""
    VILLA = "Villa"
    APARTMENT = "Apartment"
    CABIN = "Cabin"
    HOUSE = "House"
    LOFT = "Loft"
    CONDO = "Condo"
    PENTHOUSE = "Penthouse"


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_date(value: Any) -> date:
    """Coerce an ISO string, datetime or date into a calendar date.

    Raises:
        ValidationError: If the value is not a date or an ISO date string
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
        except ValueError:
            raise ValidationError("Invalid date", {"value": value})
    raise ValidationError("Invalid date", {"value": repr(value)})


def _known_fields(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


@dataclass
class Location:
    """Where a listing is."""
    address: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    zip_code: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'address': self.address,
            'city': self.city,
            'state': self.state,
            'country': self.country,
            'zip_code': self.zip_code,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'Location':
        return cls(**_known_fields(cls, data or {}))


@dataclass
class Listing:
    """A rentable property owned by a host."""
    id: str
    host_id: str
    title: str
    property_type: str
    location: Location
    price: int
    max_guests: int
    bedrooms: int = 0
    bathrooms: int = 0
    description: str = ""
    amenities: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)
    rating: float = 0.0
    review_count: int = 0
    is_available: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.location, dict):
            self.location = Location.from_dict(self.location)
        if isinstance(self.property_type, PropertyType):
            self.property_type = self.property_type.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert listing to a storage row."""
        return {
            'id': self.id,
            'host_id': self.host_id,
            'title': self.title,
            'description': self.description,
            'property_type': self.property_type,
            'location': self.location.to_dict(),
            'price': self.price,
            'max_guests': self.max_guests,
            'bedrooms': self.bedrooms,
            'bathrooms': self.bathrooms,
            'amenities': list(self.amenities),
            'images': list(self.images),
            'rating': self.rating,
            'review_count': self.review_count,
            'is_available': self.is_available,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }

    def summary(self) -> Dict[str, Any]:
        """Short projection embedded in booking lists."""
        return {
            'id': self.id,
            'title': self.title,
            'images': list(self.images),
            'location': self.location.to_dict(),
            'price': self.price,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Listing':
        """Create Listing from a storage row."""
        return cls(**_known_fields(cls, data))


@dataclass
class Booking:
    """A reservation of a listing for a date range."""
    id: str
    listing_id: str
    guest_id: str
    host_id: str
    check_in: date
    check_out: date
    guests: int
    total_price: int
    status: BookingStatus = BookingStatus.CONFIRMED
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.status, str):
            self.status = BookingStatus(self.status.lower())
        self.check_in = parse_date(self.check_in)
        self.check_out = parse_date(self.check_out)

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_BOOKING_STATUSES

    def to_dict(self) -> Dict[str, Any]:
        """Convert booking to a storage row."""
        return {
            'id': self.id,
            'listing_id': self.listing_id,
            'guest_id': self.guest_id,
            'host_id': self.host_id,
            'check_in': self.check_in.isoformat(),
            'check_out': self.check_out.isoformat(),
            'guests': self.guests,
            'total_price': self.total_price,
            'status': self.status.value,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Booking':
        """Create Booking from a storage row."""
        return cls(**_known_fields(cls, data))

    def __str__(self) -> str:
        return (f"Booking(id='{self.id}', "
                f"listing='{self.listing_id}', "
                f"check_in='{self.check_in}', "
                f"check_out='{self.check_out}', "
                f"status='{self.status.value}')")


@dataclass
class User:
    """A guest or host account."""
    id: str
    email: str
    password: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    avatar: str = ""
    phone: str = ""
    bio: str = ""
    is_host: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert user to a storage row, including the encrypted password."""
        return {**self.to_public_dict(), 'password': self.password,
                'created_at': self.created_at, 'updated_at': self.updated_at}

    def to_public_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'email': self.email,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'avatar': self.avatar,
            'phone': self.phone,
            'bio': self.bio,
            'is_host': self.is_host,
        }

    def host_summary(self, detailed: bool = False) -> Dict[str, Any]:
        summary = {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'avatar': self.avatar,
        }
        if detailed:
            summary['bio'] = self.bio
            summary['created_at'] = self.created_at
        return summary

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'User':
        return cls(**_known_fields(cls, data))


@dataclass
class Review:
    """A guest review of a listing."""
    id: str
    listing_id: str
    user_id: str
    rating: float
    comment: str = ""
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'listing_id': self.listing_id,
            'user_id': self.user_id,
            'rating': self.rating,
            'comment': self.comment,
            'created_at': self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Review':
        return cls(**_known_fields(cls, data))


@dataclass
class SearchFilters:
    """Optional search predicates; empty fields impose no constraint."""
    city: Optional[str] = None
    country: Optional[str] = None
    property_type: Optional[str] = None
    min_price: Optional[int] = None
    max_price: Optional[int] = None
    guests: Optional[int] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    amenities: List[str] = field(default_factory=list)
    check_in: Optional[date] = None
    check_out: Optional[date] = None

    def __post_init__(self):
        if isinstance(self.amenities, str):
            self.amenities = [a.strip() for a in self.amenities.split(',') if a.strip()]
        elif self.amenities is None:
            self.amenities = []
        if self.check_in:
            self.check_in = parse_date(self.check_in)
        if self.check_out:
            self.check_out = parse_date(self.check_out)

    @property
    def has_dates(self) -> bool:
        return bool(self.check_in and self.check_out)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'city': self.city,
            'country': self.country,
            'property_type': self.property_type,
            'min_price': self.min_price,
            'max_price': self.max_price,
            'guests': self.guests,
            'bedrooms': self.bedrooms,
            'bathrooms': self.bathrooms,
            'amenities': list(self.amenities),
            'check_in': self.check_in.isoformat() if self.check_in else None,
            'check_out': self.check_out.isoformat() if self.check_out else None,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'SearchFilters':
        return cls(**_known_fields(cls, data or {}))


@dataclass
class Pagination:
    """Page metadata for a search result."""
    page: int
    limit: int
    total: int
    pages: int

    def to_dict(self) -> Dict[str, Any]:
        return {'page': self.page, 'limit': self.limit, 'total': self.total, 'pages': self.pages}


@dataclass
class AvailabilityResult:
    """Whether a date range is free, and the ranges blocking it if not."""
    available: bool
    blocked_dates: List[Dict[str, str]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {'available': self.available, 'blocked_dates': list(self.blocked_dates)}


@dataclass
class PriceQuote:
    """Checkout price breakdown."""
    nightly_price: int
    nights: int
    subtotal: int
    service_fee: int
    total: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nightly_price': self.nightly_price,
            'nights': self.nights,
            'subtotal': self.subtotal,
            'service_fee': self.service_fee,
            'total': self.total,
        }
