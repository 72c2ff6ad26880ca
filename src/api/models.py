"""
Immutable data models for API responses and requests.
"""
from typing import Optional, Dict, Any, List
from datetime import date, datetime, timezone
from pydantic import BaseModel, Field, ConfigDict, field_serializer


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class APIResponse(BaseModel):
    """Base API response model."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    success: bool = Field(..., description="Whether the request was successful")
    message: str = Field(..., description="Response message")
    timestamp: datetime = Field(default_factory=_utcnow, description="Response timestamp")

    @field_serializer('timestamp')
    def serialize_timestamp(self, timestamp: datetime) -> str:
        return timestamp.isoformat()


class ErrorResponse(APIResponse):
    """Error response model."""
    error_code: Optional[str] = Field(None, description="Error code for debugging")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


class HealthResponse(BaseModel):
    """Health check response model."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(default_factory=_utcnow, description="Health check timestamp")
    version: str = Field(..., description="API version")
    dependencies: Dict[str, str] = Field(default_factory=dict, description="Dependency statuses")

    @field_serializer('timestamp')
    def serialize_timestamp(self, timestamp: datetime) -> str:
        return timestamp.isoformat()


# Listings

class LocationModel(BaseModel):
    """Listing address."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    address: str = Field("", description="Street address")
    city: str = Field("", description="City")
    state: str = Field("", description="State or region")
    country: str = Field("", description="Country")
    zip_code: str = Field("", description="Postal code")


class LocationUpdateModel(BaseModel):
    """Partial listing address."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip_code: Optional[str] = None


class CreateListingRequest(BaseModel):
    """Request model for publishing a listing from the host wizard.

    Fields default to empty so the listing validator reports which
    wizard step is incomplete.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str = Field("", description="Listing title")
    description: str = Field("", description="Listing description")
    property_type: str = Field("", description="Villa, Apartment, Cabin, House, Loft, Condo or Penthouse")
    location: LocationModel = Field(default_factory=LocationModel, description="Listing address")
    price: int = Field(0, description="Price per night")
    max_guests: int = Field(1, description="Maximum number of guests")
    bedrooms: int = Field(0, description="Number of bedrooms")
    bathrooms: int = Field(0, description="Number of bathrooms")
    amenities: List[str] = Field(default_factory=list, description="Amenity names")
    images: List[str] = Field(default_factory=list, description="Image URLs")


class UpdateListingRequest(BaseModel):
    """Request model for updating a listing (partial update)."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    title: Optional[str] = None
    description: Optional[str] = None
    property_type: Optional[str] = None
    location: Optional[LocationUpdateModel] = None
    price: Optional[int] = None
    max_guests: Optional[int] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    amenities: Optional[List[str]] = None
    images: Optional[List[str]] = None
    is_available: Optional[bool] = Field(None, description="Whether the listing accepts bookings")


class ListingsResponse(APIResponse):
    """Response model for a page of search results."""
    data: Dict[str, Any] = Field(..., description="Listings array and pagination metadata")


class ListingResponse(APIResponse):
    data: Dict[str, Any] = Field(..., description="Listing data")


class AvailabilityResponse(APIResponse):
    data: Dict[str, Any] = Field(..., description="Availability and blocked date ranges")


class QuoteResponse(APIResponse):
    data: Dict[str, Any] = Field(..., description="Checkout price breakdown")


# Bookings

class CreateBookingRequest(BaseModel):
    """Request model for booking a listing."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    listing_id: str = Field(..., description="Listing ID")
    check_in: date = Field(..., description="Check-in date")
    check_out: date = Field(..., description="Check-out date")
    guests: int = Field(1, description="Number of guests")


class BookingResponse(APIResponse):
    data: Dict[str, Any] = Field(..., description="Booking data")


class BookingListResponse(APIResponse):
    data: List[Dict[str, Any]] = Field(..., description="List of bookings")


# Auth

class RegisterRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")
    first_name: str = Field(..., description="User first name")
    last_name: str = Field(..., description="User last name")
    email: str = Field(..., description="User email")
    password: str = Field(..., description="User password")

class LoginRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")
    email: str = Field(..., description="User email")
    password: str = Field(..., description="User password")

class AuthResponse(APIResponse):
    data: Dict[str, Any] = Field(..., description="Auth data including token")


class ProfileUpdateRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")
    first_name: Optional[str] = Field(None, description="User first name")
    last_name: Optional[str] = Field(None, description="User last name")
    phone: Optional[str] = Field(None, description="Phone number")
    bio: Optional[str] = Field(None, description="Short host bio")
    avatar: Optional[str] = Field(None, description="Avatar URL")

class UserResponse(APIResponse):
    data: Dict[str, Any] = Field(..., description="User data")
