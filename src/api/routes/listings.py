"""
Listing API endpoints: search, detail, host management, availability and quotes.
"""
from typing import Optional
from datetime import date
from fastapi import APIRouter, Depends, Query
from ..models import (
    AvailabilityResponse, CreateListingRequest, ErrorResponse, ListingResponse,
    ListingsResponse, QuoteResponse, UpdateListingRequest
)
from ..dependencies import get_current_user_id, get_listing_service, internal_error
from ..services.listing_service import ListingService
from ...utils.exceptions import MarketplaceError
from ...utils.models import SearchFilters


router = APIRouter(prefix="/listings", tags=["listings"])


def get_search_filters(
    city: Optional[str] = Query(None, description="City, case-insensitive substring"),
    country: Optional[str] = Query(None, description="Country, case-insensitive substring"),
    property_type: Optional[str] = Query(None, alias="propertyType", description="Exact property type"),
    min_price: Optional[int] = Query(None, alias="minPrice", description="Minimum nightly price"),
    max_price: Optional[int] = Query(None, alias="maxPrice", description="Maximum nightly price"),
    guests: Optional[int] = Query(None, description="Minimum guest capacity"),
    bedrooms: Optional[int] = Query(None, description="Minimum bedrooms"),
    bathrooms: Optional[int] = Query(None, description="Minimum bathrooms"),
    amenities: Optional[str] = Query(None, description="Comma-separated amenities, all required"),
    check_in: Optional[date] = Query(None, alias="checkIn", description="Only listings free from this date"),
    check_out: Optional[date] = Query(None, alias="checkOut", description="Only listings free until this date"),
) -> SearchFilters:
    """Build search filters from the query string."""
    return SearchFilters(
        city=city,
        country=country,
        property_type=property_type,
        min_price=min_price,
        max_price=max_price,
        guests=guests,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
        amenities=amenities,
        check_in=check_in,
        check_out=check_out,
    )


@router.get(
    "",
    response_model=ListingsResponse,
    summary="Search listings",
    description="Filter listings by location, type, price, capacity, amenities and free dates",
    responses={
        200: {"description": "Listings retrieved successfully"},
        422: {"description": "Invalid filters or pagination", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def search_listings(
    filters: SearchFilters = Depends(get_search_filters),
    page: int = Query(1, ge=1, description="Page number for pagination"),
    limit: Optional[int] = Query(None, ge=1, description="Number of listings per page"),
    listing_service: ListingService = Depends(get_listing_service)
):
    """
    Search listings.

    Args:
        filters: Search predicates parsed from the query string
        page: Page number (starts at 1)
        limit: Page size, capped by the server
        listing_service: Injected listing service

    Returns:
        Page of listings with pagination metadata
    """
    try:
        result = listing_service.search_listings(filters, page=page, limit=limit)
        return ListingsResponse(
            success=True,
            message=f"Found {result['pagination']['total']} listings",
            data=result
        )
    except MarketplaceError:
        raise
    except Exception as e:
        raise internal_error("Failed to search listings", "SEARCH_FAILED", e) from e


@router.get(
    "/{listing_id}",
    response_model=ListingResponse,
    summary="Get a listing",
    responses={
        404: {"description": "Listing not found", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def get_listing(
    listing_id: str,
    listing_service: ListingService = Depends(get_listing_service)
):
    """Listing detail with host profile and reviews."""
    try:
        return ListingResponse(
            success=True,
            message="Listing retrieved successfully",
            data=listing_service.get_listing(listing_id)
        )
    except MarketplaceError:
        raise
    except Exception as e:
        raise internal_error("Failed to retrieve listing", "FETCH_FAILED", e) from e


@router.post(
    "",
    response_model=ListingResponse,
    summary="Create a listing",
    responses={
        401: {"description": "Not authenticated", "model": ErrorResponse},
        422: {"description": "Incomplete listing", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def create_listing(
    request: CreateListingRequest,
    user_id: str = Depends(get_current_user_id),
    listing_service: ListingService = Depends(get_listing_service)
):
    """
    Publish a new listing owned by the authenticated user.

    Args:
        request: Listing details from the host wizard
        user_id: Authenticated host
        listing_service: Injected listing service

    Returns:
        Created listing
    """
    try:
        listing = listing_service.create_listing(user_id, request.model_dump())
        return ListingResponse(success=True, message="Listing created successfully", data=listing)
    except MarketplaceError:
        raise
    except Exception as e:
        raise internal_error("Failed to create listing", "CREATION_FAILED", e) from e


@router.put(
    "/{listing_id}",
    response_model=ListingResponse,
    summary="Update a listing",
    responses={
        401: {"description": "Not authenticated", "model": ErrorResponse},
        403: {"description": "Not the listing host", "model": ErrorResponse},
        404: {"description": "Listing not found", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def update_listing(
    listing_id: str,
    request: UpdateListingRequest,
    user_id: str = Depends(get_current_user_id),
    listing_service: ListingService = Depends(get_listing_service)
):
    try:
        listing = listing_service.update_listing(user_id, listing_id, request.model_dump(exclude_none=True))
        return ListingResponse(success=True, message="Listing updated successfully", data=listing)
    except MarketplaceError:
        raise
    except Exception as e:
        raise internal_error("Failed to update listing", "UPDATE_FAILED", e) from e


@router.delete(
    "/{listing_id}",
    response_model=ListingResponse,
    summary="Delete a listing",
    responses={
        401: {"description": "Not authenticated", "model": ErrorResponse},
        403: {"description": "Not the listing host", "model": ErrorResponse},
        404: {"description": "Listing not found", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def delete_listing(
    listing_id: str,
    user_id: str = Depends(get_current_user_id),
    listing_service: ListingService = Depends(get_listing_service)
):
    try:
        listing_service.delete_listing(user_id, listing_id)
        return ListingResponse(success=True, message="Listing deleted successfully", data={"id": listing_id, "deleted": True})
    except MarketplaceError:
        raise
    except Exception as e:
        raise internal_error("Failed to delete listing", "DELETE_FAILED", e) from e


@router.get(
    "/{listing_id}/availability",
    response_model=AvailabilityResponse,
    summary="Check availability",
    description="Report whether a listing is free between startDate and endDate",
    responses={
        404: {"description": "Listing not found", "model": ErrorResponse},
        422: {"description": "Invalid date range", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def get_availability(
    listing_id: str,
    start_date: date = Query(..., alias="startDate", description="Requested check-in"),
    end_date: date = Query(..., alias="endDate", description="Requested check-out"),
    listing_service: ListingService = Depends(get_listing_service)
):
    try:
        result = listing_service.get_availability(listing_id, start_date, end_date)
        return AvailabilityResponse(
            success=True,
            message="Available" if result.available else "Not available for selected dates",
            data=result.to_dict()
        )
    except MarketplaceError:
        raise
    except Exception as e:
        raise internal_error("Failed to check availability", "AVAILABILITY_FAILED", e) from e


@router.get(
    "/{listing_id}/quote",
    response_model=QuoteResponse,
    summary="Price a stay",
    responses={
        404: {"description": "Listing not found", "model": ErrorResponse},
        422: {"description": "Invalid date range", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def get_quote(
    listing_id: str,
    check_in: date = Query(..., alias="checkIn", description="Check-in date"),
    check_out: date = Query(..., alias="checkOut", description="Check-out date"),
    listing_service: ListingService = Depends(get_listing_service)
):
    try:
        result = listing_service.get_quote(listing_id, check_in, check_out)
        return QuoteResponse(success=True, message="Quote calculated", data=result.to_dict())
    except MarketplaceError:
        raise
    except Exception as e:
        raise internal_error("Failed to calculate quote", "QUOTE_FAILED", e) from e
