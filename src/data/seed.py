"""
Demo data for the in-memory backend.
"""
from typing import Callable

from ..storage import Repositories

DEMO_PASSWORD = "password123"

USERS = [
    {
        "id": "user-1",
        "email": "sarah.host@example.com",
        "first_name": "Sarah",
        "last_name": "Johnson",
        "avatar": "https://i.pravatar.cc/150?img=1",
        "bio": "Superhost sharing coastal homes since 2015.",
        "is_host": True,
        "created_at": "2023-01-15T10:00:00+00:00",
    },
    {
        "id": "user-2",
        "email": "marco.host@example.com",
        "first_name": "Marco",
        "last_name": "Rossi",
        "avatar": "https://i.pravatar.cc/150?img=3",
        "bio": "Mountain cabins and city lofts.",
        "is_host": True,
        "created_at": "2023-03-02T09:30:00+00:00",
    },
    {
        "id": "user-3",
        "email": "alex.guest@example.com",
        "first_name": "Alex",
        "last_name": "Kim",
        "avatar": "https://i.pravatar.cc/150?img=5",
        "is_host": False,
        "created_at": "2023-06-20T14:45:00+00:00",
    },
]

LISTINGS = [
    {
        "id": "listing-1",
        "host_id": "user-1",
        "title": "Beachfront Villa with Ocean Views",
        "description": "Wake up to the sound of waves in this private villa.",
        "property_type": "Villa",
        "location": {"address": "21 Pacific Coast Hwy", "city": "Malibu", "state": "CA",
                     "country": "United States", "zip_code": "90265"},
        "price": 450,
        "max_guests": 8,
        "bedrooms": 4,
        "bathrooms": 3,
        "amenities": ["WiFi", "Kitchen", "Pool", "Hot tub", "Free parking", "Air conditioning"],
        "images": ["https://images.example.com/listing-1/1.jpg", "https://images.example.com/listing-1/2.jpg"],
        "rating": 4.9,
        "review_count": 2,
    },
    {
        "id": "listing-2",
        "host_id": "user-1",
        "title": "Modern Downtown Apartment",
        "description": "Walk to cafés, galleries and the waterfront.",
        "property_type": "Apartment",
        "location": {"address": "500 Market St", "city": "San Francisco", "state": "CA",
                     "country": "United States", "zip_code": "94105"},
        "price": 180,
        "max_guests": 3,
        "bedrooms": 1,
        "bathrooms": 1,
        "amenities": ["WiFi", "Kitchen", "Washer", "Workspace", "Elevator"],
        "images": ["https://images.example.com/listing-2/1.jpg"],
        "rating": 4.7,
        "review_count": 1,
    },
    {
        "id": "listing-3",
        "host_id": "user-2",
        "title": "Cozy Cabin in the Pines",
        "description": "A wood-stove cabin ten minutes from the ski lifts.",
        "property_type": "Cabin",
        "location": {"address": "8 Timber Ln", "city": "Aspen", "state": "CO",
                     "country": "United States", "zip_code": "81611"},
        "price": 220,
        "max_guests": 4,
        "bedrooms": 2,
        "bathrooms": 1,
        "amenities": ["WiFi", "Kitchen", "Fireplace", "Heating", "Free parking", "Pet friendly"],
        "images": ["https://images.example.com/listing-3/1.jpg"],
        "rating": 4.8,
        "review_count": 1,
    },
    {
        "id": "listing-4",
        "host_id": "user-2",
        "title": "Industrial Loft near the Canals",
        "description": "Exposed brick, high ceilings and a quiet courtyard.",
        "property_type": "Loft",
        "location": {"address": "Via Tortona 12", "city": "Milan", "state": "Lombardy",
                     "country": "Italy", "zip_code": "20144"},
        "price": 140,
        "max_guests": 2,
        "bedrooms": 1,
        "bathrooms": 1,
        "amenities": ["WiFi", "Kitchen", "Heating", "Workspace"],
        "images": ["https://images.example.com/listing-4/1.jpg"],
        "rating": 4.6,
        "review_count": 0,
    },
    {
        "id": "listing-5",
        "host_id": "user-1",
        "title": "Penthouse Suite with Rooftop Terrace",
        "description": "Skyline views and a private hot tub.",
        "property_type": "Penthouse",
        "location": {"address": "1 Collins Ave", "city": "Miami", "state": "FL",
                     "country": "United States", "zip_code": "33139"},
        "price": 600,
        "max_guests": 6,
        "bedrooms": 3,
        "bathrooms": 3,
        "amenities": ["WiFi", "Kitchen", "Hot tub", "Gym", "Air conditioning", "Elevator", "TV"],
        "images": ["https://images.example.com/listing-5/1.jpg"],
        "rating": 5.0,
        "review_count": 0,
    },
    {
        "id": "listing-6",
        "host_id": "user-2",
        "title": "Lakeside Family House",
        "description": "Big garden, kayaks included.",
        "property_type": "House",
        "location": {"address": "Lungolago 4", "city": "Como", "state": "Lombardy",
                     "country": "Italy", "zip_code": "22100"},
        "price": 310,
        "max_guests": 10,
        "bedrooms": 5,
        "bathrooms": 3,
        "amenities": ["WiFi", "Kitchen", "Washer", "Dryer", "Free parking", "TV"],
        "images": ["https://images.example.com/listing-6/1.jpg"],
        "rating": 4.5,
        "review_count": 0,
    },
]

BOOKINGS = [
    {
        "id": "booking-1",
        "listing_id": "listing-1",
        "guest_id": "user-3",
        "host_id": "user-1",
        "check_in": "2024-07-01",
        "check_out": "2024-07-05",
        "guests": 4,
        "total_price": 1800,
        "status": "confirmed",
    },
    {
        "id": "booking-2",
        "listing_id": "listing-3",
        "guest_id": "user-3",
        "host_id": "user-2",
        "check_in": "2024-12-20",
        "check_out": "2024-12-27",
        "guests": 2,
        "total_price": 1540,
        "status": "pending",
    },
    {
        "id": "booking-3",
        "listing_id": "listing-2",
        "guest_id": "user-2",
        "host_id": "user-1",
        "check_in": "2024-05-10",
        "check_out": "2024-05-12",
        "guests": 1,
        "total_price": 360,
        "status": "cancelled",
    },
]

REVIEWS = [
    {"id": "review-1", "listing_id": "listing-1", "user_id": "user-3", "rating": 5,
     "comment": "Unreal sunsets, spotless house.", "created_at": "2024-07-06T12:00:00+00:00"},
    {"id": "review-2", "listing_id": "listing-1", "user_id": "user-2", "rating": 4.8,
     "comment": "Great for a group, pool was warm.", "created_at": "2024-03-18T08:20:00+00:00"},
    {"id": "review-3", "listing_id": "listing-2", "user_id": "user-3", "rating": 4.7,
     "comment": "Perfect location for a work trip.", "created_at": "2024-02-02T19:05:00+00:00"},
    {"id": "review-4", "listing_id": "listing-3", "user_id": "user-3", "rating": 4.8,
     "comment": "Fireplace nights were the best.", "created_at": "2024-01-11T21:40:00+00:00"},
]


def seed_repositories(repositories: Repositories, encrypt_password: Callable[[str], str]) -> None:
    """
    Load the demo users, listings, bookings and reviews.

    Args:
        repositories: Empty repositories to fill
        encrypt_password: Password encryption used by the auth service
    """
    for user in USERS:
        repositories.users.insert({**user, "password": encrypt_password(DEMO_PASSWORD)})
    for listing in LISTINGS:
        repositories.listings.insert({"is_available": True, **listing})
    for booking in BOOKINGS:
        repositories.bookings.insert(booking)
    for review in REVIEWS:
        repositories.reviews.insert(review)
