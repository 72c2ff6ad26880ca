"""
Storage backends for marketplace records.
"""
from dataclasses import dataclass

from .repository import Repository
from .memory import InMemoryRepository

__all__ = ['Repository', 'InMemoryRepository', 'Repositories', 'build_repositories']


@dataclass
class Repositories:
    """One repository per collection."""
    listings: Repository
    bookings: Repository
    users: Repository
    reviews: Repository


def build_repositories(config) -> Repositories:
    """
    Create the repositories selected by ``config.storage_backend``.

    Args:
        config: AppConfig with backend and collection names

    Returns:
        Repositories bundle
    """
    backend = config.storage_backend.strip().lower()
    if backend == "supabase":
        from .supabase_repository import SupabaseRepository
        factory = SupabaseRepository
    elif backend == "memory":
        factory = InMemoryRepository
    else:
        raise ValueError(f"Unknown storage backend: {config.storage_backend}")

    return Repositories(
        listings=factory(config.listings_collection),
        bookings=factory(config.bookings_collection),
        users=factory(config.users_collection),
        reviews=factory(config.reviews_collection),
    )
