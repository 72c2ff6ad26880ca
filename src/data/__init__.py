"""
Demo data for the marketplace.
"""

from .seed import seed_repositories, DEMO_PASSWORD

__all__ = ['seed_repositories', 'DEMO_PASSWORD']
