"""
FastAPI application for the rental marketplace.
"""

from .app import create_app

__all__ = ["create_app"]
