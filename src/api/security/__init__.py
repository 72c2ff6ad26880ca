"""
Token signing for API sessions.
"""

from .jwt import create_token, verify_token

__all__ = ["create_token", "verify_token"]
