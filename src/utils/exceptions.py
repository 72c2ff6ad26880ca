"""
Categorical errors raised by the marketplace service layer and clients.
"""
from typing import Any, Dict, Optional


class MarketplaceError(Exception):
    """Base exception for marketplace errors."""
    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code


class UnauthenticatedError(MarketplaceError):
    """Raised when there is no valid session for an operation that needs one."""
    status_code = 401
    error_code = "UNAUTHENTICATED"


class ForbiddenError(MarketplaceError):
    """Raised when the actor does not own the resource."""
    status_code = 403
    error_code = "FORBIDDEN"


class NotFoundError(MarketplaceError):
    """Raised when a listing, booking or user does not exist."""
    status_code = 404
    error_code = "NOT_FOUND"


class ConflictError(MarketplaceError):
    """Raised on overlapping dates or duplicate registration."""
    status_code = 409
    error_code = "CONFLICT"


class ValidationError(MarketplaceError):
    """Raised when input is missing required fields or is inconsistent."""
    status_code = 422
    error_code = "VALIDATION_ERROR"


ERRORS_BY_STATUS = {
    400: ValidationError,
    401: UnauthenticatedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
}


def error_for_status(status_code: int, message: str, details: Optional[Dict[str, Any]] = None) -> MarketplaceError:
    """Build the exception matching an HTTP status code."""
    error_cls = ERRORS_BY_STATUS.get(status_code, MarketplaceError)
    return error_cls(message, details)
