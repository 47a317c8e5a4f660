"""
Core Error Classes

Custom exceptions for the public booking service.

Client errors (bad input, unknown action, unresolved tenant) map to 4xx.
Everything else surfaces as a 500 at the handler boundary. Messages are
built so they never carry credentials, signatures or request bodies.
"""

from typing import Any, Dict, List, Optional


class BookingPortalError(Exception):
    """Base class for errors raised by this service."""
    pass


class ConfigurationError(BookingPortalError):
    """Raised when required environment configuration is missing."""
    pass


class CredentialsError(BookingPortalError):
    """Raised when no ambient AWS credentials can be obtained."""
    pass


class UpstreamError(BookingPortalError):
    """Raised when the data API cannot be reached or answers with a transport failure."""
    pass


class DataApiError(BookingPortalError):
    """Raised when the data API accepted the request but returned GraphQL errors."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class InvalidActionError(BookingPortalError):
    """Raised when the request carries no recognised action."""
    pass


class RequestValidationError(BookingPortalError):
    """Raised when request values cannot be decoded into the request model."""

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.details = details or []


class BookingValidationError(BookingPortalError):
    """Raised when a booking submission is missing required fields."""

    def __init__(self, missing_fields: List[str]):
        super().__init__(f"Missing required fields: {', '.join(missing_fields)}")
        self.missing_fields = missing_fields


class TenantNotFoundError(BookingPortalError):
    """Raised when a booking code resolves to no booking-enabled company."""
    pass
