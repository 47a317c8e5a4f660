"""
Booking package for public booking portal operations.
"""

from .service import BookingService, BookingResult
from .presenter import public_company

__all__ = [
    'BookingService',
    'BookingResult',
    'public_company',
]
