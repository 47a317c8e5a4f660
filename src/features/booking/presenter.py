"""
Booking presenter: shapes data returned to the public portal.
"""

from typing import Any, Dict

PUBLIC_COMPANY_FIELDS = ("id", "name", "displayName", "logoUrl", "bookingCode", "bookingEnabled")


def public_company(company: Dict[str, Any]) -> Dict[str, Any]:
    """Restrict a company record to the fields safe to show unauthenticated users."""
    return {field: company.get(field) for field in PUBLIC_COMPANY_FIELDS}
