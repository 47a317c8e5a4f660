# db/companies.py

"""
Data API model: Company (tenant)

Fields read here:
    - id (ID)                  # Tenant identifier, issued by the data API
    - name (string)            # Legal / account name
    - displayName (string)     # Name shown on the booking portal
    - logoUrl (string)         # Logo reference
    - bookingCode (string)     # Public code used by the booking portal (e.g. "ACME")
    - bookingEnabled (boolean) # Whether the public booking portal is on

Notes:
    - Billing and subscription fields live on the same model but are never
      selected by this service.
    - bookingCode is not unique at the data layer. When several enabled
      companies share a code, the first one returned wins.
"""

import logging
from typing import Any, Dict, Optional

from db.base import GraphQLRepo

logger = logging.getLogger(__name__)

LIST_COMPANIES_QUERY = """
query ListCompanies($filter: ModelCompanyFilterInput, $limit: Int, $nextToken: String) {
  listCompanies(filter: $filter, limit: $limit, nextToken: $nextToken) {
    items {
      id
      name
      displayName
      logoUrl
      bookingCode
      bookingEnabled
    }
    nextToken
  }
}
"""


def is_bookable(company: Dict[str, Any], code: str) -> bool:
    """A company takes public bookings iff booking is enabled and the code matches exactly."""
    return company.get("bookingEnabled") is True and company.get("bookingCode") == code


class CompanyDB(GraphQLRepo):
    def get_by_booking_code(self, code: str, page_size: int = 100) -> Optional[Dict[str, Any]]:
        """Fetch the booking-enabled company for a public booking code, or None."""
        if not code:
            return None
        company = self._first_match(
            LIST_COMPANIES_QUERY,
            "listCompanies",
            {
                "filter": {
                    "bookingCode": {"eq": code},
                    "bookingEnabled": {"eq": True},
                },
                "limit": page_size,
            },
            predicate=lambda item: is_bookable(item, code),
        )
        logger.info("Company lookup result: %s", "Found" if company else "Not found")
        return company
