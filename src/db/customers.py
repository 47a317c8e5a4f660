"""
Data API model: Customer (multi-tenant)

Fields:
    - id (ID)
    - companyId (ID)          → owning tenant
    - name (string)
    - email (string)          → stored as strip().lower()
    - phone (string)
    - companyName (string, optional)
    - isActive (boolean)

Lookup:
    - by (companyId, normalized email). Nothing enforces uniqueness; if
      duplicates exist the first item returned is used.
"""

import logging
from typing import Any, Dict, Optional

from db.base import GraphQLRepo, strip_none

logger = logging.getLogger(__name__)

LIST_CUSTOMERS_QUERY = """
query ListCustomers($filter: ModelCustomerFilterInput, $limit: Int, $nextToken: String) {
  listCustomers(filter: $filter, limit: $limit, nextToken: $nextToken) {
    items {
      id
      name
      email
      phone
      companyName
    }
    nextToken
  }
}
"""

CREATE_CUSTOMER_MUTATION = """
mutation CreateCustomer($input: CreateCustomerInput!) {
  createCustomer(input: $input) {
    id
  }
}
"""

UPDATE_CUSTOMER_MUTATION = """
mutation UpdateCustomer($input: UpdateCustomerInput!) {
  updateCustomer(input: $input) {
    id
  }
}
"""


def normalize_email(email: Optional[str]) -> Optional[str]:
    return email.strip().lower() if email and email.strip() else None


class CustomerDB(GraphQLRepo):
    def lookup_by_email(
        self, company_id: str, email: str, page_size: int = 100
    ) -> Optional[Dict[str, Any]]:
        normalized = normalize_email(email)
        if not normalized:
            return None
        return self._first_match(
            LIST_CUSTOMERS_QUERY,
            "listCustomers",
            {
                "filter": {
                    "companyId": {"eq": company_id},
                    "email": {"eq": normalized},
                },
                "limit": page_size,
            },
        )

    def create_customer(
        self,
        company_id: str,
        name: str,
        email: str,
        phone: Optional[str] = None,
        company_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create an active customer and return the created record (at least its id)."""
        item = strip_none({
            "companyId": company_id,
            "name": name,
            "email": normalize_email(email),
            "phone": phone,
            "companyName": company_name,
            "isActive": True,
        })
        data = self.client.execute(CREATE_CUSTOMER_MUTATION, {"input": item})
        return data.get("createCustomer") or {}

    def update_customer(self, customer_id: str, **fields: Any) -> Dict[str, Any]:
        """Patch a customer in place. Only the given non-None fields are sent."""
        item = strip_none({"id": customer_id, **fields})
        data = self.client.execute(UPDATE_CUSTOMER_MUTATION, {"input": item})
        return data.get("updateCustomer") or {}
