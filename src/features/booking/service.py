"""
Booking service layer for public booking portal operations.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from core.clients.graphql_client import SignedGraphQLClient
from core.contracts.booking_contracts import CreateBookingRequest
from core.errors.exceptions import (
    BookingValidationError,
    DataApiError,
    TenantNotFoundError,
)
from db.companies import CompanyDB
from db.customers import CustomerDB
from db.trips import TripDB
from .validators import (
    merge_customer_fields,
    missing_required_fields,
    normalize_email,
    resolve_flight_or_job_number,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingResult:
    trip_id: str
    customer_id: Optional[str] = None


class BookingService:
    """
    Resolves tenants and writes bookings through the data API.

    Writes are not wrapped in a transaction: if the trip cannot be created
    after a new customer was written, that customer stays. Concurrent
    submissions for the same new email can both create a customer.
    """

    def __init__(
        self,
        client: Optional[SignedGraphQLClient] = None,
        *,
        companies: Optional[CompanyDB] = None,
        customers: Optional[CustomerDB] = None,
        trips: Optional[TripDB] = None,
    ):
        if client is None and not (companies and customers and trips):
            client = SignedGraphQLClient()
        self.companies = companies or CompanyDB(client)
        self.customers = customers or CustomerDB(client)
        self.trips = trips or TripDB(client)

    def get_company(self, code: str) -> Optional[Dict[str, Any]]:
        """Return the booking-enabled company for a code, or None."""
        return self.companies.get_by_booking_code(code)

    def resolve_customer(
        self,
        company_id: str,
        email: Optional[str],
        name: Optional[str],
        phone: Optional[str],
        company_name: Optional[str] = None,
    ) -> Optional[str]:
        """
        Find the tenant's customer by normalized email, updating it, or create one.

        Returns the customer id, or None when no email was given.
        """
        normalized = normalize_email(email)
        if not normalized:
            return None

        existing = self.customers.lookup_by_email(company_id, normalized)
        if existing:
            customer_id = existing["id"]
            if any(v and v.strip() for v in (name, phone, company_name)):
                fields = merge_customer_fields(existing, name, phone, company_name)
                self.customers.update_customer(customer_id, **fields)
            logger.info("Matched existing customer %s", customer_id)
            return customer_id

        created = self.customers.create_customer(
            company_id,
            name=name,
            email=normalized,
            phone=phone,
            company_name=company_name or None,
        )
        customer_id = created.get("id")
        if not customer_id:
            raise DataApiError("Failed to create customer")
        logger.info("Created customer %s", customer_id)
        return customer_id

    def create_booking(self, request: CreateBookingRequest) -> BookingResult:
        """
        Validate a submission and persist its customer and trip.

        Raises:
            BookingValidationError: If required fields are missing (nothing written)
            TenantNotFoundError: If the booking code has no enabled company (nothing written)
            DataApiError, UpstreamError, CredentialsError: If a data API call fails
        """
        missing = missing_required_fields(request)
        if missing:
            raise BookingValidationError(missing)

        company = self.get_company(request.booking_code)
        if not company:
            raise TenantNotFoundError(
                "Company not found or booking not enabled"
            )
        company_id = company["id"]

        customer_id = self.resolve_customer(
            company_id,
            request.customer_email,
            request.customer_name,
            request.customer_phone,
            request.customer_company,
        )

        trip = self.trips.create_trip(
            company_id,
            pickup_date=request.pickup_date,
            flight_number=resolve_flight_or_job_number(
                request.trip_type, request.flight_number, request.job_number
            ),
            pickup_location=request.pickup_location,
            dropoff_location=request.dropoff_location,
            number_of_passengers=request.number_of_passengers or 1,
            customer_id=customer_id,
            notes=request.special_instructions,
        )
        trip_id = trip.get("id")
        if not trip_id:
            raise DataApiError("Failed to create trip")

        logger.info("Created trip %s for company %s", trip_id, company_id)
        return BookingResult(trip_id=trip_id, customer_id=customer_id)
