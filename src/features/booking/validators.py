# Booking submission checks and field defaulting

from typing import Any, Dict, List, Optional

from core.contracts.booking_contracts import CreateBookingRequest
from db.customers import normalize_email

__all__ = [
    "NO_FLIGHT_OR_JOB_NUMBER",
    "REQUIRED_BOOKING_FIELDS",
    "merge_customer_fields",
    "missing_required_fields",
    "normalize_email",
    "resolve_flight_or_job_number",
]

NO_FLIGHT_OR_JOB_NUMBER = "N/A"

# (attribute, wire name)
REQUIRED_BOOKING_FIELDS = (
    ("company_id", "companyId"),
    ("customer_name", "customerName"),
    ("customer_email", "customerEmail"),
    ("customer_phone", "customerPhone"),
    ("pickup_date", "pickupDate"),
    ("pickup_location", "pickupLocation"),
    ("dropoff_location", "dropoffLocation"),
)


def _present(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def missing_required_fields(request: CreateBookingRequest) -> List[str]:
    # Wire names of required fields that are absent or blank
    return [
        wire for attr, wire in REQUIRED_BOOKING_FIELDS
        if not _present(getattr(request, attr))
    ]


def resolve_flight_or_job_number(
    trip_type: Optional[str],
    flight_number: Optional[str],
    job_number: Optional[str],
) -> str:
    """
    Pick the value stored in Trip.flightNumber.

    Airport trips prefer the flight number, standard trips prefer the job
    number; trips without a type prefer the flight number. The other value
    is the fallback, then the literal "N/A". Blank values are skipped.
    """
    if trip_type == "Standard Trip":
        candidates = (job_number, flight_number)
    else:
        candidates = (flight_number, job_number)

    for value in candidates:
        if _present(value):
            return value.strip()
    return NO_FLIGHT_OR_JOB_NUMBER


def merge_customer_fields(
    existing: Dict[str, Any],
    name: Optional[str],
    phone: Optional[str],
    company_name: Optional[str],
) -> Dict[str, Any]:
    # Submitted non-empty values win, otherwise keep what is stored
    return {
        "name": name if _present(name) else existing.get("name"),
        "phone": phone if _present(phone) else existing.get("phone"),
        "companyName": company_name if _present(company_name) else existing.get("companyName"),
    }
