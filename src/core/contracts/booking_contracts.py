"""
Public Booking Request Contracts

The two request variants accepted by the booking portal, decoded once at
the boundary into typed models. Wire names are camelCase.

Fields the handler checks itself (booking code, customer details,
locations) are optional here so that a missing value turns into the
portal's own "missing fields" response rather than a decoding error.
"""

from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from core.errors.exceptions import InvalidActionError, RequestValidationError

SUPPORTED_ACTIONS = ("getCompany", "createBooking")

TripType = Literal["Airport Trip", "Standard Trip"]


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class GetCompanyRequest(_WireModel):
    """Look up a company by public booking code."""
    action: Literal["getCompany"]
    code: Optional[str] = None


class CreateBookingRequest(_WireModel):
    """Submit a booking through the public portal."""
    action: Literal["createBooking"]
    # Public booking code, not the internal company id
    company_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_company: Optional[str] = None
    trip_type: Optional[TripType] = None
    pickup_date: Optional[str] = None
    flight_number: Optional[str] = None
    job_number: Optional[str] = None
    pickup_location: Optional[str] = None
    dropoff_location: Optional[str] = None
    number_of_passengers: Optional[int] = Field(default=None, ge=1)
    vehicle_type: Optional[str] = None
    is_round_trip: bool = False
    return_date: Optional[str] = None
    return_time: Optional[str] = None
    special_instructions: Optional[str] = None

    @field_validator("trip_type", mode="before")
    @classmethod
    def _blank_trip_type(cls, value: Any) -> Any:
        return value or None

    @property
    def booking_code(self) -> Optional[str]:
        return self.company_id


PublicBookingRequest = Annotated[
    Union[GetCompanyRequest, CreateBookingRequest],
    Field(discriminator="action"),
]

_request_adapter = TypeAdapter(PublicBookingRequest)


def decode_request(payload: Dict[str, Any]) -> Union[GetCompanyRequest, CreateBookingRequest]:
    """
    Decode a raw request payload into its typed variant.

    Raises:
        InvalidActionError: If ``action`` is missing or not supported
        RequestValidationError: If field values have the wrong type
    """
    if not isinstance(payload, dict) or payload.get("action") not in SUPPORTED_ACTIONS:
        raise InvalidActionError(
            f"Invalid action. Supported actions: {', '.join(SUPPORTED_ACTIONS)}"
        )

    try:
        return _request_adapter.validate_python(payload)
    except ValidationError as e:
        details = [
            {"field": ".".join(str(p) for p in err["loc"][1:]), "message": err["msg"]}
            for err in e.errors()
        ]
        raise RequestValidationError("Invalid request", details=details) from e
