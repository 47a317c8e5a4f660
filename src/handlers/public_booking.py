"""
Public booking portal handler.

Accepts Lambda Function URL / API Gateway events as well as direct
invocations, and answers getCompany / createBooking requests. CORS is
configured on the Function URL, so no CORS headers are added here.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from core.contracts.booking_contracts import (
    CreateBookingRequest,
    GetCompanyRequest,
    decode_request,
)
from core.errors.exceptions import (
    BookingPortalError,
    BookingValidationError,
    InvalidActionError,
    RequestValidationError,
    TenantNotFoundError,
)
from features.booking.presenter import public_company
from features.booking.service import BookingService

logger = logging.getLogger(__name__)

RESPONSE_HEADERS = {"Content-Type": "application/json"}

_service: Optional[BookingService] = None


def get_booking_service() -> BookingService:
    """Build the service on first use and keep it for the life of the process."""
    global _service
    if _service is None:
        _service = BookingService()
    return _service


@dataclass
class InboundRequest:
    method: str
    path: str
    payload: Dict[str, Any]
    has_body: bool = False


def _query_params(event: Dict[str, Any]) -> Dict[str, Any]:
    return dict(event.get("queryStringParameters") or {})


def parse_event(event: Dict[str, Any]) -> InboundRequest:
    """Normalize a gateway event or a direct invocation into one request shape."""
    http = (event.get("requestContext") or {}).get("http") or {}
    method = (http.get("method") or event.get("httpMethod") or "POST").upper()
    path = http.get("path") or event.get("rawPath") or event.get("path") or "/"

    body = event.get("body")
    if body:
        if isinstance(body, str):
            try:
                payload = json.loads(body)
            except ValueError:
                # Not JSON: fall back to query string parameters
                payload = _query_params(event)
        else:
            payload = body
        if not isinstance(payload, dict):
            payload = _query_params(event)
        return InboundRequest(method, path, payload, has_body=True)

    if event.get("queryStringParameters"):
        return InboundRequest(method, path, _query_params(event))

    if "action" in event:
        # Direct invocation: the event is the payload
        return InboundRequest(method, path, dict(event), has_body=True)

    return InboundRequest(method, path, {})


def build_response(status_code: int, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(RESPONSE_HEADERS),
        "body": json.dumps(body) if body is not None else "",
    }


def handle_get_company(request: GetCompanyRequest, service: BookingService) -> Dict[str, Any]:
    if not request.code or not request.code.strip():
        return build_response(400, {"error": "Booking code is required"})

    # Codes are matched exactly, whitespace included
    company = service.get_company(request.code)
    if not company:
        return build_response(404, {"error": "Company not found or booking portal not enabled"})

    return build_response(200, {"success": True, "company": public_company(company)})


def handle_create_booking(request: CreateBookingRequest, service: BookingService) -> Dict[str, Any]:
    try:
        result = service.create_booking(request)
    except BookingValidationError as e:
        logger.info("Rejected booking, missing fields: %s", ", ".join(e.missing_fields))
        return build_response(400, {"error": "Missing required fields"})
    except TenantNotFoundError:
        return build_response(404, {"error": "Company not found or booking not enabled"})

    body = {
        "success": True,
        "bookingId": result.trip_id,
        "message": "Booking created successfully",
    }
    if result.customer_id:
        body["customerId"] = result.customer_id
    return build_response(200, body)


def _internal_error(exc: Exception) -> Dict[str, Any]:
    if isinstance(exc, BookingPortalError):
        message = str(exc) or "An unexpected error occurred"
    else:
        message = "An unexpected error occurred"
    return build_response(500, {
        "error": "Internal server error",
        "message": message,
        "type": type(exc).__name__,
    })


def handle_event(event: Dict[str, Any], service: Optional[BookingService] = None) -> Dict[str, Any]:
    """Route a public booking event and always return a response dict."""
    event = event or {}
    try:
        inbound = parse_event(event)
        logger.info(
            "Handler invoked: method=%s path=%s hasBody=%s",
            inbound.method, inbound.path, inbound.has_body,
        )

        # Preflight is answered by the Function URL; never run logic for it
        if inbound.method == "OPTIONS":
            return build_response(204)

        try:
            request = decode_request(inbound.payload)
        except InvalidActionError as e:
            return build_response(400, {"error": str(e)})
        except RequestValidationError as e:
            return build_response(400, {"error": str(e), "details": e.details})

        service = service or get_booking_service()
        if isinstance(request, GetCompanyRequest):
            return handle_get_company(request, service)
        return handle_create_booking(request, service)

    except Exception as e:
        logger.exception("Error in public booking handler: %s", type(e).__name__)
        return _internal_error(e)
