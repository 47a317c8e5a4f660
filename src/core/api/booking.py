"""
Public Booking API Endpoint

FastAPI route mirroring the Lambda Function URL, for local runs.
The request is wrapped into a gateway-shaped event and passed to the
same handler the Lambda uses.
"""

from fastapi import APIRouter, Request, Response
from fastapi.concurrency import run_in_threadpool

from handlers import public_booking

router = APIRouter()


async def _to_event(request: Request) -> dict:
    raw = await request.body()
    return {
        "requestContext": {
            "http": {"method": request.method, "path": request.url.path},
        },
        "body": raw.decode("utf-8") if raw else None,
        "queryStringParameters": dict(request.query_params) or None,
    }


@router.api_route("/public-booking", methods=["POST", "OPTIONS"])
async def public_booking_endpoint(request: Request) -> Response:
    """
    Handle a getCompany / createBooking request.

    The handler makes blocking data API calls, so it runs in the
    threadpool rather than on the event loop.

    Returns:
        The handler's status code, headers and JSON body unchanged
    """
    event = await _to_event(request)
    result = await run_in_threadpool(public_booking.handle_event, event)
    return Response(
        content=result["body"],
        status_code=result["statusCode"],
        headers=result["headers"],
    )
