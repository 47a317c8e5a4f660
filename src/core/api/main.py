"""
Local Booking Portal Server

Serves the public booking handler over HTTP for development. Host and
port come from BOOKING_API_HOST / BOOKING_API_PORT.
"""

import os

from fastapi import FastAPI

from core.api import booking
from core.config import configure_logging


def create_app() -> FastAPI:
    configure_logging()
    api = FastAPI(
        title="Public Booking API",
        description="Company lookup and booking intake for the public portal",
        version="1.0.0",
    )
    api.include_router(booking.router, prefix="/api", tags=["booking"])

    @api.get("/health")
    async def health():
        return {"status": "ok"}

    return api


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=os.getenv("BOOKING_API_HOST", "127.0.0.1"),
        port=int(os.getenv("BOOKING_API_PORT", "8000")),
    )
