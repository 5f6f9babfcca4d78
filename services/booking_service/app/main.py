"""FastAPI application for the Booking Service."""

from fastapi import FastAPI
from libs.common.logging import configure_logging
from services.booking_service.routers import (
    blocks_router,
    bookings_router,
    calendar_router,
    discounts_router,
    packages_router,
)


def create_app() -> FastAPI:
    """Create and configure the Booking Service FastAPI app."""
    configure_logging()
    app = FastAPI(
        title="Academy Booking Service",
        version="0.1.0",
        description="Session computation, pricing and calendar for academy bookings.",
    )

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "booking"}

    # Pricing and booking writes
    app.include_router(bookings_router)
    app.include_router(calendar_router)

    # Catalogue management
    app.include_router(packages_router)
    app.include_router(discounts_router)
    app.include_router(blocks_router)

    return app


app = create_app()
