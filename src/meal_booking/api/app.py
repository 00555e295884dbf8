"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from meal_booking.api.admin import router as admin_router
from meal_booking.api.meals import router as meals_router
from meal_booking.app_logging import configure_logging
from meal_booking.containers import AppContainer
from meal_booking.domain.errors import (
    AlreadyBookedError,
    BookingConflictError,
    BookingNotFoundError,
    BookingValidationError,
    ConfigurationError,
    DomainError,
)
from meal_booking.scheduler import build_scheduler


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        scheduler = None
        if container.settings.scheduler_enabled:
            scheduler = build_scheduler(container)
            scheduler.start()
            logger.info("Scheduler started with %s jobs", len(scheduler.get_jobs()))
        yield
        if scheduler is not None:
            scheduler.shutdown(wait=False)
        await app.state.container.close_resources()

    app = FastAPI(title="Meal Booking", lifespan=lifespan)
    app.state.container = container

    app.include_router(meals_router)
    app.include_router(admin_router)

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Configuration error on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status_code,
            content={"message": exc.message, "code": exc.code, "details": exc.details},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: DomainError) -> int:
    if isinstance(exc, BookingNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, AlreadyBookedError | BookingConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, BookingValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, ConfigurationError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR
