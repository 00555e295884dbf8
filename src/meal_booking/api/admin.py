"""Admin API endpoints with simple token auth."""

from __future__ import annotations

import dataclasses
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from meal_booking.api.schemas import CutoffRequest, CutoffResponse
from meal_booking.domain.bookings import BookingStatus
from meal_booking.scheduler import JOBS, run_job

if TYPE_CHECKING:
    from meal_booking.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/cutoff", dependencies=[Depends(require_admin)])
async def get_cutoff(request: Request) -> CutoffResponse:
    """Return the effective cutoff time."""
    container: AppContainer = request.app.state.container
    configured = container.cutoff_service.latest()
    return CutoffResponse(
        cutoff_time=container.cutoff_service.current_cutoff(),
        configured=configured is not None,
    )


@router.put("/cutoff", dependencies=[Depends(require_admin)])
async def update_cutoff(body: CutoffRequest, request: Request) -> CutoffResponse:
    """Store a new cutoff time."""
    container: AppContainer = request.app.state.container
    config = container.cutoff_service.update_cutoff(body.cutoff_time)
    return CutoffResponse(cutoff_time=config.cutoff_time, configured=True)


@router.get("/bookings", dependencies=[Depends(require_admin)])
async def list_bookings(
    request: Request,
    day: date,
    booking_status: BookingStatus = BookingStatus.BOOKED,
) -> dict[str, object]:
    """Return bookings for a date."""
    container: AppContainer = request.app.state.container
    bookings = container.booking_service.list_bookings_for_date(day, booking_status)
    return {
        "date": day.isoformat(),
        "status": str(booking_status),
        "bookings": [
            {
                "id": str(booking.id),
                "user_id": str(booking.user_id),
                "booked_at": booking.booked_at.isoformat(),
                "available_for_lunch": booking.available_for_lunch,
            }
            for booking in bookings
        ],
    }


@router.post("/jobs/{job_name}", dependencies=[Depends(require_admin)])
async def trigger_job(job_name: str, request: Request) -> dict[str, object]:
    """Run a periodic job on demand."""
    if job_name not in JOBS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    container: AppContainer = request.app.state.container
    result = await run_job(container, job_name)
    if dataclasses.is_dataclass(result):
        result = dataclasses.asdict(result)
    return {"job": job_name, "result": result}
