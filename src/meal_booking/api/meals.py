"""Meal booking and location endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from meal_booking.api.dependencies import current_user, get_container
from meal_booking.api.schemas import (
    BookingResponse,
    CancelRequest,
    LocationUpdateRequest,
    RangeBookingRequest,
    SingleBookingRequest,
    UpcomingMealsResponse,
)
from meal_booking.domain.models import UserRecord  # noqa: TC001

router = APIRouter(tags=["meals"])


@router.post("/meals/book-range")
async def book_range(
    body: RangeBookingRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> BookingResponse:
    """Book every date in a range."""
    container = get_container(request)
    bookings = await container.booking_service.book_range(
        user, body.start_date, body.end_date, body.latitude, body.longitude
    )
    return BookingResponse(
        message=f"Meals booked from {body.start_date} to {body.end_date}",
        dates=[booking.booking_date for booking in bookings],
    )


@router.post("/meals/book")
async def book_single(
    body: SingleBookingRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> BookingResponse:
    """Book a single date."""
    container = get_container(request)
    booking = await container.booking_service.book_single(
        user, body.date, body.latitude, body.longitude
    )
    return BookingResponse(
        message=f"Meal booked for {booking.booking_date}",
        dates=[booking.booking_date],
    )


@router.post("/meals/cancel")
async def cancel(
    body: CancelRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> BookingResponse:
    """Cancel the booking for a date."""
    container = get_container(request)
    booking = await container.booking_service.cancel(user, body.date)
    return BookingResponse(
        message=f"Meal cancelled for {booking.booking_date}",
        dates=[booking.booking_date],
    )


@router.get("/meals/upcoming")
async def upcoming(
    request: Request, user: UserRecord = Depends(current_user)
) -> UpcomingMealsResponse:
    """List upcoming booked dates."""
    container = get_container(request)
    return UpcomingMealsResponse(dates=container.booking_service.list_upcoming(user))


@router.post("/location")
async def update_location(
    body: LocationUpdateRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, str]:
    """Store the caller's latest position."""
    container = get_container(request)
    container.location_service.update_location(user.id, body.latitude, body.longitude)
    return {"status": "ok"}
