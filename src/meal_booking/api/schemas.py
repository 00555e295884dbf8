"""Request and response models for the HTTP API."""

from datetime import date, time

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    """Caller position."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class RangeBookingRequest(Coordinates):
    """Book every date from start_date to end_date."""

    start_date: date
    end_date: date


class SingleBookingRequest(Coordinates):
    """Book one date."""

    date: date


class CancelRequest(BaseModel):
    """Cancel one date."""

    date: date


class BookingResponse(BaseModel):
    """Result of a booking or cancellation."""

    message: str
    dates: list[date]


class UpcomingMealsResponse(BaseModel):
    """Dates with an active booking."""

    dates: list[date]


class LocationUpdateRequest(Coordinates):
    """Latest device position."""


class CutoffRequest(BaseModel):
    """New daily cutoff."""

    cutoff_time: time


class CutoffResponse(BaseModel):
    """Effective daily cutoff."""

    cutoff_time: time
    configured: bool
