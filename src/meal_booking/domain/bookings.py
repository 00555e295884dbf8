"""Domain models for meal bookings."""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import StrEnum
from uuid import UUID


class BookingStatus(StrEnum):
    """Lifecycle status of a meal booking."""

    BOOKED = "BOOKED"
    DEFAULT = "DEFAULT"
    CANCELLED = "CANCELLED"
    MISSED = "MISSED"


@dataclass(frozen=True)
class MealBooking:
    """A user's reservation for a single calendar date."""

    id: UUID
    user_id: UUID
    booking_date: date
    booked_at: datetime
    status: BookingStatus
    available_for_lunch: bool = False


@dataclass(frozen=True)
class CutoffConfig:
    """Daily cutoff after which tomorrow's bookings are closed."""

    id: int
    cutoff_time: time


@dataclass(frozen=True)
class UserLocation:
    """Latest known position of a user."""

    user_id: UUID
    latitude: float
    longitude: float
    updated_at: datetime


@dataclass(frozen=True)
class OfficeGeofence:
    """Circular area around the office."""

    latitude: float
    longitude: float
    radius_meters: float


@dataclass(frozen=True)
class LunchWindow:
    """Time-of-day interval in which presence is reconciled."""

    start: time
    end: time

    def contains(self, moment: time) -> bool:
        """Return True if the time of day falls inside the window."""
        return self.start <= moment <= self.end
