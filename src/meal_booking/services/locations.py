"""User location tracking."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from meal_booking.domain.bookings import (
    BookingStatus,
    LunchWindow,
    OfficeGeofence,
    UserLocation,
)
from meal_booking.domain.geo import is_inside
from meal_booking.services.bookings import BookingRepository
from meal_booking.services.clock import Clock

_logger = logging.getLogger(__name__)


class LocationRepository(Protocol):
    """Persistence interface for the latest user location."""

    def get_latest(self, user_id: UUID) -> UserLocation | None:
        """Return the latest known location of the user."""

    def upsert(
        self, user_id: UUID, latitude: float, longitude: float, updated_at: datetime
    ) -> UserLocation:
        """Overwrite the user's location and return it."""


@dataclass
class LocationService:
    """Stores location updates and confirms lunch presence."""

    repository: LocationRepository
    booking_repository: BookingRepository
    geofence: OfficeGeofence
    lunch_window: LunchWindow
    clock: Clock

    def update_location(
        self, user_id: UUID, latitude: float, longitude: float
    ) -> UserLocation:
        """Record the latest position and flag today's booking if at the office."""
        now = self.clock.now()
        location = self.repository.upsert(user_id, latitude, longitude, now)
        if not self.lunch_window.contains(now.time()):
            return location

        booking = self.booking_repository.get_booking(user_id, now.date())
        if (
            booking is None
            or booking.status != BookingStatus.BOOKED
            or booking.available_for_lunch
        ):
            return location
        if is_inside(self.geofence, latitude, longitude):
            self.booking_repository.set_available_for_lunch(booking.id, True)
            _logger.info("User %s marked available for lunch", user_id)
        return location
