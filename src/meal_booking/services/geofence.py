"""Periodic reconciliation of bookings against live location."""

import logging
from dataclasses import dataclass

from meal_booking.domain.bookings import (
    BookingStatus,
    LunchWindow,
    MealBooking,
    OfficeGeofence,
)
from meal_booking.domain.geo import distance_to_office
from meal_booking.domain.notifications import NotificationType
from meal_booking.services.bookings import BookingRepository
from meal_booking.services.clock import Clock
from meal_booking.services.dispatch import NotificationDispatcher
from meal_booking.services.locations import LocationRepository
from meal_booking.services.notifications import NotificationService

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconciliationReport:
    """Outcome of one reconciliation scan."""

    checked: int
    defaulted: int
    skipped: int
    errors: int = 0


@dataclass
class GeofenceReconciler:
    """Moves today's BOOKED bookings to DEFAULT when the holder is away."""

    booking_repository: BookingRepository
    location_repository: LocationRepository
    notification_service: NotificationService
    dispatcher: NotificationDispatcher
    geofence: OfficeGeofence
    lunch_window: LunchWindow
    clock: Clock

    async def run(self) -> ReconciliationReport:
        """Scan today's active bookings once."""
        now = self.clock.now()
        if not self.lunch_window.contains(now.time()):
            _logger.debug("Geofence check outside lunch window at %s", now.time())
            return ReconciliationReport(checked=0, defaulted=0, skipped=0)

        bookings = self.booking_repository.list_by_date_and_status(
            now.date(), BookingStatus.BOOKED
        )
        defaulted = 0
        skipped = 0
        errors = 0
        for booking in bookings:
            try:
                if await self._reconcile(booking):
                    defaulted += 1
                else:
                    skipped += 1
            except Exception:
                errors += 1
                _logger.exception(
                    "Geofence reconciliation failed: booking_id=%s", booking.id
                )
        _logger.info(
            "Geofence check on %s: checked=%s defaulted=%s",
            now.date(),
            len(bookings),
            defaulted,
        )
        return ReconciliationReport(
            checked=len(bookings), defaulted=defaulted, skipped=skipped, errors=errors
        )

    async def _reconcile(self, booking: MealBooking) -> bool:
        location = self.location_repository.get_latest(booking.user_id)
        if location is None:
            _logger.debug("No location data for user %s", booking.user_id)
            return False
        distance = distance_to_office(
            self.geofence, location.latitude, location.longitude
        )
        if distance <= self.geofence.radius_meters:
            return False
        if not self.booking_repository.transition_status(
            booking.id, expected=BookingStatus.BOOKED, status=BookingStatus.DEFAULT
        ):
            return False

        _logger.warning(
            "Booking defaulted: user_id=%s date=%s distance=%.0fm",
            booking.user_id,
            booking.booking_date,
            distance,
        )
        if self.notification_service.already_scheduled_on(
            booking.user_id, NotificationType.MISSED_BOOKING, booking.booking_date
        ):
            return True
        notification = self.notification_service.schedule(
            user_id=booking.user_id,
            notification_type=NotificationType.MISSED_BOOKING,
            title="Lunch auto-cancelled",
            message=(
                f"You were not near the office during lunch on "
                f"{booking.booking_date} ({distance:.0f}m away)."
            ),
        )
        await self.dispatcher.dispatch(notification)
        return True
