"""Meal booking lifecycle rules."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID

from meal_booking.domain.bookings import BookingStatus, MealBooking, OfficeGeofence
from meal_booking.domain.errors import (
    AlreadyBookedError,
    BookingConflictError,
    BookingNotFoundError,
    ConfigMissingError,
    CutoffClosedError,
    InvalidRangeError,
    OutOfAreaError,
    PastCancellationError,
    PastDateError,
    WeekendBookingError,
)
from meal_booking.domain.geo import distance_to_office
from meal_booking.domain.models import UserRecord
from meal_booking.domain.notifications import NotificationType
from meal_booking.services.clock import Clock, is_weekend, iter_days
from meal_booking.services.cutoff import CutoffService
from meal_booking.services.dispatch import NotificationDispatcher
from meal_booking.services.notifications import NotificationService

_logger = logging.getLogger(__name__)


class BookingRepository(Protocol):
    """Persistence interface for meal bookings."""

    def get_booking(self, user_id: UUID, booking_date: date) -> MealBooking | None:
        """Return the booking for a user and date, if present."""

    def exists_for_user_on(self, user_id: UUID, booking_date: date) -> bool:
        """Return True if any booking row exists for the user and date."""

    def exists_for_user_between(self, user_id: UUID, start: date, end: date) -> bool:
        """Return True if any booking row exists in the inclusive date range."""

    def create_booking(
        self,
        user_id: UUID,
        booking_date: date,
        booked_at: datetime,
        status: BookingStatus,
    ) -> MealBooking:
        """Insert a booking row and return it."""

    def transition_status(
        self,
        booking_id: UUID,
        expected: BookingStatus,
        status: BookingStatus,
        booked_at: datetime | None = None,
    ) -> bool:
        """Set a new status only if the current one matches `expected`.

        A `booked_at` value refreshes the booking time and clears the presence
        flag, as for a new booking.
        """

    def set_available_for_lunch(self, booking_id: UUID, available: bool) -> None:
        """Update the presence flag of a booking."""

    def list_by_date_and_status(
        self, booking_date: date, status: BookingStatus
    ) -> list[MealBooking]:
        """Return bookings for a date with the given status."""

    def list_for_user_from(self, user_id: UUID, start: date) -> list[MealBooking]:
        """Return a user's bookings on or after a date, ordered by date."""


@dataclass
class BookingService:
    """Creates, reactivates and cancels meal bookings."""

    repository: BookingRepository
    cutoff_service: CutoffService
    notification_service: NotificationService
    dispatcher: NotificationDispatcher
    geofence: OfficeGeofence
    clock: Clock
    block_weekends: bool = True

    async def book_range(  # noqa: PLR0913
        self,
        user: UserRecord,
        start_date: date,
        end_date: date,
        latitude: float,
        longitude: float,
    ) -> list[MealBooking]:
        """Book every date in the inclusive range or none of them.

        Saturdays and Sundays inside the range are skipped while weekend
        bookings are blocked; a range made only of weekend days is rejected.
        """
        distance = distance_to_office(self.geofence, latitude, longitude)
        if distance > self.geofence.radius_meters:
            raise OutOfAreaError(distance)

        now = self.clock.now()
        today = now.date()
        if start_date <= today:
            raise PastDateError(start_date)
        if end_date < start_date:
            raise InvalidRangeError(start_date, end_date)
        cutoff = self.cutoff_service.latest()
        if cutoff is None:
            raise ConfigMissingError()

        days = self._working_days(start_date, end_date)
        existing = {
            day: self._check_bookable(user.id, day, now, cutoff) for day in days
        }

        booked: list[MealBooking] = []
        for day in days:
            booked.append(self._commit(user.id, day, existing[day], now))

        _logger.info(
            "Booked meals: user_id=%s start=%s end=%s days=%s",
            user.id,
            start_date,
            end_date,
            len(booked),
        )
        await self._confirm(
            user.id,
            NotificationType.BOOKING_CONFIRMATION,
            "Meal booking confirmed",
            _range_message(start_date, end_date),
        )
        return booked

    async def book_single(
        self, user: UserRecord, booking_date: date, latitude: float, longitude: float
    ) -> MealBooking:
        """Book a single date."""
        booked = await self.book_range(
            user, booking_date, booking_date, latitude, longitude
        )
        return booked[0]

    async def cancel(self, user: UserRecord, booking_date: date) -> MealBooking:
        """Cancel a booking by moving it to CANCELLED.

        Cancelling a date that is already CANCELLED changes nothing but still
        confirms the cancellation to the caller.
        """
        now = self.clock.now()
        today = now.date()
        if booking_date < today:
            raise PastCancellationError(booking_date)

        booking = self.repository.get_booking(user.id, booking_date)
        if booking is None:
            raise BookingNotFoundError(booking_date)
        if booking.status != BookingStatus.CANCELLED:
            self._transition_to_cancelled(booking, now)
            _logger.info("Cancelled meal: user_id=%s date=%s", user.id, booking_date)
        await self._confirm(
            user.id,
            NotificationType.CANCELLATION_CONFIRMATION,
            "Meal cancelled",
            f"Your meal booking for {booking_date} has been cancelled successfully.",
        )
        return MealBooking(
            id=booking.id,
            user_id=booking.user_id,
            booking_date=booking.booking_date,
            booked_at=booking.booked_at,
            status=BookingStatus.CANCELLED,
            available_for_lunch=booking.available_for_lunch,
        )

    def _transition_to_cancelled(self, booking: MealBooking, now: datetime) -> None:
        cutoff = self.cutoff_service.latest()
        if (
            cutoff is not None
            and booking.booking_date == now.date() + timedelta(days=1)
            and now.time() > cutoff
        ):
            raise CutoffClosedError(booking.booking_date, cutoff)
        if not self.repository.transition_status(
            booking.id, expected=booking.status, status=BookingStatus.CANCELLED
        ):
            raise BookingConflictError(booking.booking_date)

    def list_upcoming(self, user: UserRecord) -> list[date]:
        """Return BOOKED dates from today onwards."""
        today = self.clock.now().date()
        return [
            booking.booking_date
            for booking in self.repository.list_for_user_from(user.id, today)
            if booking.status == BookingStatus.BOOKED
        ]

    def list_bookings_for_date(
        self, booking_date: date, status: BookingStatus = BookingStatus.BOOKED
    ) -> list[MealBooking]:
        """Return bookings for a date and status."""
        return self.repository.list_by_date_and_status(booking_date, status)

    def _working_days(self, start_date: date, end_date: date) -> list[date]:
        days = iter_days(start_date, end_date)
        if not self.block_weekends:
            return days
        working = [day for day in days if not is_weekend(day)]
        if not working:
            raise WeekendBookingError(start_date)
        return working

    def _check_bookable(
        self, user_id: UUID, day: date, now: datetime, cutoff: time
    ) -> MealBooking | None:
        if day == now.date() + timedelta(days=1) and now.time() > cutoff:
            raise CutoffClosedError(day, cutoff)
        existing = self.repository.get_booking(user_id, day)
        if existing is not None and existing.status == BookingStatus.BOOKED:
            raise AlreadyBookedError(day)
        return existing

    def _commit(
        self, user_id: UUID, day: date, existing: MealBooking | None, now: datetime
    ) -> MealBooking:
        if existing is None:
            return self.repository.create_booking(
                user_id=user_id,
                booking_date=day,
                booked_at=now,
                status=BookingStatus.BOOKED,
            )
        if not self.repository.transition_status(
            existing.id,
            expected=existing.status,
            status=BookingStatus.BOOKED,
            booked_at=now,
        ):
            raise BookingConflictError(day)
        return MealBooking(
            id=existing.id,
            user_id=existing.user_id,
            booking_date=existing.booking_date,
            booked_at=now,
            status=BookingStatus.BOOKED,
            available_for_lunch=False,
        )

    async def _confirm(
        self,
        user_id: UUID,
        notification_type: NotificationType,
        title: str,
        message: str,
    ) -> None:
        notification = self.notification_service.schedule(
            user_id=user_id,
            notification_type=notification_type,
            title=title,
            message=message,
        )
        await self.dispatcher.dispatch(notification)


def _range_message(start_date: date, end_date: date) -> str:
    if start_date == end_date:
        return f"Your meal is booked for {start_date}."
    return f"Your meals are booked from {start_date} to {end_date}."
