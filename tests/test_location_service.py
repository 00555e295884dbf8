"""Tests for location updates."""

from datetime import date

from meal_booking.containers import AppContainer
from meal_booking.domain.bookings import BookingStatus
from meal_booking.domain.models import UserRecord
from tests.conftest import (
    FAR_LAT,
    FAR_LON,
    OFFICE_LAT,
    OFFICE_LON,
    FixedClock,
    InMemoryBookingRepository,
    InMemoryLocationRepository,
    local,
)


def test_update_location_overwrites_previous_position(
    container: AppContainer,
    employee: UserRecord,
    location_repository: InMemoryLocationRepository,
) -> None:
    container.location_service.update_location(employee.id, FAR_LAT, FAR_LON)
    container.location_service.update_location(employee.id, OFFICE_LAT, OFFICE_LON)

    latest = location_repository.get_latest(employee.id)
    assert latest is not None
    assert (latest.latitude, latest.longitude) == (OFFICE_LAT, OFFICE_LON)
    assert latest.updated_at == local(2026, 1, 18, 12, 0)


def test_presence_during_lunch_marks_booking_available(
    container: AppContainer,
    employee: UserRecord,
    clock: FixedClock,
    booking_repository: InMemoryBookingRepository,
) -> None:
    clock.set(local(2026, 1, 19, 12, 30))
    booking = booking_repository.create_booking(
        employee.id, date(2026, 1, 19), local(2026, 1, 18, 9, 0), BookingStatus.BOOKED
    )

    container.location_service.update_location(employee.id, OFFICE_LAT, OFFICE_LON)

    assert booking_repository.bookings[booking.id].available_for_lunch is True


def test_presence_outside_lunch_window_is_ignored(
    container: AppContainer,
    employee: UserRecord,
    clock: FixedClock,
    booking_repository: InMemoryBookingRepository,
) -> None:
    clock.set(local(2026, 1, 19, 9, 0))
    booking = booking_repository.create_booking(
        employee.id, date(2026, 1, 19), local(2026, 1, 18, 9, 0), BookingStatus.BOOKED
    )

    container.location_service.update_location(employee.id, OFFICE_LAT, OFFICE_LON)

    assert booking_repository.bookings[booking.id].available_for_lunch is False


def test_position_away_from_office_does_not_mark_presence(
    container: AppContainer,
    employee: UserRecord,
    clock: FixedClock,
    booking_repository: InMemoryBookingRepository,
) -> None:
    clock.set(local(2026, 1, 19, 12, 30))
    booking = booking_repository.create_booking(
        employee.id, date(2026, 1, 19), local(2026, 1, 18, 9, 0), BookingStatus.BOOKED
    )

    container.location_service.update_location(employee.id, FAR_LAT, FAR_LON)

    assert booking_repository.bookings[booking.id].available_for_lunch is False
