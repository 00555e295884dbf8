"""Tests for distance helpers."""

import pytest

from meal_booking.domain.bookings import OfficeGeofence
from meal_booking.domain.geo import distance_in_meters, is_inside

OFFICE = OfficeGeofence(latitude=18.5204, longitude=73.8567, radius_meters=500)


def test_distance_to_same_point_is_zero() -> None:
    assert distance_in_meters(18.5204, 73.8567, 18.5204, 73.8567) == 0


def test_one_degree_of_latitude() -> None:
    assert distance_in_meters(0.0, 0.0, 1.0, 0.0) == pytest.approx(111_195, rel=1e-3)


@pytest.mark.parametrize(
    ("latitude", "longitude", "expected"),
    [
        (18.5204, 73.8567, True),
        (18.5240, 73.8567, True),
        (18.5260, 73.8567, False),
        (18.6000, 73.9500, False),
    ],
)
def test_is_inside(latitude: float, longitude: float, expected: bool) -> None:
    assert is_inside(OFFICE, latitude, longitude) is expected
