"""Great-circle distance helpers."""

import math

from meal_booking.domain.bookings import OfficeGeofence

EARTH_RADIUS_METERS = 6_371_000.0


def distance_in_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the haversine distance between two coordinates in meters."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_METERS * math.asin(math.sqrt(min(1.0, a)))


def distance_to_office(
    geofence: OfficeGeofence, latitude: float, longitude: float
) -> float:
    """Return the distance from a point to the office center."""
    return distance_in_meters(
        latitude, longitude, geofence.latitude, geofence.longitude
    )


def is_inside(geofence: OfficeGeofence, latitude: float, longitude: float) -> bool:
    """Return True when the point lies within the geofence radius."""
    return distance_to_office(geofence, latitude, longitude) <= geofence.radius_meters
