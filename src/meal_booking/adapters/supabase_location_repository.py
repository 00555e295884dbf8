"""Supabase repository for user locations."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from meal_booking.domain.bookings import UserLocation
from meal_booking.services.locations import LocationRepository


@dataclass
class SupabaseLocationRepository(LocationRepository):
    """Supabase implementation keeping one row per user."""

    client: Client

    def get_latest(self, user_id: UUID) -> UserLocation | None:
        """Return the stored location for a user."""
        response = (
            self.client.table("user_locations")
            .select("user_id, latitude, longitude, updated_at")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_location(response.data[0])

    def upsert(
        self, user_id: UUID, latitude: float, longitude: float, updated_at: datetime
    ) -> UserLocation:
        """Overwrite the stored location for a user."""
        response = (
            self.client.table("user_locations")
            .upsert(
                {
                    "user_id": str(user_id),
                    "latitude": latitude,
                    "longitude": longitude,
                    "updated_at": updated_at.isoformat(),
                },
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to store user location")
        return _parse_location(response.data[0])


def _parse_location(row: dict[str, object]) -> UserLocation:
    return UserLocation(
        user_id=UUID(str(row["user_id"])),
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
        updated_at=datetime.fromisoformat(str(row["updated_at"])),
    )
