"""Supabase repository for cutoff configuration."""

from dataclasses import dataclass
from datetime import time

from supabase import Client

from meal_booking.domain.bookings import CutoffConfig
from meal_booking.services.cutoff import CutoffConfigRepository


@dataclass
class SupabaseCutoffConfigRepository(CutoffConfigRepository):
    """Supabase implementation for cutoff rows; the highest id wins."""

    client: Client

    def get_latest(self) -> CutoffConfig | None:
        """Return the most recently inserted row."""
        response = (
            self.client.table("cutoff_config")
            .select("id, cutoff_time")
            .order("id", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_config(response.data[0])

    def create(self, cutoff_time: time) -> CutoffConfig:
        """Insert a new cutoff row."""
        response = (
            self.client.table("cutoff_config")
            .insert({"cutoff_time": cutoff_time.isoformat()})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to store cutoff configuration")
        return _parse_config(response.data[0])


def _parse_config(row: dict[str, object]) -> CutoffConfig:
    return CutoffConfig(
        id=int(row["id"]),
        cutoff_time=time.fromisoformat(str(row["cutoff_time"])),
    )
