"""Supabase repository for meal bookings."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from meal_booking.domain.bookings import BookingStatus, MealBooking
from meal_booking.services.bookings import BookingRepository

_COLUMNS = "id, user_id, booking_date, booked_at, status, available_for_lunch"


@dataclass
class SupabaseBookingRepository(BookingRepository):
    """Supabase implementation for meal bookings.

    The `meal_bookings` table carries a unique constraint on
    (user_id, booking_date).
    """

    client: Client

    def get_booking(self, user_id: UUID, booking_date: date) -> MealBooking | None:
        """Return the booking for a user and date."""
        response = (
            self.client.table("meal_bookings")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("booking_date", booking_date.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_booking(response.data[0])

    def exists_for_user_on(self, user_id: UUID, booking_date: date) -> bool:
        """Return True if a booking row exists for the user and date."""
        response = (
            self.client.table("meal_bookings")
            .select("id")
            .eq("user_id", str(user_id))
            .eq("booking_date", booking_date.isoformat())
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def exists_for_user_between(self, user_id: UUID, start: date, end: date) -> bool:
        """Return True if a booking row exists in the inclusive range."""
        response = (
            self.client.table("meal_bookings")
            .select("id")
            .eq("user_id", str(user_id))
            .gte("booking_date", start.isoformat())
            .lte("booking_date", end.isoformat())
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def create_booking(
        self,
        user_id: UUID,
        booking_date: date,
        booked_at: datetime,
        status: BookingStatus,
    ) -> MealBooking:
        """Insert a booking row and return it."""
        response = (
            self.client.table("meal_bookings")
            .insert(
                {
                    "user_id": str(user_id),
                    "booking_date": booking_date.isoformat(),
                    "booked_at": booked_at.isoformat(),
                    "status": str(status),
                    "available_for_lunch": False,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal booking")
        return _parse_booking(response.data[0])

    def transition_status(
        self,
        booking_id: UUID,
        expected: BookingStatus,
        status: BookingStatus,
        booked_at: datetime | None = None,
    ) -> bool:
        """Update the status where the stored status still equals `expected`."""
        payload: dict[str, object] = {"status": str(status)}
        if booked_at is not None:
            payload["booked_at"] = booked_at.isoformat()
            payload["available_for_lunch"] = False
        response = (
            self.client.table("meal_bookings")
            .update(payload)
            .eq("id", str(booking_id))
            .eq("status", str(expected))
            .execute()
        )
        return bool(response.data)

    def set_available_for_lunch(self, booking_id: UUID, available: bool) -> None:
        """Update the presence flag."""
        self.client.table("meal_bookings").update(
            {"available_for_lunch": available}
        ).eq("id", str(booking_id)).execute()

    def list_by_date_and_status(
        self, booking_date: date, status: BookingStatus
    ) -> list[MealBooking]:
        """Return bookings for a date and status."""
        response = (
            self.client.table("meal_bookings")
            .select(_COLUMNS)
            .eq("booking_date", booking_date.isoformat())
            .eq("status", str(status))
            .execute()
        )
        return [_parse_booking(row) for row in response.data or []]

    def list_for_user_from(self, user_id: UUID, start: date) -> list[MealBooking]:
        """Return a user's bookings on or after a date."""
        response = (
            self.client.table("meal_bookings")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("booking_date", start.isoformat())
            .order("booking_date", desc=False)
            .execute()
        )
        return [_parse_booking(row) for row in response.data or []]


def _parse_booking(row: dict[str, object]) -> MealBooking:
    return MealBooking(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        booking_date=date.fromisoformat(str(row["booking_date"])),
        booked_at=datetime.fromisoformat(str(row["booked_at"])),
        status=BookingStatus(str(row["status"])),
        available_for_lunch=bool(row.get("available_for_lunch")),
    )
