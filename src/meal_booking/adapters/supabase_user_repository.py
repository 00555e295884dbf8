"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from meal_booking.domain.models import Role, UserRecord
from meal_booking.services.users import UserRepository

_COLUMNS = "id, email, name, role, created_at, last_login_at"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user for an email address, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(self, email: str, name: str, role: Role) -> UserRecord:
        """Create a new user row and return it."""
        response = (
            self.client.table("users")
            .insert(
                {
                    "email": email,
                    "name": name,
                    "role": str(role),
                    "created_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def touch_last_login(self, user_id: UUID) -> None:
        """Update the last_login_at timestamp for a user."""
        self.client.table("users").update(
            {"last_login_at": datetime.now(tz=UTC).isoformat()}
        ).eq("id", str(user_id)).execute()

    def list_by_role(self, role: Role) -> list[UserRecord]:
        """Return users with the given role."""
        response = (
            self.client.table("users").select(_COLUMNS).eq("role", str(role)).execute()
        )
        return [_parse_user(row) for row in response.data or []]


def _parse_user(row: dict[str, object]) -> UserRecord:
    last_login = row.get("last_login_at")
    return UserRecord(
        id=UUID(str(row["id"])),
        email=str(row["email"]),
        name=str(row.get("name") or ""),
        role=Role(str(row.get("role") or Role.USER)),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        last_login_at=datetime.fromisoformat(str(last_login)) if last_login else None,
    )
