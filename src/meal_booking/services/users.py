"""User-related business logic."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from meal_booking.domain.models import Role, UserRecord


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user for an email address, if present."""

    def create_user(self, email: str, name: str, role: Role) -> UserRecord:
        """Create and return a new user record."""

    def touch_last_login(self, user_id: UUID) -> None:
        """Update the last login timestamp for the user."""

    def list_by_role(self, role: Role) -> list[UserRecord]:
        """Return users with the given role."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    def ensure_user(self, email: str, name: str | None = None) -> UserRecord:
        """Ensure a user exists for the email and return it."""
        normalized = email.strip().lower()
        existing = self.repository.get_by_email(normalized)
        if existing:
            self.repository.touch_last_login(existing.id)
            return existing

        display_name = name or normalized.split("@", 1)[0]
        return self.repository.create_user(normalized, display_name, Role.USER)

    def list_employees(self) -> list[UserRecord]:
        """Return all accounts that are expected to book meals."""
        return self.repository.list_by_role(Role.USER)
