"""Domain models for users."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Role(StrEnum):
    """Account role."""

    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    email: str
    name: str
    role: Role
    created_at: datetime
    last_login_at: datetime | None = None
