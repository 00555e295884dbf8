"""Domain models for notifications."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class NotificationType(StrEnum):
    """Kinds of user notifications."""

    BOOKING_CONFIRMATION = "BOOKING_CONFIRMATION"
    CANCELLATION_CONFIRMATION = "CANCELLATION_CONFIRMATION"
    MEAL_REMINDER = "MEAL_REMINDER"
    MISSED_BOOKING = "MISSED_BOOKING"
    INACTIVITY_NUDGE = "INACTIVITY_NUDGE"


@dataclass(frozen=True)
class NotificationRecord:
    """A persisted notification and its delivery state."""

    id: UUID
    user_id: UUID
    type: NotificationType
    title: str
    message: str
    scheduled_at: datetime
    sent: bool = False
    sent_at: datetime | None = None
