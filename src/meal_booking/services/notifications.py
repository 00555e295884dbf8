"""Notification persistence and dedup rules."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from meal_booking.domain.notifications import NotificationRecord, NotificationType
from meal_booking.services.clock import Clock, day_bounds


class NotificationRepository(Protocol):
    """Persistence interface for notifications."""

    def create_notification(  # noqa: PLR0913
        self,
        user_id: UUID,
        notification_type: NotificationType,
        title: str,
        message: str,
        scheduled_at: datetime,
    ) -> NotificationRecord:
        """Create an unsent notification and return it."""

    def get_notification(self, notification_id: UUID) -> NotificationRecord | None:
        """Return a notification by id."""

    def exists_for_user_type_between(
        self,
        user_id: UUID,
        notification_type: NotificationType,
        start: datetime,
        end: datetime,
    ) -> bool:
        """Return True if a notification was scheduled inside the window."""

    def list_unsent_due(self, now: datetime) -> list[NotificationRecord]:
        """Return unsent notifications scheduled at or before now."""

    def mark_sent(self, notification_id: UUID, sent_at: datetime) -> bool:
        """Mark an unsent notification as sent; False if it was already sent."""


@dataclass
class NotificationService:
    """Records notifications and answers the per-day dedup question."""

    repository: NotificationRepository
    clock: Clock

    def schedule(
        self,
        user_id: UUID,
        notification_type: NotificationType,
        title: str,
        message: str,
        scheduled_at: datetime | None = None,
    ) -> NotificationRecord:
        """Persist an unsent notification, due now unless a time is given."""
        return self.repository.create_notification(
            user_id=user_id,
            notification_type=notification_type,
            title=title,
            message=message,
            scheduled_at=scheduled_at or self.clock.now(),
        )

    def already_scheduled_on(
        self, user_id: UUID, notification_type: NotificationType, day: date
    ) -> bool:
        """Return True if this type was already scheduled for the user that day."""
        start, end = day_bounds(day, self.clock.now().tzinfo)
        return self.repository.exists_for_user_type_between(
            user_id, notification_type, start, end
        )
