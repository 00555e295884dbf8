"""Supabase repository for notifications."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from meal_booking.domain.notifications import NotificationRecord, NotificationType
from meal_booking.services.notifications import NotificationRepository

_COLUMNS = "id, user_id, type, title, message, scheduled_at, sent, sent_at"


@dataclass
class SupabaseNotificationRepository(NotificationRepository):
    """Supabase implementation for notifications."""

    client: Client

    def create_notification(  # noqa: PLR0913
        self,
        user_id: UUID,
        notification_type: NotificationType,
        title: str,
        message: str,
        scheduled_at: datetime,
    ) -> NotificationRecord:
        """Insert an unsent notification."""
        response = (
            self.client.table("notifications")
            .insert(
                {
                    "user_id": str(user_id),
                    "type": str(notification_type),
                    "title": title,
                    "message": message,
                    "scheduled_at": scheduled_at.isoformat(),
                    "sent": False,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create notification")
        return _parse_notification(response.data[0])

    def get_notification(self, notification_id: UUID) -> NotificationRecord | None:
        """Return a notification by id."""
        response = (
            self.client.table("notifications")
            .select(_COLUMNS)
            .eq("id", str(notification_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_notification(response.data[0])

    def exists_for_user_type_between(
        self,
        user_id: UUID,
        notification_type: NotificationType,
        start: datetime,
        end: datetime,
    ) -> bool:
        """Return True if a matching notification was scheduled in the window."""
        response = (
            self.client.table("notifications")
            .select("id")
            .eq("user_id", str(user_id))
            .eq("type", str(notification_type))
            .gte("scheduled_at", start.isoformat())
            .lte("scheduled_at", end.isoformat())
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def list_unsent_due(self, now: datetime) -> list[NotificationRecord]:
        """Return unsent notifications due at or before now."""
        response = (
            self.client.table("notifications")
            .select(_COLUMNS)
            .eq("sent", False)
            .lte("scheduled_at", now.isoformat())
            .order("scheduled_at", desc=False)
            .execute()
        )
        return [_parse_notification(row) for row in response.data or []]

    def mark_sent(self, notification_id: UUID, sent_at: datetime) -> bool:
        """Mark a notification as sent unless it already is."""
        response = (
            self.client.table("notifications")
            .update({"sent": True, "sent_at": sent_at.isoformat()})
            .eq("id", str(notification_id))
            .eq("sent", False)
            .execute()
        )
        return bool(response.data)


def _parse_notification(row: dict[str, object]) -> NotificationRecord:
    sent_at = row.get("sent_at")
    return NotificationRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        type=NotificationType(str(row["type"])),
        title=str(row.get("title") or ""),
        message=str(row.get("message") or ""),
        scheduled_at=datetime.fromisoformat(str(row["scheduled_at"])),
        sent=bool(row.get("sent")),
        sent_at=datetime.fromisoformat(str(sent_at)) if sent_at else None,
    )
