"""Delivery of scheduled notifications."""

import logging
from dataclasses import dataclass, field
from uuid import UUID

from meal_booking.adapters.email_client import EmailClient
from meal_booking.adapters.push_client import PushClient
from meal_booking.domain.notifications import NotificationRecord, NotificationType
from meal_booking.services.clock import Clock
from meal_booking.services.notifications import NotificationRepository
from meal_booking.services.users import UserRepository

_logger = logging.getLogger(__name__)

EMAIL_TYPES = frozenset(
    {
        NotificationType.BOOKING_CONFIRMATION,
        NotificationType.CANCELLATION_CONFIRMATION,
    }
)


class DeliveryError(RuntimeError):
    """A notification could not be handed to its channel."""


@dataclass(frozen=True)
class DispatchReport:
    """Outcome of one dispatcher poll."""

    sent: int
    failed: int


@dataclass
class NotificationDispatcher:
    """Hands unsent notifications to push or email and marks them sent."""

    repository: NotificationRepository
    user_repository: UserRepository
    push_client: PushClient
    email_client: EmailClient
    clock: Clock
    _in_flight: set[UUID] = field(default_factory=set, repr=False)

    async def run(self) -> DispatchReport:
        """Deliver every due notification; failures stay unsent for the next poll."""
        pending = self.repository.list_unsent_due(self.clock.now())
        sent = 0
        failed = 0
        for notification in pending:
            outcome = await self._claim_and_deliver(notification)
            if outcome is None:
                continue
            if outcome:
                sent += 1
            else:
                failed += 1
        if pending:
            _logger.info("Notification dispatch: sent=%s failed=%s", sent, failed)
        return DispatchReport(sent=sent, failed=failed)

    async def dispatch(self, notification: NotificationRecord) -> bool:
        """Deliver a single notification right away."""
        return bool(await self._claim_and_deliver(notification))

    async def _claim_and_deliver(
        self, notification: NotificationRecord
    ) -> bool | None:
        """Deliver unless the row is gone, already sent, or being delivered.

        Returns None when the notification was skipped. The re-read and the
        claim happen without an await in between, so a single event loop never
        hands the same row to two deliveries.
        """
        if notification.id in self._in_flight:
            return None
        current = self.repository.get_notification(notification.id)
        if current is None or current.sent:
            return None
        self._in_flight.add(current.id)
        try:
            return await self._deliver_and_mark(current)
        finally:
            self._in_flight.discard(current.id)

    async def _deliver_and_mark(self, notification: NotificationRecord) -> bool:
        try:
            await self._deliver(notification)
        except Exception:
            _logger.warning(
                "Notification delivery failed: id=%s type=%s user_id=%s",
                notification.id,
                notification.type,
                notification.user_id,
                exc_info=True,
            )
            return False
        try:
            return self.repository.mark_sent(notification.id, self.clock.now())
        except Exception:
            _logger.exception("Failed to mark notification sent: id=%s", notification.id)
            return False

    async def _deliver(self, notification: NotificationRecord) -> None:
        if notification.type in EMAIL_TYPES:
            user = self.user_repository.get_user(notification.user_id)
            if user is None:
                raise DeliveryError(f"Unknown user {notification.user_id}")
            await self.email_client.send_email(
                to=user.email,
                subject=notification.title,
                text=notification.message,
            )
            return
        await self.push_client.send_push(
            user_id=notification.user_id,
            title=notification.title,
            body=notification.message,
            data={
                "notification_id": str(notification.id),
                "type": str(notification.type),
            },
        )
