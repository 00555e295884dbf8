"""Time-driven notification rules.

Each evaluator is idempotent: before scheduling, it checks whether a
notification of the same type was already scheduled for the user on the
current calendar day, so re-running after a crash or on a short interval
never produces duplicates.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta

from meal_booking.domain.models import UserRecord
from meal_booking.domain.notifications import NotificationType
from meal_booking.services.bookings import BookingRepository
from meal_booking.services.clock import Clock, is_weekend
from meal_booking.services.cutoff import CutoffService
from meal_booking.services.dispatch import NotificationDispatcher
from meal_booking.services.notifications import NotificationService
from meal_booking.services.users import UserService

_logger = logging.getLogger(__name__)

INACTIVITY_WINDOW_DAYS = 3

Rule = Callable[[UserRecord], tuple[str, str] | None]


@dataclass(frozen=True)
class EvaluationReport:
    """Outcome of one evaluator run."""

    scheduled: int
    errors: int = 0


@dataclass
class NotificationScheduler:
    """Raises missed-booking, reminder and inactivity notifications."""

    user_service: UserService
    booking_repository: BookingRepository
    cutoff_service: CutoffService
    notification_service: NotificationService
    dispatcher: NotificationDispatcher
    clock: Clock
    skip_weekends: bool = True
    push_immediately: bool = True

    async def run_missed_booking_check(self) -> EvaluationReport:
        """Notify users without a booking for today once the cutoff has passed."""
        cutoff = self.cutoff_service.latest()
        if cutoff is None:
            _logger.info("Missed booking check skipped: no cutoff configured")
            return EvaluationReport(scheduled=0)
        now = self.clock.now()
        if now.time() < cutoff:
            return EvaluationReport(scheduled=0)
        today = now.date()
        if self.skip_weekends and is_weekend(today):
            return EvaluationReport(scheduled=0)

        def evaluate(user: UserRecord) -> tuple[str, str] | None:
            if self.booking_repository.exists_for_user_on(user.id, today):
                return None
            return (
                "Meal booking missed",
                f"You did not book a meal for {today}.",
            )

        return await self._evaluate(
            NotificationType.MISSED_BOOKING, today, evaluate, "Missed booking"
        )

    async def run_reminder_check(self) -> EvaluationReport:
        """Remind users to book tomorrow's meal while booking is still open."""
        cutoff = self.cutoff_service.latest()
        if cutoff is None:
            _logger.info("Meal reminder skipped: no cutoff configured")
            return EvaluationReport(scheduled=0)
        now = self.clock.now()
        if now.time() > cutoff:
            return EvaluationReport(scheduled=0)
        today = now.date()
        tomorrow = today + timedelta(days=1)
        if is_weekend(tomorrow):
            _logger.info("Meal reminder skipped: %s is a weekend day", tomorrow)
            return EvaluationReport(scheduled=0)

        def evaluate(user: UserRecord) -> tuple[str, str] | None:
            if self.booking_repository.exists_for_user_on(user.id, tomorrow):
                return None
            return (
                "Book your meal",
                f"Reminder: book your meal for {tomorrow} before {cutoff:%H:%M}.",
            )

        return await self._evaluate(
            NotificationType.MEAL_REMINDER, today, evaluate, "Meal reminder"
        )

    async def run_inactivity_check(self) -> EvaluationReport:
        """Nudge users with no booking in the trailing three days."""
        today = self.clock.now().date()
        window_start = today - timedelta(days=INACTIVITY_WINDOW_DAYS)

        def evaluate(user: UserRecord) -> tuple[str, str] | None:
            if self.booking_repository.exists_for_user_between(
                user.id, window_start, today
            ):
                return None
            return (
                "We miss you at lunch",
                "You have not booked a meal in the last few days.",
            )

        return await self._evaluate(
            NotificationType.INACTIVITY_NUDGE, today, evaluate, "Inactivity nudge"
        )

    async def _evaluate(
        self,
        notification_type: NotificationType,
        day: date,
        evaluate: Rule,
        label: str,
    ) -> EvaluationReport:
        scheduled = 0
        errors = 0
        for user in self.user_service.list_employees():
            try:
                if await self._evaluate_user(user, notification_type, day, evaluate):
                    scheduled += 1
            except Exception:
                errors += 1
                _logger.exception("%s failed for user %s", label, user.id)
        _logger.info("%s run on %s: scheduled=%s", label, day, scheduled)
        return EvaluationReport(scheduled=scheduled, errors=errors)

    async def _evaluate_user(
        self,
        user: UserRecord,
        notification_type: NotificationType,
        day: date,
        evaluate: Rule,
    ) -> bool:
        if self.notification_service.already_scheduled_on(
            user.id, notification_type, day
        ):
            return False
        content = evaluate(user)
        if content is None:
            return False
        title, message = content
        notification = self.notification_service.schedule(
            user_id=user.id,
            notification_type=notification_type,
            title=title,
            message=message,
        )
        if self.push_immediately:
            await self.dispatcher.dispatch(notification)
        return True
