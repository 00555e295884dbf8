"""Periodic job wiring.

Every job calls the same entry point that the admin API exposes for manual
triggering, so timer runs and manual runs share one code path.
"""

import logging
from collections.abc import Awaitable, Callable
from datetime import time

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from meal_booking.containers import AppContainer

_logger = logging.getLogger(__name__)

JobFactory = Callable[[AppContainer], Awaitable[object]]

JOBS: dict[str, JobFactory] = {
    "geofence": lambda c: c.geofence_reconciler.run(),
    "dispatch": lambda c: c.dispatcher.run(),
    "missed_booking": lambda c: c.notification_scheduler.run_missed_booking_check(),
    "reminder": lambda c: c.notification_scheduler.run_reminder_check(),
    "inactivity": lambda c: c.notification_scheduler.run_inactivity_check(),
    "hr_summary": lambda c: c.report_service.send_summary("summary"),
    "hr_final_count": lambda c: c.report_service.send_summary("final count"),
}


async def run_job(container: AppContainer, name: str) -> object:
    """Run a job by name and return its result."""
    return await JOBS[name](container)


def isolated_job(
    container: AppContainer, name: str
) -> Callable[[], Awaitable[None]]:
    """Wrap a job so a failing run is logged and the next tick still fires."""

    async def job() -> None:
        try:
            result = await run_job(container, name)
        except Exception:
            _logger.exception("Scheduled job %s failed", name)
            return
        _logger.debug("Scheduled job %s finished: %s", name, result)

    return job


def build_scheduler(container: AppContainer) -> AsyncIOScheduler:
    """Create a scheduler with one job per periodic role."""
    settings = container.settings
    scheduler = AsyncIOScheduler(timezone=settings.timezone)

    def every(name: str, seconds: int) -> None:
        scheduler.add_job(
            isolated_job(container, name),
            "interval",
            seconds=seconds,
            id=name,
            max_instances=1,
            coalesce=True,
        )

    def daily(name: str, at: time) -> None:
        scheduler.add_job(
            isolated_job(container, name),
            "cron",
            hour=at.hour,
            minute=at.minute,
            id=name,
            max_instances=1,
            coalesce=True,
        )

    every("geofence", settings.geofence_interval_seconds)
    every("dispatch", settings.dispatch_interval_seconds)
    every("missed_booking", settings.missed_booking_interval_seconds)
    daily("reminder", settings.reminder_time)
    daily("inactivity", settings.inactivity_check_time)
    daily("hr_summary", settings.hr_summary_time)
    daily("hr_final_count", settings.hr_final_count_time)
    return scheduler
