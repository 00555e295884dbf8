"""Time source used by every rule evaluation."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo

SATURDAY = 5


class Clock(Protocol):
    """Supplies the current instant."""

    def now(self) -> datetime:
        """Return the current timezone-aware datetime."""


@dataclass
class SystemClock(Clock):
    """Wall clock in the office timezone."""

    timezone: ZoneInfo

    @classmethod
    def create(cls, timezone_name: str) -> "SystemClock":
        """Create a clock for the named IANA timezone."""
        return cls(timezone=ZoneInfo(timezone_name))

    def now(self) -> datetime:
        """Return the current time in the office timezone."""
        return datetime.now(tz=self.timezone)


def day_bounds(day: date, tz: object) -> tuple[datetime, datetime]:
    """Return the inclusive start and end instants of a calendar day."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day, time.max, tzinfo=tz)
    return start, end


def is_weekend(day: date) -> bool:
    """Return True for Saturday and Sunday."""
    return day.weekday() >= SATURDAY


def iter_days(start: date, end: date) -> list[date]:
    """Return each date in the inclusive range."""
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]
