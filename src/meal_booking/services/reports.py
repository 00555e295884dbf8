"""Daily booking summary for HR."""

import html
import logging
from dataclasses import dataclass
from datetime import date, timedelta

from meal_booking.adapters.email_client import EmailClient
from meal_booking.domain.bookings import BookingStatus, MealBooking
from meal_booking.domain.models import UserRecord
from meal_booking.services.bookings import BookingRepository
from meal_booking.services.clock import Clock, is_weekend
from meal_booking.services.users import UserRepository

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SummaryRow:
    """One employee line in the summary."""

    name: str
    email: str
    booked_at: str
    status: str


@dataclass
class BookingReportService:
    """Emails tomorrow's confirmed bookings to HR."""

    booking_repository: BookingRepository
    user_repository: UserRepository
    email_client: EmailClient
    clock: Clock
    hr_email: str | None

    async def send_summary(self, label: str = "summary") -> int | None:
        """Send the summary for tomorrow; return the booking count or None if skipped."""
        if not self.hr_email:
            _logger.debug("HR email not configured; skipping booking %s", label)
            return None
        tomorrow = self.clock.now().date() + timedelta(days=1)
        if is_weekend(tomorrow):
            _logger.info("Skipping HR booking %s for weekend date %s", label, tomorrow)
            return None

        bookings = self.booking_repository.list_by_date_and_status(
            tomorrow, BookingStatus.BOOKED
        )
        rows = [self._row(booking) for booking in bookings]
        await self.email_client.send_email(
            to=self.hr_email,
            subject=f"Meal booking {label} for {tomorrow}: {len(rows)} bookings",
            text=render_text(tomorrow, rows),
            html=render_html(tomorrow, rows),
        )
        _logger.info(
            "HR booking %s sent for %s: %s bookings", label, tomorrow, len(rows)
        )
        return len(rows)

    def _row(self, booking: MealBooking) -> SummaryRow:
        user: UserRecord | None = self.user_repository.get_user(booking.user_id)
        return SummaryRow(
            name=user.name if user else str(booking.user_id),
            email=user.email if user else "",
            booked_at=booking.booked_at.strftime("%Y-%m-%d %H:%M"),
            status=str(booking.status),
        )


def render_text(day: date, rows: list[SummaryRow]) -> str:
    """Render the plain-text summary body."""
    lines = [
        "MEAL BOOKING SUMMARY",
        "====================",
        "",
        f"Date: {day}",
        f"Total bookings: {len(rows)}",
        "",
    ]
    for row in rows:
        lines.append(f"- {row.name} ({row.email}) booked at {row.booked_at}")
    if not rows:
        lines.append("No bookings.")
    return "\n".join(lines)


def render_html(day: date, rows: list[SummaryRow]) -> str:
    """Render the HTML summary body."""
    body_rows = "".join(
        "<tr>"
        f"<td>{html.escape(row.name)}</td>"
        f"<td>{html.escape(row.email)}</td>"
        f"<td>{html.escape(row.booked_at)}</td>"
        f"<td>{html.escape(row.status)}</td>"
        "</tr>"
        for row in rows
    )
    return (
        "<!doctype html><html><body>"
        "<h2>Meal Booking Summary</h2>"
        f"<p><strong>Date:</strong> {day}</p>"
        f"<p><strong>Total bookings:</strong> {len(rows)}</p>"
        "<table><tr><th>Employee</th><th>Email</th><th>Booked at</th>"
        f"<th>Status</th></tr>{body_rows}</table>"
        "</body></html>"
    )
