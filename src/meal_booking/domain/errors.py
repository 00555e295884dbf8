"""Domain errors raised by booking and scheduling rules."""

from datetime import date


class DomainError(Exception):
    """Base class for business errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, object] | None = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class BookingValidationError(DomainError):
    """Caller-correctable booking rule violation."""

    def __init__(self, message: str, day: date | None = None) -> None:
        self.day = day
        details: dict[str, object] = {}
        if day is not None:
            details["date"] = day.isoformat()
        super().__init__(message, details=details)


class OutOfAreaError(BookingValidationError):
    """Booking location is outside the office geofence."""

    def __init__(self, distance_meters: float) -> None:
        super().__init__(
            f"You must be within the office area to book "
            f"({distance_meters:.0f}m away)"
        )
        self.distance_meters = distance_meters
        self.details["distance_meters"] = round(distance_meters, 1)


class PastDateError(BookingValidationError):
    """Booking date is not in the future."""

    def __init__(self, day: date) -> None:
        super().__init__(f"Only future dates can be booked ({day})", day)


class InvalidRangeError(BookingValidationError):
    """End date precedes start date."""

    def __init__(self, start_date: date, end_date: date) -> None:
        super().__init__(
            f"End date {end_date} cannot be before start date {start_date}", end_date
        )
        self.details["start_date"] = start_date.isoformat()


class CutoffClosedError(BookingValidationError):
    """Booking window for tomorrow closed at the cutoff."""

    def __init__(self, day: date, cutoff: object) -> None:
        super().__init__(f"Booking closed for {day} after cutoff {cutoff}", day)
        self.details["cutoff_time"] = str(cutoff)


class AlreadyBookedError(BookingValidationError):
    """An active booking already exists for the date."""

    def __init__(self, day: date) -> None:
        super().__init__(f"Meal already booked for {day}", day)


class WeekendBookingError(BookingValidationError):
    """Bookings are not taken for Saturdays and Sundays."""

    def __init__(self, day: date) -> None:
        super().__init__(f"Cannot book meals on weekends ({day})", day)


class BookingConflictError(BookingValidationError):
    """The booking changed concurrently; retry the request."""

    def __init__(self, day: date) -> None:
        super().__init__(f"Booking for {day} was modified concurrently", day)


class PastCancellationError(BookingValidationError):
    """Cancellation date is in the past."""

    def __init__(self, day: date) -> None:
        super().__init__(f"Cannot cancel meals for past dates ({day})", day)


class BookingNotFoundError(BookingValidationError):
    """No booking exists for the user and date."""

    def __init__(self, day: date) -> None:
        super().__init__(f"No booking found for {day}", day)


class ConfigurationError(DomainError):
    """Operational misconfiguration."""


class ConfigMissingError(ConfigurationError):
    """No cutoff configuration has been set."""

    def __init__(self) -> None:
        super().__init__("No cutoff configuration found")
