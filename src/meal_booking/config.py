"""Application configuration."""

import os
from datetime import time

from pydantic_settings import BaseSettings, SettingsConfigDict

from meal_booking.domain.bookings import OfficeGeofence

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    push_gateway_url: str
    push_api_key: str
    email_api_url: str
    email_api_key: str
    email_from: str = "Meal Booking <noreply@localhost>"
    hr_email: str | None = None
    timezone: str = "Asia/Kolkata"
    office_latitude: float
    office_longitude: float
    office_radius_meters: float = 500.0
    default_cutoff_time: time = time(22, 0)
    lunch_window_start: time = time(12, 0)
    lunch_window_end: time = time(15, 0)
    block_weekend_bookings: bool = True
    scheduler_enabled: bool = False
    geofence_interval_seconds: int = 30
    dispatch_interval_seconds: int = 60
    missed_booking_interval_seconds: int = 300
    reminder_time: time = time(18, 0)
    inactivity_check_time: time = time(10, 0)
    hr_summary_time: time = time(16, 0)
    hr_final_count_time: time = time(22, 30)
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def office_geofence(self) -> OfficeGeofence:
        """Return the static office geofence."""
        return OfficeGeofence(
            latitude=self.office_latitude,
            longitude=self.office_longitude,
            radius_meters=self.office_radius_meters,
        )
