"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from meal_booking.adapters.email_client import EmailClient, HttpxEmailClient
from meal_booking.adapters.push_client import HttpxPushClient, PushClient
from meal_booking.adapters.supabase_booking_repository import (
    SupabaseBookingRepository,
)
from meal_booking.adapters.supabase_cutoff_repository import (
    SupabaseCutoffConfigRepository,
)
from meal_booking.adapters.supabase_location_repository import (
    SupabaseLocationRepository,
)
from meal_booking.adapters.supabase_notification_repository import (
    SupabaseNotificationRepository,
)
from meal_booking.adapters.supabase_user_repository import SupabaseUserRepository
from meal_booking.config import Settings
from meal_booking.domain.bookings import LunchWindow
from meal_booking.services.bookings import BookingRepository, BookingService
from meal_booking.services.clock import Clock, SystemClock
from meal_booking.services.cutoff import CutoffConfigRepository, CutoffService
from meal_booking.services.dispatch import NotificationDispatcher
from meal_booking.services.geofence import GeofenceReconciler
from meal_booking.services.locations import LocationRepository, LocationService
from meal_booking.services.notifications import (
    NotificationRepository,
    NotificationService,
)
from meal_booking.services.reminders import NotificationScheduler
from meal_booking.services.reports import BookingReportService
from meal_booking.services.users import UserRepository, UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    push_client: PushClient
    email_client: EmailClient
    user_service: UserService
    cutoff_service: CutoffService
    notification_service: NotificationService
    dispatcher: NotificationDispatcher
    booking_service: BookingService
    location_service: LocationService
    geofence_reconciler: GeofenceReconciler
    notification_scheduler: NotificationScheduler
    report_service: BookingReportService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    clock = SystemClock.create(resolved_settings.timezone)
    push_client = HttpxPushClient.create(
        base_url=resolved_settings.push_gateway_url,
        api_key=resolved_settings.push_api_key,
    )
    email_client = HttpxEmailClient.create(
        api_url=resolved_settings.email_api_url,
        api_key=resolved_settings.email_api_key,
        sender=resolved_settings.email_from,
    )

    async def close_resources() -> None:
        await push_client.close()
        await email_client.close()

    return wire_container(
        settings=resolved_settings,
        clock=clock,
        user_repository=SupabaseUserRepository(supabase_client),
        booking_repository=SupabaseBookingRepository(supabase_client),
        cutoff_repository=SupabaseCutoffConfigRepository(supabase_client),
        location_repository=SupabaseLocationRepository(supabase_client),
        notification_repository=SupabaseNotificationRepository(supabase_client),
        push_client=push_client,
        email_client=email_client,
        close_resources=close_resources,
    )


def wire_container(  # noqa: PLR0913
    *,
    settings: Settings,
    clock: Clock,
    user_repository: UserRepository,
    booking_repository: BookingRepository,
    cutoff_repository: CutoffConfigRepository,
    location_repository: LocationRepository,
    notification_repository: NotificationRepository,
    push_client: PushClient,
    email_client: EmailClient,
    close_resources: Callable[[], Awaitable[None]],
) -> AppContainer:
    """Build services on top of the given repositories and clients."""
    geofence = settings.office_geofence()
    lunch_window = LunchWindow(
        start=settings.lunch_window_start, end=settings.lunch_window_end
    )
    user_service = UserService(user_repository)
    cutoff_service = CutoffService(
        repository=cutoff_repository, fallback=settings.default_cutoff_time
    )
    notification_service = NotificationService(
        repository=notification_repository, clock=clock
    )
    dispatcher = NotificationDispatcher(
        repository=notification_repository,
        user_repository=user_repository,
        push_client=push_client,
        email_client=email_client,
        clock=clock,
    )
    booking_service = BookingService(
        repository=booking_repository,
        cutoff_service=cutoff_service,
        notification_service=notification_service,
        dispatcher=dispatcher,
        geofence=geofence,
        clock=clock,
        block_weekends=settings.block_weekend_bookings,
    )
    location_service = LocationService(
        repository=location_repository,
        booking_repository=booking_repository,
        geofence=geofence,
        lunch_window=lunch_window,
        clock=clock,
    )
    geofence_reconciler = GeofenceReconciler(
        booking_repository=booking_repository,
        location_repository=location_repository,
        notification_service=notification_service,
        dispatcher=dispatcher,
        geofence=geofence,
        lunch_window=lunch_window,
        clock=clock,
    )
    notification_scheduler = NotificationScheduler(
        user_service=user_service,
        booking_repository=booking_repository,
        cutoff_service=cutoff_service,
        notification_service=notification_service,
        dispatcher=dispatcher,
        clock=clock,
        skip_weekends=settings.block_weekend_bookings,
    )
    report_service = BookingReportService(
        booking_repository=booking_repository,
        user_repository=user_repository,
        email_client=email_client,
        clock=clock,
        hr_email=settings.hr_email,
    )
    return AppContainer(
        settings=settings,
        clock=clock,
        push_client=push_client,
        email_client=email_client,
        user_service=user_service,
        cutoff_service=cutoff_service,
        notification_service=notification_service,
        dispatcher=dispatcher,
        booking_service=booking_service,
        location_service=location_service,
        geofence_reconciler=geofence_reconciler,
        notification_scheduler=notification_scheduler,
        report_service=report_service,
        close_resources=close_resources,
    )
