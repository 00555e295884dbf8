"""Tests for container wiring."""

import asyncio

from meal_booking.containers import build_container
from meal_booking.services.clock import SystemClock


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.booking_service is not None
    assert container.geofence_reconciler.geofence == settings.office_geofence()
    assert isinstance(container.clock, SystemClock)
    assert container.report_service.hr_email == "hr@example.com"
    asyncio.run(container.close_resources())


def test_wired_services_share_one_dispatcher(container) -> None:
    assert container.booking_service.dispatcher is container.dispatcher
    assert container.geofence_reconciler.dispatcher is container.dispatcher
    assert container.notification_scheduler.dispatcher is container.dispatcher
