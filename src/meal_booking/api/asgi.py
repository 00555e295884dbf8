"""ASGI entrypoint for the meal booking API."""

from meal_booking.api.app import create_app
from meal_booking.containers import build_container

app = create_app(build_container())
