"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, HTTPException, Request, status

from meal_booking.domain.models import UserRecord  # noqa: TC001

if TYPE_CHECKING:
    from meal_booking.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the container stored on the app."""
    return request.app.state.container


def current_user(
    request: Request,
    x_user_email: str | None = Header(default=None),
    x_user_name: str | None = Header(default=None),
) -> UserRecord:
    """Resolve the caller forwarded by the identity proxy."""
    if not x_user_email or "@" not in x_user_email:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    container = get_container(request)
    return container.user_service.ensure_user(x_user_email, x_user_name)
