"""Tests for HTTP-based adapters."""

import asyncio
import json
from uuid import uuid4

import httpx
import pytest

from meal_booking.adapters.email_client import HttpxEmailClient
from meal_booking.adapters.push_client import HttpxPushClient


def test_push_client_posts_to_gateway() -> None:
    user_id = uuid4()
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["payload"] = json.loads(request.content)
        return httpx.Response(200, json={"ok": True})

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxPushClient(
        base_url="https://push.example.com", api_key="key", http_client=async_client
    )

    asyncio.run(
        client.send_push(user_id, "Book your meal", "Book now.", data={"type": "X"})
    )

    assert seen["url"] == "https://push.example.com/send"
    assert seen["auth"] == "Bearer key"
    assert seen["payload"] == {
        "user_id": str(user_id),
        "title": "Book your meal",
        "body": "Book now.",
        "data": {"type": "X"},
    }


def test_push_client_raises_on_gateway_error() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": "unavailable"})

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxPushClient(
        base_url="https://push.example.com", api_key="key", http_client=async_client
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.send_push(uuid4(), "Title", "Body"))


def test_email_client_sends_message() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["payload"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "msg-1"})

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxEmailClient(
        api_url="https://mail.example.com/v1/messages",
        api_key="key",
        sender="Meals <meals@example.com>",
        http_client=async_client,
    )

    asyncio.run(
        client.send_email("hr@example.com", "Summary", "3 bookings", html="<p>3</p>")
    )

    assert seen["url"] == "https://mail.example.com/v1/messages"
    assert seen["payload"] == {
        "from": "Meals <meals@example.com>",
        "to": ["hr@example.com"],
        "subject": "Summary",
        "text": "3 bookings",
        "html": "<p>3</p>",
    }


def test_create_strips_trailing_slash() -> None:
    client = HttpxPushClient.create(base_url="https://push.example.com/", api_key="k")

    assert client.base_url == "https://push.example.com"
    asyncio.run(client.close())
