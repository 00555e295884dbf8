"""Push gateway client adapter."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

import httpx


class PushClient(Protocol):
    """Interface for device push delivery."""

    async def send_push(
        self,
        user_id: UUID,
        title: str,
        body: str,
        data: dict[str, str] | None = None,
    ) -> None:
        """Deliver a push notification to every device of the user."""


@dataclass
class HttpxPushClient:
    """Push client that posts to an HTTP push gateway."""

    base_url: str
    api_key: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str, api_key: str) -> "HttpxPushClient":
        """Create a push client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            api_key=api_key,
            http_client=httpx.AsyncClient(),
        )

    async def send_push(
        self,
        user_id: UUID,
        title: str,
        body: str,
        data: dict[str, str] | None = None,
    ) -> None:
        """Send a push message through the gateway's send endpoint."""
        payload: dict[str, object] = {
            "user_id": str(user_id),
            "title": title,
            "body": body,
        }
        if data:
            payload["data"] = data
        response = await self.http_client.post(
            f"{self.base_url}/send",
            json=payload,
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=10,
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
