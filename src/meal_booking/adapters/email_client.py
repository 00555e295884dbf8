"""Transactional email client adapter."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class EmailClient(Protocol):
    """Interface for outbound email."""

    async def send_email(
        self, to: str, subject: str, text: str, html: str | None = None
    ) -> None:
        """Send a single email message."""


@dataclass
class HttpxEmailClient:
    """Email client for an HTTP transactional email API."""

    api_url: str
    api_key: str
    sender: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_url: str, api_key: str, sender: str) -> "HttpxEmailClient":
        """Create an email client with a managed httpx session."""
        return cls(
            api_url=api_url,
            api_key=api_key,
            sender=sender,
            http_client=httpx.AsyncClient(),
        )

    async def send_email(
        self, to: str, subject: str, text: str, html: str | None = None
    ) -> None:
        """Send an email through the provider's messages endpoint."""
        payload: dict[str, object] = {
            "from": self.sender,
            "to": [to],
            "subject": subject,
            "text": text,
        }
        if html is not None:
            payload["html"] = html
        response = await self.http_client.post(
            self.api_url,
            json=payload,
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=15,
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
