"""Best-effort delivery of accepted RSVPs to an outbound webhook (e.g. a Zapier catch hook)."""

import asyncio
import logging
from typing import Protocol

import httpx

from rsvp_portal.config.settings import settings
from rsvp_portal.webhooks.schema import RsvpWebhookPayload

logger = logging.getLogger(__name__)


class WebhookDeliveryError(Exception):
    def __init__(self, payload: RsvpWebhookPayload, reason: str | None = None) -> None:
        self.payload = payload
        message = f"Webhook failed for guest {payload.guest_id}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


# =============================================================================
# Protocols (interfaces) for dependency injection
# =============================================================================


class RsvpWebhookNotifier(Protocol):
    """Protocol for RSVP webhook delivery."""

    async def __call__(self, payloads: list[RsvpWebhookPayload]) -> list[str]:
        """Send every payload and return one message per failed delivery."""
        ...


class WebhookConfig(Protocol):
    rsvp_webhook_url: str
    rsvp_webhook_timeout_seconds: float


# =============================================================================
# Default implementation
# =============================================================================


class HttpRsvpWebhookNotifier:
    """Posts each payload as JSON, concurrently. Failures are collected, never retried."""

    def __init__(
        self,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
        config: WebhookConfig = settings,
    ):
        self._http_client_class = http_client_class
        self._config = config

    async def __call__(self, payloads: list[RsvpWebhookPayload]) -> list[str]:
        url = self._config.rsvp_webhook_url
        if not url or not payloads:
            return []

        async with self._http_client_class(timeout=self._config.rsvp_webhook_timeout_seconds) as client:
            results = await asyncio.gather(
                *(self._deliver(client, url, payload) for payload in payloads),
                return_exceptions=True,
            )

        failures: list[str] = []
        for result in results:
            if isinstance(result, Exception):
                logger.warning(str(result))
                failures.append(str(result) or "Unknown webhook failure")
        return failures

    async def _deliver(self, client, url: str, payload: RsvpWebhookPayload) -> None:
        try:
            response = await client.post(url, json=payload.model_dump(mode="json"))
        except httpx.HTTPError as e:
            raise WebhookDeliveryError(payload, str(e) or type(e).__name__) from e

        if not response.is_success:
            raise WebhookDeliveryError(payload)


def get_webhook_notifier() -> RsvpWebhookNotifier:
    """Factory for the webhook notifier. Override in tests."""
    return HttpRsvpWebhookNotifier(http_client_class=httpx.AsyncClient, config=settings)
