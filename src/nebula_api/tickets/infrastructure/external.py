"""
Ticket External Service Adapters
==================================

Outbound webhook used to tell the scheduling workflow (n8n) that a
technician has been booked.
"""

from typing import Optional

import httpx

from nebula_api.config import settings
from nebula_api.shared.infrastructure.logging import get_logger
from nebula_api.tickets.application import INotifier, NotificationResult, ScheduleNotification

logger = get_logger(__name__)


class WebhookNotifier(INotifier):
    """
    Fire-and-forget webhook client.

    One POST per notification, no retry. Failures are logged and
    reported in the NotificationResult, never raised.
    """

    def __init__(
        self,
        webhook_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self._webhook_url = webhook_url
        self._timeout = timeout_seconds or settings.webhook_timeout_seconds
        self._http_client = http_client

    @classmethod
    def from_settings(cls) -> "WebhookNotifier":
        return cls(webhook_url=settings.n8n_webhook_url)

    @property
    def enabled(self) -> bool:
        return bool(self._webhook_url)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
        return self._http_client

    async def notify_scheduled(self, notification: ScheduleNotification) -> NotificationResult:
        if not self._webhook_url:
            logger.debug("Webhook URL not configured, skipping notification")
            return NotificationResult(skipped=True)

        try:
            client = await self._get_client()
            response = await client.post(self._webhook_url, json=notification.to_payload())
        except httpx.HTTPError as e:
            logger.error(
                "Scheduling notification failed",
                extra={"ticket_id": notification.ticket_id, "error": str(e)}
            )
            return NotificationResult(error=str(e))

        if response.is_success:
            logger.info(
                "Scheduling notification sent",
                extra={"ticket_id": notification.ticket_id, "status_code": response.status_code}
            )
        else:
            logger.warning(
                "Webhook returned non-2xx",
                extra={"ticket_id": notification.ticket_id, "status_code": response.status_code}
            )
        return NotificationResult(status_code=response.status_code)

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
