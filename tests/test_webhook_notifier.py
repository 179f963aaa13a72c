"""Scheduling webhook notifier."""

import json
import unittest

import httpx

from nebula_api.tickets.application import ScheduleNotification
from nebula_api.tickets.infrastructure import WebhookNotifier

WEBHOOK = "https://n8n.example.com/webhook/schedule"

NOTIFICATION = ScheduleNotification(
    ticket_id="0b7c2f6e-5d1a-4f3e-9c8b-7a6d5e4f3a2b",
    summary="HVAC scheduled",
    scheduled_at="2026-10-20T14:00:00+00:00",
)


def notifier_with(handler) -> WebhookNotifier:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WebhookNotifier(webhook_url=WEBHOOK, timeout_seconds=1, http_client=client)


class WebhookNotifierTests(unittest.IsolatedAsyncioTestCase):
    async def test_posts_payload(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        notifier = notifier_with(handler)
        result = await notifier.notify_scheduled(NOTIFICATION)
        await notifier.close()

        self.assertTrue(result.delivered)
        self.assertEqual(result.status_code, 200)
        self.assertEqual(len(seen), 1)
        self.assertEqual(seen[0].method, "POST")
        self.assertEqual(str(seen[0].url), WEBHOOK)
        self.assertEqual(json.loads(seen[0].content), {
            "ticketId": "0b7c2f6e-5d1a-4f3e-9c8b-7a6d5e4f3a2b",
            "summary": "HVAC scheduled",
            "scheduledAt": "2026-10-20T14:00:00+00:00",
        })

    async def test_skipped_without_url(self) -> None:
        notifier = WebhookNotifier(webhook_url=None)

        result = await notifier.notify_scheduled(NOTIFICATION)

        self.assertFalse(notifier.enabled)
        self.assertTrue(result.skipped)
        self.assertFalse(result.delivered)

    async def test_connection_error_is_reported_not_raised(self) -> None:
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        notifier = notifier_with(handler)
        result = await notifier.notify_scheduled(NOTIFICATION)
        await notifier.close()

        self.assertFalse(result.delivered)
        self.assertIn("connection refused", result.error)

    async def test_non_2xx_is_reported(self) -> None:
        notifier = notifier_with(lambda request: httpx.Response(502))

        result = await notifier.notify_scheduled(NOTIFICATION)
        await notifier.close()

        self.assertEqual(result.status_code, 502)
        self.assertFalse(result.delivered)
        self.assertIsNone(result.error)


if __name__ == "__main__":
    unittest.main()
