"""Structured log output."""

import json
import logging
import unittest

from nebula_api.shared.infrastructure.logging import CustomJsonFormatter


def format_record(**extra) -> dict:
    formatter = CustomJsonFormatter(fmt="%(levelname)s %(message)s", environment="staging")
    record = logging.makeLogRecord({
        "name": "nebula_api.test",
        "levelno": logging.INFO,
        "levelname": "INFO",
        "msg": "Ticket ingested",
        **extra,
    })
    return json.loads(formatter.format(record))


class JsonFormatterTests(unittest.TestCase):
    def test_adds_context_fields(self) -> None:
        payload = format_record(correlation_id="abc-123", ticket_id="t-1")

        self.assertEqual(payload["message"], "Ticket ingested")
        self.assertEqual(payload["correlation_id"], "abc-123")
        self.assertEqual(payload["ticket_id"], "t-1")
        self.assertEqual(payload["environment"], "staging")
        self.assertIn("timestamp", payload)

    def test_redacts_credentials_but_not_token_counts(self) -> None:
        payload = format_record(openai_api_key="sk-live", session_token="xyz", total_tokens="42")

        self.assertEqual(payload["openai_api_key"], "***REDACTED***")
        self.assertEqual(payload["session_token"], "***REDACTED***")
        self.assertEqual(payload["total_tokens"], "42")


if __name__ == "__main__":
    unittest.main()
