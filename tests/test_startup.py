"""Application startup: required credentials and a working local boot."""

import unittest
from unittest import mock

from fastapi.testclient import TestClient

from nebula_api.config import settings
from nebula_api.core import ConfigurationException
from nebula_api.main import app


def configured(**values):
    """Patch the live settings object for the duration of a test."""
    defaults = {
        "database_url": None,
        "openai_api_key": None,
        "n8n_webhook_url": None,
        "mock_llm": False,
        "environment": "development",
    }
    defaults.update(values)
    return mock.patch.multiple(settings, **defaults)


class StartupTests(unittest.TestCase):
    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def test_refuses_to_start_without_credentials(self) -> None:
        with configured():
            with self.assertRaises(ConfigurationException) as ctx:
                with TestClient(app):
                    pass

        self.assertIn("DATABASE_URL", ctx.exception.message)
        self.assertIn("OPENAI_API_KEY", ctx.exception.message)

    def test_refuses_to_start_without_api_key(self) -> None:
        with configured(database_url="sqlite+aiosqlite:///:memory:"):
            with self.assertRaises(ConfigurationException) as ctx:
                with TestClient(app):
                    pass

        self.assertEqual(ctx.exception.details, {"missing": ["OPENAI_API_KEY"]})

    def test_starts_with_mock_classifier_and_sqlite(self) -> None:
        with configured(database_url="sqlite+aiosqlite:///:memory:", mock_llm=True):
            with TestClient(app) as client:
                self.assertEqual(client.get("/health").json(), {"ok": True})
                self.assertIsNotNone(app.state.triage_service)
                self.assertFalse(app.state.notifier.enabled)

                response = client.get("/tickets")
                self.assertEqual(response.status_code, 200)
                self.assertEqual(response.json(), {"tickets": []})


if __name__ == "__main__":
    unittest.main()
