"""Settings loading."""

import unittest

from pydantic import ValidationError

from nebula_api.config import Settings


def make_settings(**overrides) -> Settings:
    values = {"database_url": None, "openai_api_key": None, "n8n_webhook_url": None, "mock_llm": False}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class SettingsTests(unittest.TestCase):
    def test_missing_credentials_lists_both(self) -> None:
        self.assertEqual(make_settings().missing_credentials(), ["DATABASE_URL", "OPENAI_API_KEY"])

    def test_mock_llm_needs_no_api_key(self) -> None:
        s = make_settings(database_url="sqlite+aiosqlite:///:memory:", mock_llm=True)
        self.assertEqual(s.missing_credentials(), [])

    def test_blank_values_are_unset(self) -> None:
        s = make_settings(database_url="  ", openai_api_key="", n8n_webhook_url=" ")
        self.assertIsNone(s.database_url)
        self.assertIsNone(s.openai_api_key)
        self.assertIsNone(s.n8n_webhook_url)

    def test_defaults(self) -> None:
        fields = Settings.model_fields
        self.assertEqual(fields["port"].default, 8080)
        self.assertEqual(fields["llm_model"].default, "gpt-4o-mini")
        self.assertEqual(fields["environment"].default, "development")

    def test_unknown_environment_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(environment="qa")


if __name__ == "__main__":
    unittest.main()
