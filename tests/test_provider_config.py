from __future__ import annotations

from pathlib import Path
import sys
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from ccide.llm import InvalidModelConfigError, provider_config_from_mapping


class ProviderConfigFromMappingTests(unittest.TestCase):
    def test_builds_config_from_stored_record(self) -> None:
        config = provider_config_from_mapping(
            {
                "provider": "anthropic",
                "model": "claude-sonnet-4-5-20250929",
                "apiKey": "sk-ant-test",
                "endpoint": "http://localhost:3001/api/anthropic/messages",
                "maxTokens": 2048,
                "temperature": 0.3,
            }
        )

        self.assertEqual(config.provider, "anthropic")
        self.assertEqual(config.model, "claude-sonnet-4-5-20250929")
        self.assertEqual(config.api_key, "sk-ant-test")
        self.assertEqual(config.endpoint, "http://localhost:3001/api/anthropic/messages")
        self.assertEqual(config.max_tokens, 2048)
        self.assertEqual(config.temperature, 0.3)

    def test_accepts_snake_case_keys_and_optional_fields(self) -> None:
        config = provider_config_from_mapping(
            {"provider": "openai", "model": "gpt-4o", "api_key": "sk-test"}
        )

        self.assertEqual(config.api_key, "sk-test")
        self.assertIsNone(config.endpoint)
        self.assertIsNone(config.max_tokens)
        self.assertIsNone(config.temperature)

    def test_missing_model_uses_provider_default(self) -> None:
        anthropic = provider_config_from_mapping({"provider": "claude", "apiKey": "k"})
        openai = provider_config_from_mapping({"provider": "openai", "apiKey": "k"})

        self.assertEqual(anthropic.model, "claude-sonnet-4-5-20250929")
        self.assertEqual(openai.model, "gpt-4")

    def test_raises_for_missing_provider(self) -> None:
        with self.assertRaises(InvalidModelConfigError):
            provider_config_from_mapping({"model": "gpt-4", "apiKey": "k"})

    def test_raises_for_missing_api_key(self) -> None:
        with self.assertRaises(InvalidModelConfigError):
            provider_config_from_mapping({"provider": "openai", "model": "gpt-4"})

    def test_raises_for_unknown_provider_without_model(self) -> None:
        with self.assertRaises(InvalidModelConfigError):
            provider_config_from_mapping({"provider": "mistral", "apiKey": "k"})

    def test_raises_for_invalid_max_tokens(self) -> None:
        with self.assertRaises(InvalidModelConfigError):
            provider_config_from_mapping(
                {"provider": "openai", "model": "gpt-4", "apiKey": "k", "maxTokens": 0}
            )

    def test_raises_for_invalid_temperature(self) -> None:
        with self.assertRaises(InvalidModelConfigError):
            provider_config_from_mapping(
                {"provider": "openai", "model": "gpt-4", "apiKey": "k", "temperature": "warm"}
            )


if __name__ == "__main__":
    unittest.main()
