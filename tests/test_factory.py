from __future__ import annotations

from pathlib import Path
import sys
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from ccide.llm import (
    AnthropicClient,
    OpenAIClient,
    ProviderConfig,
    UnsupportedProviderError,
    create_service,
)


def _config(provider: str, **overrides) -> ProviderConfig:
    return ProviderConfig(provider=provider, model="model-x", api_key="test-key", **overrides)


class CreateServiceTests(unittest.TestCase):
    def test_anthropic_aliases_select_anthropic_client(self):
        for provider in ("anthropic", "claude"):
            with self.subTest(provider=provider):
                self.assertIsInstance(create_service(_config(provider)), AnthropicClient)

    def test_openai_selects_openai_client(self):
        self.assertIsInstance(create_service(_config("openai")), OpenAIClient)

    def test_unsupported_provider_names_value(self):
        with self.assertRaises(UnsupportedProviderError) as ctx:
            create_service(_config("unsupported"))

        self.assertEqual(str(ctx.exception), "Unsupported LLM provider: unsupported")

    def test_provider_match_is_case_sensitive(self):
        with self.assertRaises(UnsupportedProviderError) as ctx:
            create_service(_config("OpenAI"))

        self.assertIn("OpenAI", str(ctx.exception))

    def test_client_keeps_config_and_resolves_endpoint(self):
        config = _config("claude", endpoint="https://custom.endpoint.com/v1/messages")

        client = create_service(config)

        self.assertIs(client.config, config)
        self.assertEqual(client.endpoint, "https://custom.endpoint.com/v1/messages")


if __name__ == "__main__":
    unittest.main()
