from __future__ import annotations

from dataclasses import FrozenInstanceError
from pathlib import Path
import sys
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from ccide.llm import (
    ChatMessage,
    CompletionRequest,
    InvalidModelConfigError,
    InvalidRequestError,
    ProviderConfig,
    TokenUsage,
)


class ProviderConfigTests(unittest.TestCase):
    def test_normalizes_blank_endpoint(self):
        config = ProviderConfig(provider="openai", model="gpt-4", api_key="k", endpoint="  ")

        self.assertIsNone(config.endpoint)

    def test_api_key_is_not_in_repr(self):
        config = ProviderConfig(provider="anthropic", model="claude-3", api_key="sk-secret")

        self.assertNotIn("sk-secret", repr(config))

    def test_is_immutable(self):
        config = ProviderConfig(provider="anthropic", model="claude-3", api_key="k")

        with self.assertRaises(FrozenInstanceError):
            config.model = "other"

    def test_rejects_invalid_values(self):
        cases = {
            "empty api key": {"api_key": ""},
            "empty model": {"model": " "},
            "zero max tokens": {"max_tokens": 0},
            "bool max tokens": {"max_tokens": True},
            "temperature too high": {"temperature": 2.5},
            "negative temperature": {"temperature": -0.1},
        }
        for name, overrides in cases.items():
            values = {"provider": "anthropic", "model": "claude-3", "api_key": "k"}
            values.update(overrides)
            with self.subTest(name):
                with self.assertRaises(InvalidModelConfigError):
                    ProviderConfig(**values)

    def test_accepts_temperature_bounds(self):
        for temperature in (0, 2):
            config = ProviderConfig(
                provider="openai", model="gpt-4", api_key="k", temperature=temperature
            )
            self.assertIsInstance(config.temperature, float)


class CompletionRequestTests(unittest.TestCase):
    def test_requires_at_least_one_message(self):
        with self.assertRaises(InvalidRequestError):
            CompletionRequest(messages=[])

    def test_rejects_unknown_role(self):
        with self.assertRaises(InvalidRequestError):
            ChatMessage(role="system", content="nope")

    def test_accepts_mappings_and_keeps_order(self):
        request = CompletionRequest(
            messages=[
                {"role": "assistant", "content": "first"},
                ChatMessage(role="user", content="second"),
            ]
        )

        self.assertEqual(
            [message.as_payload() for message in request.messages],
            [
                {"role": "assistant", "content": "first"},
                {"role": "user", "content": "second"},
            ],
        )
        self.assertIsInstance(request.messages, tuple)

    def test_rejects_invalid_overrides(self):
        with self.assertRaises(InvalidRequestError):
            CompletionRequest.from_prompt("hi", max_tokens=0)
        with self.assertRaises(InvalidRequestError):
            CompletionRequest.from_prompt("hi", temperature=3.0)

        invalid = (
            {"max_tokens": "5"},
            {"max_tokens": 2.5},
            {"max_tokens": True},
            {"temperature": "0.5"},
            {"temperature": False},
        )
        for overrides in invalid:
            with self.subTest(overrides=overrides):
                with self.assertRaises(InvalidRequestError):
                    CompletionRequest.from_prompt("hi", **overrides)

    def test_integer_temperature_is_stored_as_float(self):
        request = CompletionRequest.from_prompt("hi", temperature=1, max_tokens=256)

        self.assertIsInstance(request.temperature, float)
        self.assertEqual(request.temperature, 1.0)
        self.assertEqual(request.max_tokens, 256)


class TokenUsageTests(unittest.TestCase):
    def test_total_defaults_to_sum(self):
        self.assertEqual(TokenUsage.from_counts(10, 20).total_tokens, 30)

    def test_reported_total_wins(self):
        self.assertEqual(TokenUsage.from_counts(10, 20, 35).total_tokens, 35)


if __name__ == "__main__":
    unittest.main()
