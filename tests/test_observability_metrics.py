from __future__ import annotations

from pathlib import Path
import sys
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from ccide.observability.metrics import (
    ModelPricing,
    estimate_completion_cost_usd,
    pricing_for_model,
)


class CostEstimateTests(unittest.TestCase):
    def test_sonnet_cost(self) -> None:
        self.assertEqual(
            estimate_completion_cost_usd(
                model="claude-sonnet-4-5-20250929",
                input_tokens=10_000,
                output_tokens=2_000,
            ),
            0.06,
        )

    def test_haiku_cost(self) -> None:
        self.assertEqual(
            estimate_completion_cost_usd(
                model="claude-haiku-4-5-20251001",
                input_tokens=50_000,
                output_tokens=10_000,
            ),
            0.08,
        )

    def test_mini_model_is_not_priced_as_its_parent(self) -> None:
        self.assertEqual(pricing_for_model("gpt-4o-mini").prompt_rate, 0.15)
        self.assertEqual(pricing_for_model("GPT-4o-2024-08-06").prompt_rate, 2.5)
        self.assertEqual(pricing_for_model("gpt-4-0613").prompt_rate, 30.0)

    def test_unpriced_model_or_negative_counts_give_none(self) -> None:
        self.assertIsNone(pricing_for_model("  "))
        self.assertIsNone(
            estimate_completion_cost_usd(model="local-llama", input_tokens=1, output_tokens=1)
        )
        self.assertIsNone(
            estimate_completion_cost_usd(model="gpt-4", input_tokens=-1, output_tokens=1)
        )

    def test_pricing_cost_rounds_to_eight_places(self) -> None:
        self.assertEqual(ModelPricing(prompt_rate=1.0, completion_rate=2.0).cost(1, 1), 3e-06)


if __name__ == "__main__":
    unittest.main()
