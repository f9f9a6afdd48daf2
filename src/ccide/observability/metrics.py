"""Per-model token pricing used for cost estimates in completion logs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

_TOKENS_PER_UNIT = 1_000_000.0


@dataclass(frozen=True)
class ModelPricing:
    """USD rates per million prompt and completion tokens."""

    prompt_rate: float
    completion_rate: float

    def cost(self, prompt_tokens: int, completion_tokens: int) -> float:
        total = prompt_tokens * self.prompt_rate + completion_tokens * self.completion_rate
        return round(total / _TOKENS_PER_UNIT, 8)


# Matched by prefix in order; "gpt-4o-mini" must precede "gpt-4o" and "gpt-4".
PRICING_BY_MODEL_PREFIX: tuple[tuple[str, ModelPricing], ...] = (
    ("claude-opus", ModelPricing(prompt_rate=15.0, completion_rate=75.0)),
    ("claude-sonnet", ModelPricing(prompt_rate=3.0, completion_rate=15.0)),
    ("claude-haiku", ModelPricing(prompt_rate=0.8, completion_rate=4.0)),
    ("gpt-4o-mini", ModelPricing(prompt_rate=0.15, completion_rate=0.6)),
    ("gpt-4o", ModelPricing(prompt_rate=2.5, completion_rate=10.0)),
    ("gpt-4-turbo", ModelPricing(prompt_rate=10.0, completion_rate=30.0)),
    ("gpt-4", ModelPricing(prompt_rate=30.0, completion_rate=60.0)),
)


def pricing_for_model(model: str) -> Optional[ModelPricing]:
    name = model.strip().lower()
    if name:
        for prefix, pricing in PRICING_BY_MODEL_PREFIX:
            if name.startswith(prefix):
                return pricing
    return None


def estimate_completion_cost_usd(
    *,
    model: str,
    input_tokens: int,
    output_tokens: int,
) -> Optional[float]:
    """Return the estimated cost, or ``None`` for unpriced models or bad counts."""

    if min(input_tokens, output_tokens) < 0:
        return None
    pricing = pricing_for_model(model)
    return None if pricing is None else pricing.cost(input_tokens, output_tokens)
