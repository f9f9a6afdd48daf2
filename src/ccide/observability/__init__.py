"""Observability helpers."""

from ccide.observability.metrics import (
    ModelPricing,
    estimate_completion_cost_usd,
    pricing_for_model,
)

__all__ = ["ModelPricing", "estimate_completion_cost_usd", "pricing_for_model"]
