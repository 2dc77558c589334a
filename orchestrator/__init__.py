"""Orchestration of generation calls and cost estimation."""

from .cost_estimator import (
    estimate_tokens,
    calculate_cost,
    estimate_text_cost,
    estimate_request_cost,
    build_cost_comparison,
    sum_costs,
)
from .generation_service import GenerationService, provider_label

__all__ = [
    "estimate_tokens",
    "calculate_cost",
    "estimate_text_cost",
    "estimate_request_cost",
    "build_cost_comparison",
    "sum_costs",
    "GenerationService",
    "provider_label",
]
