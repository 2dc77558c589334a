"""Advisory token and cost estimation.

Token counts are approximated from character length (about four characters
per token for English text) and priced from the static MODEL_PRICING table.
These numbers are for observability only and must not be treated as billing
data; real usage is whatever the provider invoices.
"""

import math
from decimal import Decimal
from typing import Any, Dict, List

from config import DEFAULT_PRICING_MODEL, MODEL_PRICING
from contracts import (
    CostBreakdownItem,
    CostComparison,
    CostEstimate,
    CostEstimateRequest,
    UsageEstimate,
)

CHARS_PER_TOKEN = 4

# Typical per-call token usage for the optional services
PREREQUISITE_TOKENS = (200, 800)
STEP_HELP_TOKENS = (150, 400)

COST_TIPS = [
    "Use the /mock endpoint for testing without API costs",
    "gpt-4o-mini is 60-80% cheaper than gpt-4o",
    "Shorter prompts = lower costs",
    "Each request costs roughly $0.001-0.003",
]

COST_RECOMMENDATIONS = [
    "Use gpt-4o-mini for 60-80% cost savings",
    "Keep prompts concise and focused",
    "Generate exactly 3 projects (not 10+)",
    "Cache responses to avoid repeated requests",
    "Use mock endpoint during development",
]


def estimate_tokens(text: str) -> int:
    """Rough token count: ceil(len / 4)."""
    return math.ceil(len(text or "") / CHARS_PER_TOKEN)


def _token_count(value: Any) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def _usd(value: Any) -> str:
    return f"{value:.6f}"


def calculate_cost(
    input_tokens: int,
    output_tokens: int,
    model: str = DEFAULT_PRICING_MODEL,
) -> UsageEstimate:
    """Price a token count. Unknown models use the default pricing row.

    Never raises: negative, non-numeric or non-finite counts are treated as zero.
    """
    input_tokens = _token_count(input_tokens)
    output_tokens = _token_count(output_tokens)
    rates = MODEL_PRICING.get(model) or MODEL_PRICING[DEFAULT_PRICING_MODEL]

    # Decimal: token counts are unbounded and may exceed float range
    input_cost = Decimal(input_tokens) / 1000 * Decimal(str(rates["input"]))
    output_cost = Decimal(output_tokens) / 1000 * Decimal(str(rates["output"]))

    return UsageEstimate(
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        total_tokens=input_tokens + output_tokens,
        input_cost=_usd(input_cost),
        output_cost=_usd(output_cost),
        total_cost=_usd(input_cost + output_cost),
    )


def estimate_text_cost(text_in: str, text_out: str, model: str = DEFAULT_PRICING_MODEL) -> UsageEstimate:
    """Estimate the cost of one call from its prompt and response text."""
    return calculate_cost(estimate_tokens(text_in), estimate_tokens(text_out), model)


def estimate_request_cost(request: CostEstimateRequest) -> CostEstimate:
    """Up-front estimate for a generation request and optional follow-ups."""
    project_prompt = (
        f'Generate exactly 3 unique project ideas for "{request.concept}" '
        f"({request.skill_level} level, {request.domain} domain)..."
    )
    project_response = "Estimated 3 project objects with all fields..."

    breakdown = [
        CostBreakdownItem(
            service="Project Generation",
            **estimate_text_cost(project_prompt, project_response).model_dump(),
        )
    ]
    if request.include_prerequisites:
        breakdown.append(CostBreakdownItem(
            service="Prerequisites (per project)",
            **calculate_cost(*PREREQUISITE_TOKENS).model_dump(),
        ))
    if request.include_step_help:
        breakdown.append(CostBreakdownItem(
            service="Step Help (per question)",
            **calculate_cost(*STEP_HELP_TOKENS).model_dump(),
        ))

    return CostEstimate(
        estimated_cost=sum_costs(breakdown),
        breakdown=breakdown,
        note="These are rough estimates. Actual costs may vary based on response length.",
        tips=list(COST_TIPS),
    )


def _usage_profile(requests: int, input_tokens: int, output_tokens: int, model: str) -> Dict[str, Any]:
    total_tokens = input_tokens + output_tokens
    return {
        "requests": requests,
        "model": model,
        "avgTokensPerRequest": total_tokens // requests if requests else 0,
        **calculate_cost(input_tokens, output_tokens, model).to_wire(),
    }


def _percent(saved: float, original: float) -> str:
    return f"{(saved / original * 100) if original else 0:.1f}%"


def build_cost_comparison() -> CostComparison:
    """Static comparison of the original prompt strategy vs the optimised one.

    Before: 10 ideas per request on gpt-4o. After: 3 ideas on gpt-4o-mini.
    """
    before = _usage_profile(5, 2500, 4500, "gpt-4o")
    after = _usage_profile(5, 1250, 2750, "gpt-4o-mini")

    before_cost = float(before["totalCost"])
    after_cost = float(after["totalCost"])
    saved_cost = before_cost - after_cost
    saved_tokens = before["totalTokens"] - after["totalTokens"]

    return CostComparison(
        comparison={
            "before": before,
            "after": after,
            "savings": {
                "tokensSaved": saved_tokens,
                "tokenReductionPercent": _percent(saved_tokens, before["totalTokens"]),
                "costSaved": _usd(saved_cost),
                "costReductionPercent": _percent(saved_cost, before_cost),
                "monthlyProjection": {
                    "originalMonthly": f"{before_cost * 30:.4f}",
                    "optimizedMonthly": f"{after_cost * 30:.4f}",
                    "monthlySavings": f"{saved_cost * 30:.4f}",
                },
            },
        },
        recommendations=list(COST_RECOMMENDATIONS),
    )


def sum_costs(estimates: List[UsageEstimate]) -> str:
    """Total cost of several estimates, as a six-decimal USD string."""
    return _usd(sum((Decimal(e.total_cost) for e in estimates), Decimal(0)))
