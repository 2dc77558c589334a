"""Usage and cost contracts.

All figures here are advisory estimates derived from character counts and a
static price table. They are not billing records.
"""

from typing import Any, Dict, List

from pydantic import Field

from .base import ApiModel


class UsageEstimate(ApiModel):
    """Approximate token usage and USD cost of one completion call."""
    input_tokens: int = Field(..., ge=0)
    output_tokens: int = Field(..., ge=0)
    total_tokens: int = Field(..., ge=0)
    input_cost: str = Field(..., description="USD, six decimal places")
    output_cost: str = Field(..., description="USD, six decimal places")
    total_cost: str = Field(..., description="USD, six decimal places")


class CostBreakdownItem(UsageEstimate):
    """One line of a multi-service cost estimate."""
    service: str


class CostEstimate(ApiModel):
    """Response body of the cost estimate endpoint."""
    success: bool = True
    estimated_cost: str
    breakdown: List[CostBreakdownItem]
    note: str
    tips: List[str]


class CostComparison(ApiModel):
    """Static before/after optimisation comparison."""
    success: bool = True
    comparison: Dict[str, Any]
    recommendations: List[str]
