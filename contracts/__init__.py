"""Pydantic contracts for the BuildNow API.

Every request body, model payload and fallback payload is typed through
these contracts.
"""

from .base import ApiModel

from .request_contracts import (
    SkillLevel,
    Domain,
    GenerationRequest,
    PrerequisiteRequest,
    StepHelpProject,
    StepHelpRequest,
    CostEstimateRequest,
)

from .project_contracts import (
    ProjectIdea,
    ProjectIdeaList,
)

from .prerequisite_contracts import (
    Importance,
    ResourceType,
    Resource,
    PrerequisiteItem,
    PrerequisiteCategory,
    PrerequisiteSet,
)

from .usage_contracts import (
    UsageEstimate,
    CostBreakdownItem,
    CostEstimate,
    CostComparison,
)

from .result import ResultKind, GenerationResult

from .tracking_contracts import (
    ProjectStatus,
    UserIdentity,
    SearchQuery,
    ProjectProgress,
    SavedProject,
    ActiveProject,
    ProjectStats,
)

from .validation import (
    missing_fields,
    validate_generation_request,
    validate_prerequisite_request,
    validate_step_help_request,
    validate_cost_estimate_request,
)

__all__ = [
    "ApiModel",
    # Requests
    "SkillLevel",
    "Domain",
    "GenerationRequest",
    "PrerequisiteRequest",
    "StepHelpProject",
    "StepHelpRequest",
    "CostEstimateRequest",
    # Projects
    "ProjectIdea",
    "ProjectIdeaList",
    # Prerequisites
    "Importance",
    "ResourceType",
    "Resource",
    "PrerequisiteItem",
    "PrerequisiteCategory",
    "PrerequisiteSet",
    # Usage
    "UsageEstimate",
    "CostBreakdownItem",
    "CostEstimate",
    "CostComparison",
    # Results
    "ResultKind",
    "GenerationResult",
    # Tracking
    "ProjectStatus",
    "UserIdentity",
    "SearchQuery",
    "ProjectProgress",
    "SavedProject",
    "ActiveProject",
    "ProjectStats",
    # Validation
    "missing_fields",
    "validate_generation_request",
    "validate_prerequisite_request",
    "validate_step_help_request",
    "validate_cost_estimate_request",
]
