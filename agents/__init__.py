"""Generation agents for BuildNow.

Each agent owns one endpoint's prompt and output contract.
"""

from .base_agent import BaseAgent, AgentResult
from .parsing import strip_code_fence, load_json, validate_payload, parse_payload
from .fallbacks import (
    FALLBACK_PROJECTS,
    FALLBACK_PREREQUISITES,
    fallback_projects,
    fallback_prerequisites,
)
from .project_agent import ProjectAgent, PROJECT_PROMPT
from .prerequisite_agent import PrerequisiteAgent
from .step_help_agent import StepHelpAgent

__all__ = [
    # Base
    "BaseAgent",
    "AgentResult",
    # Parsing
    "strip_code_fence",
    "load_json",
    "validate_payload",
    "parse_payload",
    # Fallbacks
    "FALLBACK_PROJECTS",
    "FALLBACK_PREREQUISITES",
    "fallback_projects",
    "fallback_prerequisites",
    # Agents
    "ProjectAgent",
    "PROJECT_PROMPT",
    "PrerequisiteAgent",
    "StepHelpAgent",
]
