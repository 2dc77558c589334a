"""Generation service - orchestrates the three generation endpoints.

For each request it:
1. Builds the agent's prompt
2. Calls the completion gateway once (no retries)
3. Parses and validates the response
4. Substitutes the static fallback payload when 2 or 3 fail
   (projects and prerequisites only)
5. Attaches an advisory usage estimate
"""

import json
import logging
from typing import List, Optional

from agents import (
    PrerequisiteAgent,
    ProjectAgent,
    StepHelpAgent,
    fallback_prerequisites,
    fallback_projects,
)
from config import PROVIDER_LABELS, Settings, settings as default_settings
from contracts import (
    GenerationRequest,
    GenerationResult,
    PrerequisiteRequest,
    PrerequisiteSet,
    ProjectIdea,
    ResultKind,
    StepHelpRequest,
)
from errors import GatewayError, ParseError
from orchestrator.cost_estimator import estimate_text_cost
from providers import CompletionGateway, LLMProvider, get_provider

logger = logging.getLogger(__name__)

MOCK_PROVIDER = "Mock Data"
FALLBACK_PROVIDER = "Fallback Data"


def provider_label(model: str, provider: str = "openai") -> str:
    """Human-readable provider name reported to the client."""
    return PROVIDER_LABELS.get(model, f"{provider} {model}")


class GenerationService:
    """Stateless orchestrator over the generation agents.

    Holds no per-request state, so one instance serves concurrent requests.
    """

    def __init__(
        self,
        provider: Optional[LLMProvider] = None,
        app_settings: Optional[Settings] = None,
    ):
        """Initialize the service.

        Args:
            provider: LLM provider to call. Built from settings if not given.
            app_settings: Settings to read endpoint parameters from.
        """
        self.settings = app_settings or default_settings
        if provider is None:
            provider = self._provider_from_settings(self.settings)
        self.gateway = CompletionGateway(provider)

        self.project_agent = ProjectAgent(self.gateway, self.settings.projects_params())
        self.prerequisite_agent = PrerequisiteAgent(self.gateway, self.settings.prerequisites_params())
        self.step_help_agent = StepHelpAgent(self.gateway, self.settings.step_help_params())

    @staticmethod
    def _provider_from_settings(app_settings: Settings) -> LLMProvider:
        if app_settings.provider.lower() in ("openai", "gpt"):
            return get_provider(
                app_settings.provider,
                api_key=app_settings.openai_api_key or None,
                default_model=app_settings.projects_model,
            )
        return get_provider(app_settings.provider, default_model=app_settings.projects_model)

    def generate_projects(self, request: GenerationRequest) -> GenerationResult[List[ProjectIdea]]:
        """Generate project ideas, falling back to the static table on failure."""
        agent = self.project_agent
        prompt = agent.build_prompt(request)
        try:
            result = agent.run(request, prompt=prompt)
        except (GatewayError, ParseError) as e:
            logger.warning(
                "Project generation for %r failed, serving fallback projects: %s",
                request.concept, e,
            )
            return GenerationResult(
                kind=ResultKind.FALLBACK,
                payload=fallback_projects(request.num_ideas),
                usage=estimate_text_cost(prompt, getattr(e, "raw_text", ""), agent.params.model),
                provider=FALLBACK_PROVIDER,
                model=agent.params.model,
                cause=str(e),
            )

        usage = estimate_text_cost(result.prompt, result.raw_response, agent.params.model)
        logger.info(
            "Generated %d projects for %r (%d tokens, $%s)",
            len(result.output), request.concept, usage.total_tokens, usage.total_cost,
        )
        return GenerationResult(
            kind=ResultKind.LIVE,
            payload=result.output,
            usage=usage,
            provider=provider_label(agent.params.model, result.provider),
            model=result.model,
        )

    def generate_prerequisites(self, request: PrerequisiteRequest) -> GenerationResult[PrerequisiteSet]:
        """Generate prerequisites, falling back to the static set on failure."""
        agent = self.prerequisite_agent
        logger.info(
            "Generating prerequisites for: %s (%s - %s)",
            request.project_title, request.domain, request.skill_level,
        )
        prompt = agent.build_prompt(request)
        try:
            result = agent.run(request, prompt=prompt)
        except (GatewayError, ParseError) as e:
            logger.warning(
                "Prerequisite generation for %r failed, serving fallback prerequisites: %s",
                request.project_title, e,
            )
            return GenerationResult(
                kind=ResultKind.FALLBACK,
                payload=fallback_prerequisites(),
                usage=estimate_text_cost(prompt, getattr(e, "raw_text", ""), agent.params.model),
                provider=FALLBACK_PROVIDER,
                model=agent.params.model,
                cause=str(e),
            )

        return GenerationResult(
            kind=ResultKind.LIVE,
            payload=result.output,
            usage=estimate_text_cost(result.prompt, result.raw_response, agent.params.model),
            provider=provider_label(agent.params.model, result.provider),
            model=result.model,
        )

    def step_help(self, request: StepHelpRequest) -> GenerationResult[str]:
        """Answer a step question. Failures propagate; there is no fallback.

        Raises:
            GatewayError: If the completion call fails
            ParseError: If the answer is empty
        """
        agent = self.step_help_agent
        result = agent.run(request)
        return GenerationResult(
            kind=ResultKind.LIVE,
            payload=result.output,
            usage=estimate_text_cost(result.prompt, result.raw_response, agent.params.model),
            provider=provider_label(agent.params.model, result.provider),
            model=result.model,
        )

    def mock_projects(self) -> GenerationResult[List[ProjectIdea]]:
        """The demo project table, for development without an API key."""
        projects = fallback_projects()
        body = json.dumps([p.to_wire() for p in projects])
        return GenerationResult(
            kind=ResultKind.FALLBACK,
            payload=projects,
            usage=estimate_text_cost(body, body),
            provider=MOCK_PROVIDER,
            model=self.project_agent.params.model,
        )
