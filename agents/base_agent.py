"""Base agent class that the generation agents inherit from.

Every agent:
- Builds a deterministic prompt from a validated request
- Calls the completion gateway with its endpoint's fixed parameters
- Parses the response into its output contract
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from config import GenerationParams
from providers import CompletionGateway

T = TypeVar("T")


@dataclass
class AgentResult(Generic[T]):
    """Result from an agent run, including output and call metadata."""
    output: T
    prompt: str
    raw_response: str
    model: str
    provider: str


class BaseAgent(ABC, Generic[T]):
    """Base class for BuildNow generation agents."""

    def __init__(self, gateway: CompletionGateway, params: GenerationParams):
        """Initialize the agent.

        Args:
            gateway: Completion gateway wrapping the configured provider
            params: Model, max tokens and temperature for this endpoint
        """
        self.gateway = gateway
        self.params = params

    @abstractmethod
    def build_prompt(self, request: Any) -> str:
        """Build the prompt for `request`. Must be deterministic."""
        pass

    @abstractmethod
    def parse(self, text: str) -> T:
        """Turn raw model output into the agent's output contract.

        Raises:
            ParseError: If the text does not match the contract
        """
        pass

    def run(self, request: Any, prompt: Optional[str] = None) -> AgentResult[T]:
        """Execute the agent.

        Raises:
            GatewayError: If the completion call fails
            ParseError: If the response cannot be parsed
        """
        prompt = prompt if prompt is not None else self.build_prompt(request)
        response = self.gateway.complete(prompt, self.params)
        return AgentResult(
            output=self.parse(response.content),
            prompt=prompt,
            raw_response=response.content,
            model=response.model or self.params.model,
            provider=response.provider,
        )
