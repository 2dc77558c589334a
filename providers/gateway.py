"""Completion gateway: the single boundary to the external completion API.

Every failure mode (transport, auth, rate limit, empty content) leaves this
module as a GatewayError. There are no retries.
"""

import logging
from typing import Optional

from config import GenerationParams
from errors import GatewayError

from .base import LLMProvider, LLMResponse

logger = logging.getLogger(__name__)


class CompletionGateway:
    """Calls one LLM provider with fixed per-endpoint parameters."""

    def __init__(self, provider: LLMProvider):
        self.provider = provider

    @property
    def provider_name(self) -> str:
        return self.provider.name

    def complete(
        self,
        prompt: str,
        params: GenerationParams,
        system_prompt: Optional[str] = None,
    ) -> LLMResponse:
        """Send `prompt` and return the raw response.

        Raises:
            GatewayError: the provider raised, or returned no content
        """
        try:
            response = self.provider.complete(
                prompt,
                model=params.model,
                max_tokens=params.max_tokens,
                temperature=params.temperature,
                system_prompt=system_prompt,
            )
        except Exception as e:
            logger.warning("Completion call to %s failed: %s", self.provider.name, e)
            raise GatewayError(f"{self.provider.name} completion failed: {e}", cause=e) from e

        if response is None or not (response.content or "").strip():
            logger.warning("Completion call to %s returned no content", self.provider.name)
            raise GatewayError(f"{self.provider.name} returned an empty response")

        return response
