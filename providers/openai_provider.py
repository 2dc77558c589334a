"""OpenAI provider implementation."""

import os
from typing import Optional

from .base import LLMProvider, LLMResponse, build_messages


class OpenAIProvider(LLMProvider):
    """Provider for OpenAI chat models."""

    MODELS = {
        "gpt-4o": "gpt-4o",
        "gpt-4o-mini": "gpt-4o-mini",
        "mini": "gpt-4o-mini",
    }

    def __init__(self, api_key: Optional[str] = None, default_model: str = "gpt-4o-mini"):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key. Uses OPENAI_API_KEY env var if not provided.
            default_model: Model used when a call does not name one.
        """
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self._default_model = default_model
        self._client = None

    @property
    def name(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return self._default_model

    def _get_client(self):
        if self._client is None:
            from openai import OpenAI
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def _resolve_model(self, model: Optional[str]) -> str:
        if model is None:
            return self.default_model
        return self.MODELS.get(model, model)

    def complete(
        self,
        prompt: str,
        model: Optional[str] = None,
        max_tokens: int = 1024,
        temperature: Optional[float] = None,
        system_prompt: Optional[str] = None,
    ) -> LLMResponse:
        client = self._get_client()
        resolved_model = self._resolve_model(model)

        kwargs = {
            "model": resolved_model,
            "max_tokens": max_tokens,
            "messages": build_messages(prompt, system_prompt),
        }
        if temperature is not None:
            kwargs["temperature"] = temperature
        response = client.chat.completions.create(**kwargs)

        usage = getattr(response, "usage", None)
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=resolved_model,
            provider=self.name,
            input_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            output_tokens=getattr(usage, "completion_tokens", 0) or 0,
        )

    def is_available(self) -> bool:
        return bool(self.api_key)
