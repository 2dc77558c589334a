"""LiteLLM-backed provider. Routes to any model LiteLLM supports."""

from typing import Optional

from .base import LLMProvider, LLMResponse, build_messages


# Short names accepted in configuration -> LiteLLM model strings
MODEL_ALIASES = {
    "gpt-4o": "gpt-4o",
    "gpt-4o-mini": "gpt-4o-mini",
    "mini": "gpt-4o-mini",
    "claude-haiku": "anthropic/claude-3-5-haiku-20241022",
    "gemini-flash": "gemini/gemini-2.0-flash",
}


def _to_litellm_model(model: Optional[str], default_model: str) -> str:
    """Map a configured model name to a LiteLLM model string."""
    if not model:
        return default_model
    return MODEL_ALIASES.get(model.lower(), model)


class LiteLLMProvider(LLMProvider):
    """Single provider that delegates to litellm.completion()."""

    def __init__(self, default_model: str = "gpt-4o-mini", metadata: Optional[dict] = None):
        """Initialize with the LiteLLM model string to use by default.

        Args:
            default_model: LiteLLM model string (e.g. gpt-4o-mini, gemini/gemini-2.0-flash).
            metadata: Optional dict passed to litellm (e.g. endpoint) for its callbacks.
        """
        self._default_model = default_model
        self._metadata = metadata or {}

    @property
    def name(self) -> str:
        return "litellm"

    @property
    def default_model(self) -> str:
        return self._default_model

    def complete(
        self,
        prompt: str,
        model: Optional[str] = None,
        max_tokens: int = 1024,
        temperature: Optional[float] = None,
        system_prompt: Optional[str] = None,
    ) -> LLMResponse:
        import litellm

        resolved_model = _to_litellm_model(model, self._default_model)
        kwargs = {
            "model": resolved_model,
            "messages": build_messages(prompt, system_prompt),
            "max_tokens": max_tokens,
            "metadata": {**self._metadata},
        }
        if temperature is not None:
            kwargs["temperature"] = temperature
        response = litellm.completion(**kwargs)

        content = response.choices[0].message.content or ""
        usage = getattr(response, "usage", None)
        return LLMResponse(
            content=content,
            model=getattr(response, "model", None) or resolved_model,
            provider=self.name,
            input_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            output_tokens=getattr(usage, "completion_tokens", 0) or 0,
        )

    def is_available(self) -> bool:
        """LiteLLM reads API keys from env; we consider it available if the model is set."""
        return bool(self._default_model)
