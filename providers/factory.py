"""Factory for creating LLM providers."""

from typing import Dict, Optional, Type

from .base import LLMProvider
from .litellm_provider import LiteLLMProvider
from .openai_provider import OpenAIProvider


# Registry of available providers
PROVIDERS: Dict[str, Type[LLMProvider]] = {
    "openai": OpenAIProvider,
    "gpt": OpenAIProvider,
    "litellm": LiteLLMProvider,
}

# Aliases skipped when listing providers
_ALIASES = {"gpt"}


def get_provider(provider_name: Optional[str] = None, **kwargs) -> LLMProvider:
    """Get an LLM provider instance.

    Args:
        provider_name: Provider name (openai, litellm). Defaults to openai.
        **kwargs: Passed to the provider constructor (e.g. api_key, default_model)

    Returns:
        LLMProvider instance

    Examples:
        get_provider("openai", api_key="sk-...")
        get_provider("litellm", default_model="gemini/gemini-2.0-flash")
    """
    key = (provider_name or "openai").lower()
    if key not in PROVIDERS:
        raise ValueError(
            f"Unknown provider: {provider_name}. "
            f"Available: {list(PROVIDERS.keys())}"
        )
    return PROVIDERS[key](**kwargs)


def list_providers() -> Dict[str, bool]:
    """List all providers and their availability.

    Returns:
        Dict mapping provider name to availability status
    """
    result = {}
    for name, provider_class in PROVIDERS.items():
        if name in _ALIASES:
            continue
        try:
            result[name] = provider_class().is_available()
        except Exception:
            result[name] = False
    return result
