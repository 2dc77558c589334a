"""LLM provider abstraction and the completion gateway."""

from .base import LLMProvider, LLMResponse
from .factory import get_provider, list_providers
from .gateway import CompletionGateway

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "CompletionGateway",
    "get_provider",
    "list_providers",
]
