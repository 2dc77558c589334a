"""Tagged result of a generation call."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from .usage_contracts import UsageEstimate

T = TypeVar("T")


class ResultKind(str, Enum):
    """Where a payload came from."""
    LIVE = "live"
    FALLBACK = "fallback"


@dataclass
class GenerationResult(Generic[T]):
    """Payload plus provenance.

    `cause` is set only for fallback results and carries the error that
    triggered the substitution.
    """
    kind: ResultKind
    payload: T
    usage: UsageEstimate
    provider: str
    model: str
    cause: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.kind is ResultKind.FALLBACK
