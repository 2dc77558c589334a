"""Saved/active project tracking over injected identity and store collaborators."""

from .collaborators import (
    IdentityProvider,
    StaticIdentityProvider,
    ProjectStore,
    InMemoryProjectStore,
    JsonFileProjectStore,
)
from .progress import (
    normalize_steps,
    status_for,
    next_step,
    progress_update,
    toggle_step,
    percent_complete,
)
from .tracker import ProjectTracker

__all__ = [
    "IdentityProvider",
    "StaticIdentityProvider",
    "ProjectStore",
    "InMemoryProjectStore",
    "JsonFileProjectStore",
    "normalize_steps",
    "status_for",
    "next_step",
    "progress_update",
    "toggle_step",
    "percent_complete",
    "ProjectTracker",
]
