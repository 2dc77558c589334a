"""Contracts for saved and active (in-progress) projects.

These records are owned by the project store collaborator; the tracker
only defines how progress updates move an ActiveProject between states.
"""

from enum import Enum
from typing import List, Optional

from pydantic import Field

from .base import ApiModel
from .project_contracts import ProjectIdea


class ProjectStatus(str, Enum):
    """Lifecycle state of an ActiveProject."""
    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"


class UserIdentity(ApiModel):
    """The signed-in user, as reported by the identity provider."""
    uid: str = Field(..., min_length=1)
    email: Optional[str] = None
    display_name: Optional[str] = None


class SearchQuery(ApiModel):
    """The request that produced a project."""
    concept: str = "Unknown"
    skill_level: str = "Beginner"
    domain: str = "General"


class ProjectProgress(ApiModel):
    """Step completion for an ActiveProject."""
    completed_steps: List[int] = Field(default_factory=list)
    current_step: int = Field(default=0, ge=0)
    started_at: str
    last_updated: str


class SavedProject(ProjectIdea):
    """An immutable bookmark of a project idea."""
    id: Optional[str] = None
    search_query: SearchQuery = Field(default_factory=SearchQuery)
    saved_at: str
    user_id: str
    is_favorite: bool = False


class ActiveProject(ProjectIdea):
    """A project the user has started working on."""
    id: Optional[str] = None
    search_query: SearchQuery = Field(default_factory=SearchQuery)
    progress: ProjectProgress
    started_at: str
    completed_at: Optional[str] = None
    user_notes: str = ""
    user_id: str
    status: ProjectStatus = ProjectStatus.ACTIVE
    source_saved_id: Optional[str] = Field(
        default=None,
        description="SavedProject this was started from, if any"
    )


class ProjectStats(ApiModel):
    """Per-user project counts."""
    total_saved: int = 0
    total_active: int = 0
    completed: int = 0
    in_progress: int = 0
    paused: int = 0
    completion_rate: float = Field(default=0.0, description="Percent of active projects completed")
