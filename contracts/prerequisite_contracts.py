"""Prerequisite contracts: what to learn before starting a project."""

from enum import Enum
from typing import List

from pydantic import Field

from .base import ApiModel


class Importance(str, Enum):
    """How much a prerequisite matters for the project."""
    ESSENTIAL = "Essential"
    IMPORTANT = "Important"
    HELPFUL = "Helpful"


class ResourceType(str, Enum):
    """Kind of external learning resource."""
    YOUTUBE = "YouTube"
    WEBSITE = "Website"
    DOCUMENTATION = "Documentation"
    COURSE = "Course"
    BOOK = "Book"


class Resource(ApiModel):
    """A free learning resource for one prerequisite."""
    type: ResourceType
    title: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    description: str = ""
    duration: str = Field(default="", description="e.g. '10 min video', 'Free course'")


class PrerequisiteItem(ApiModel):
    """A concept, tool or skill needed before starting."""
    title: str = Field(..., min_length=1)
    description: str = ""
    importance: Importance
    estimated_time: str = ""
    resources: List[Resource] = Field(default_factory=list)


class PrerequisiteCategory(ApiModel):
    """A named group of prerequisite items (e.g. 'Core Concepts')."""
    category: str = Field(..., min_length=1)
    items: List[PrerequisiteItem] = Field(default_factory=list)


class PrerequisiteSet(ApiModel):
    """Everything a learner should cover before a project, plus a path."""
    prerequisites: List[PrerequisiteCategory]
    total_estimated_time: str = ""
    difficulty_assessment: str = Field(
        default="",
        description="Beginner-friendly, Moderate or Advanced"
    )
    learning_path: List[str] = Field(default_factory=list)
