"""Request contracts for the generation endpoints."""

from enum import Enum
from typing import List

from pydantic import Field, model_validator

from .base import ApiModel


class SkillLevel(str, Enum):
    """Skill levels offered by the client."""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class Domain(str, Enum):
    """Project domains offered by the client."""
    CODING = "Coding"
    HARDWARE = "Hardware"
    RESEARCH = "Research"
    DESIGN = "Design"


class GenerationRequest(ApiModel):
    """A learner's (concept, skill level, domain) triple."""
    concept: str = Field(..., min_length=1, description="Concept the user just learned")
    skill_level: str = Field(..., min_length=1, description="Usually one of SkillLevel")
    domain: str = Field(..., min_length=1, description="Usually one of Domain")
    num_ideas: int = Field(default=3, ge=1, description="Number of project ideas to generate")


class PrerequisiteRequest(ApiModel):
    """Project context for prerequisite generation."""
    project_title: str = Field(..., min_length=1)
    project_description: str = Field(..., min_length=1)
    tools: List[str] = Field(default_factory=list)
    domain: str = ""
    skill_level: str = ""


class StepHelpProject(ApiModel):
    """The slice of a project the step-help prompt needs."""
    title: str = ""
    description: str = ""
    domain: str = ""
    steps: List[str] = Field(default_factory=list)


class StepHelpRequest(ApiModel):
    """A question about one step of a project."""
    project: StepHelpProject
    current_step_index: int = Field(..., ge=0)
    previous_steps: List[str] = Field(default_factory=list)
    user_question: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_step_index(self) -> "StepHelpRequest":
        steps = len(self.project.steps)
        if self.current_step_index >= steps:
            raise ValueError(
                f"currentStepIndex {self.current_step_index} is out of range for {steps} steps"
            )
        return self

    @property
    def current_step(self) -> str:
        return self.project.steps[self.current_step_index]


class CostEstimateRequest(ApiModel):
    """Input for the advisory cost estimate endpoint."""
    concept: str = Field(..., min_length=1)
    skill_level: str = Field(..., min_length=1)
    domain: str = Field(..., min_length=1)
    include_prerequisites: bool = False
    include_step_help: bool = False
