"""Project idea contracts.

Model output and the static fallback table are both validated against these
models, so the client sees one shape regardless of where a project came from.
"""

from typing import List, Union

from pydantic import Field, TypeAdapter, field_validator

from .base import ApiModel


MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5


class ProjectIdea(ApiModel):
    """A single hands-on project suggestion."""
    title: str = Field(..., min_length=1)
    description: str = Field(..., description="1-2 sentence summary")
    tools: List[str] = Field(default_factory=list)
    time_estimate: str = Field(default="", description="e.g. '2-3 hours'")
    difficulty: Union[int, str] = Field(
        default=MIN_DIFFICULTY,
        description="1-5 rating, or a free-text label such as 'Beginner'"
    )
    steps: List[str] = Field(..., min_length=1)
    starter_code: str = ""
    motivational_tip: str = ""

    @field_validator("difficulty")
    @classmethod
    def clamp_difficulty(cls, value: Union[int, str]) -> Union[int, str]:
        if isinstance(value, int):
            return max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, value))
        return value


ProjectIdeaList = TypeAdapter(List[ProjectIdea])
