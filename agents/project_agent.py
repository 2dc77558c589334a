"""Project Agent - turns a learned concept into hands-on project ideas."""

from typing import Any, List

from agents.base_agent import BaseAgent
from agents.parsing import load_json, validate_payload
from contracts import GenerationRequest, ProjectIdea, ProjectIdeaList


PROJECT_PROMPT = (
    "Create {num_ideas} {concept} projects for {skill_level} {domain} learners. Return JSON only:\n"
    '[{{"title":"Name","description":"1-2 sentences","tools":["{concept}","tool2"],'
    '"timeEstimate":"X hours","difficulty":1-5,"steps":["step1","step2","step3","step4","step5"],'
    '"starterCode":"code or empty","motivationalTip":"tip"}}]'
)


class ProjectAgent(BaseAgent[List[ProjectIdea]]):
    """Generates a JSON array of ProjectIdea objects."""

    def build_prompt(self, request: GenerationRequest) -> str:
        return PROJECT_PROMPT.format(
            num_ideas=request.num_ideas,
            concept=request.concept,
            skill_level=request.skill_level,
            domain=request.domain,
        )

    def parse(self, text: str) -> List[ProjectIdea]:
        data: Any = load_json(text)
        # Some models wrap the array: {"projects": [...]}
        if isinstance(data, dict) and isinstance(data.get("projects"), list):
            data = data["projects"]
        return validate_payload(data, ProjectIdeaList, raw_text=text)
