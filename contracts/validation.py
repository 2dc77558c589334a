"""Request validation.

Runs before any completion call so malformed requests never spend API
budget. Each function takes the raw camelCase JSON body and returns a typed
request, or raises MissingFieldError / InvalidRequestError.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from errors import InvalidRequestError, MissingFieldError

from .request_contracts import (
    CostEstimateRequest,
    GenerationRequest,
    PrerequisiteRequest,
    StepHelpRequest,
)

GENERATION_FIELDS = ("concept", "skillLevel", "domain")
PREREQUISITE_FIELDS = ("projectTitle", "projectDescription")


def _is_filled(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


def _is_index(value: Any) -> bool:
    # bool is an int subclass; JSON true/false is not a step index
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def missing_fields(data: Optional[Mapping[str, Any]], fields: Sequence[str]) -> List[str]:
    """Names of `fields` that are not non-empty strings in `data`."""
    if not isinstance(data, Mapping):
        data = {}
    return [name for name in fields if not _is_filled(data.get(name))]


def _flag(data: Mapping[str, Any], name: str) -> bool:
    value = data.get(name)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise InvalidRequestError(f"{name} must be a boolean", [name])
    return value


def _string_list(data: Mapping[str, Any], name: str) -> List[str]:
    value = data.get(name)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise InvalidRequestError(f"{name} must be a list of strings", [name])
    return value


def validate_generation_request(
    data: Optional[Mapping[str, Any]],
    default_num_ideas: int = 3,
    max_ideas: int = 10,
) -> GenerationRequest:
    """Validate a project generation body."""
    missing = missing_fields(data, GENERATION_FIELDS)
    if missing:
        raise MissingFieldError(missing)

    num_ideas = data.get("numIdeas")
    if num_ideas is None:
        num_ideas = default_num_ideas
    elif not _is_index(num_ideas) or not 1 <= num_ideas <= max_ideas:
        raise InvalidRequestError(
            f"numIdeas must be an integer between 1 and {max_ideas}", ["numIdeas"]
        )

    return GenerationRequest(
        concept=data["concept"],
        skill_level=data["skillLevel"],
        domain=data["domain"],
        num_ideas=num_ideas,
    )


def validate_prerequisite_request(data: Optional[Mapping[str, Any]]) -> PrerequisiteRequest:
    """Validate a prerequisite generation body."""
    missing = missing_fields(data, PREREQUISITE_FIELDS)
    if missing:
        raise MissingFieldError(missing)

    return PrerequisiteRequest(
        project_title=data["projectTitle"],
        project_description=data["projectDescription"],
        tools=_string_list(data, "tools"),
        domain=data.get("domain") or "",
        skill_level=data.get("skillLevel") or "",
    )


def _invalid_step_help(error: ValidationError) -> InvalidRequestError:
    details = error.errors()
    # Model-level errors (empty loc) come from the step index range check
    fields = [".".join(str(part) for part in d["loc"]) or "currentStepIndex" for d in details]
    message = details[0]["msg"].removeprefix("Value error, ")
    return InvalidRequestError(message, fields)


def validate_step_help_request(data: Optional[Mapping[str, Any]]) -> StepHelpRequest:
    """Validate a step-help body.

    currentStepIndex must also point at an existing step of the project.
    """
    if not isinstance(data, Mapping):
        data = {}
    missing = []
    if not isinstance(data.get("project"), dict):
        missing.append("project")
    if not _is_index(data.get("currentStepIndex")):
        missing.append("currentStepIndex")
    if not _is_filled(data.get("userQuestion")):
        missing.append("userQuestion")
    if missing:
        raise MissingFieldError(missing)

    project: Dict[str, Any] = data["project"]
    steps = project.get("steps")
    if not isinstance(steps, list) or not all(isinstance(s, str) for s in steps):
        raise InvalidRequestError("project.steps must be a list of strings", ["project.steps"])
    try:
        return StepHelpRequest.model_validate({
            "project": {
                "title": project.get("title") or "",
                "description": project.get("description") or "",
                "domain": project.get("domain") or "",
                "steps": steps,
            },
            "currentStepIndex": data["currentStepIndex"],
            "previousSteps": _string_list(data, "previousSteps"),
            "userQuestion": data["userQuestion"],
        })
    except ValidationError as e:
        raise _invalid_step_help(e) from e


def validate_cost_estimate_request(data: Optional[Mapping[str, Any]]) -> CostEstimateRequest:
    """Validate a cost estimate body."""
    missing = missing_fields(data, GENERATION_FIELDS)
    if missing:
        raise MissingFieldError(missing)

    return CostEstimateRequest(
        concept=data["concept"],
        skill_level=data["skillLevel"],
        domain=data["domain"],
        include_prerequisites=_flag(data, "includePrerequisites"),
        include_step_help=_flag(data, "includeStepHelp"),
    )
