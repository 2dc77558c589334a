"""Tests for the generation agents: prompts and output parsing."""

import json

import pytest

from agents import PrerequisiteAgent, ProjectAgent, StepHelpAgent
from config import GenerationParams
from contracts import GenerationRequest, PrerequisiteRequest, StepHelpProject, StepHelpRequest
from errors import GatewayError, ParseError
from providers import CompletionGateway

from conftest import FakeProvider, prerequisite_json, project_json

PARAMS = GenerationParams(model="gpt-4o-mini", max_tokens=1500, temperature=0.8)


def _agent(cls, provider):
    return cls(CompletionGateway(provider), PARAMS)


def _generation_request(num_ideas=3):
    return GenerationRequest(concept="Recursion", skill_level="Beginner", domain="Coding", num_ideas=num_ideas)


def _step_help_request(previous_steps=None):
    return StepHelpRequest(
        project=StepHelpProject(
            title="Fractal Tree",
            description="Draw a tree recursively.",
            domain="Coding",
            steps=["Set up canvas", "Draw trunk", "Recurse"],
        ),
        current_step_index=2,
        previous_steps=previous_steps or [],
        user_question="When should the recursion stop?",
    )


class TestProjectAgent:
    """Test ProjectAgent."""

    def test_prompt_is_deterministic(self):
        agent = _agent(ProjectAgent, FakeProvider())
        assert agent.build_prompt(_generation_request()) == agent.build_prompt(_generation_request())

    def test_prompt_names_request(self):
        prompt = _agent(ProjectAgent, FakeProvider()).build_prompt(_generation_request(5))
        assert prompt.startswith("Create 5 Recursion projects for Beginner Coding learners.")
        assert '"tools":["Recursion","tool2"]' in prompt

    def test_run(self):
        provider = FakeProvider(replies=[f"```json\n{project_json(3)}\n```"])
        result = _agent(ProjectAgent, provider).run(_generation_request())
        assert len(result.output) == 3
        assert result.provider == "fake"
        assert result.raw_response.startswith("```json")
        assert provider.calls[0]["max_tokens"] == 1500

    def test_parse_unwraps_projects_key(self):
        wrapped = json.dumps({"projects": json.loads(project_json(2))})
        assert len(_agent(ProjectAgent, FakeProvider()).parse(wrapped)) == 2

    def test_parse_rejects_prose(self):
        with pytest.raises(ParseError):
            _agent(ProjectAgent, FakeProvider()).parse("Here are three ideas: ...")

    def test_gateway_error_propagates(self):
        agent = _agent(ProjectAgent, FakeProvider(error=ConnectionError("down")))
        with pytest.raises(GatewayError):
            agent.run(_generation_request())


class TestPrerequisiteAgent:
    """Test PrerequisiteAgent."""

    def _request(self, tools=None):
        return PrerequisiteRequest(
            project_title="Fractal Tree",
            project_description="Draw a tree recursively.",
            tools=tools or [],
            domain="Coding",
            skill_level="Beginner",
        )

    def test_prompt(self):
        prompt = _agent(PrerequisiteAgent, FakeProvider()).build_prompt(self._request(["Canvas", "JavaScript"]))
        assert prompt.startswith('List 3-5 key prerequisites for project "Fractal Tree" (Coding, Beginner level).')
        assert "Tools: Canvas, JavaScript" in prompt
        assert "Respond ONLY with valid JSON" in prompt

    def test_prompt_without_tools(self):
        prompt = _agent(PrerequisiteAgent, FakeProvider()).build_prompt(self._request())
        assert "Tools: None specified" in prompt

    def test_run(self):
        result = _agent(PrerequisiteAgent, FakeProvider(replies=[prerequisite_json()])).run(self._request())
        assert result.output.learning_path == ["Learn base cases", "Start project"]


class TestStepHelpAgent:
    """Test StepHelpAgent."""

    def test_prompt_numbers_previous_steps(self):
        prompt = _agent(StepHelpAgent, FakeProvider()).build_prompt(
            _step_help_request(["Set up canvas", "Draw trunk"])
        )
        assert "1. Set up canvas\n2. Draw trunk" in prompt
        assert "Current Step (3):\nRecurse" in prompt
        assert "When should the recursion stop?" in prompt

    def test_prompt_without_previous_steps(self):
        prompt = _agent(StepHelpAgent, FakeProvider()).build_prompt(_step_help_request())
        assert "Previous Steps Completed:\nNone" in prompt

    def test_answer_is_stripped(self):
        result = _agent(StepHelpAgent, FakeProvider(replies=["  Stop at depth 0.\n"])).run(_step_help_request())
        assert result.output == "Stop at depth 0."

    def test_blank_answer(self):
        with pytest.raises(ParseError):
            _agent(StepHelpAgent, FakeProvider()).parse("  ")
