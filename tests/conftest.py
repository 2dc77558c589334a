"""Shared fixtures: fake providers so no test touches the network."""

import json
from typing import List, Optional

import pytest

from config import Settings
from orchestrator import GenerationService
from providers import LLMProvider, LLMResponse


class FakeProvider(LLMProvider):
    """Returns canned replies in order and records every call."""

    def __init__(self, replies: Optional[List[str]] = None, error: Optional[Exception] = None):
        self.replies = list(replies or [])
        self.error = error
        self.calls = []

    @property
    def name(self) -> str:
        return "fake"

    @property
    def default_model(self) -> str:
        return "gpt-4o-mini"

    def complete(self, prompt, model=None, max_tokens=1024, temperature=None, system_prompt=None):
        self.calls.append({
            "prompt": prompt,
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        if self.error is not None:
            raise self.error
        content = self.replies.pop(0) if self.replies else ""
        return LLMResponse(content=content, model=model or self.default_model, provider=self.name)


def project_json(count: int = 3) -> str:
    return json.dumps([
        {
            "title": f"Project {i}",
            "description": "A small project.",
            "tools": ["Recursion", "Python"],
            "timeEstimate": "2 hours",
            "difficulty": 2,
            "steps": ["Plan", "Build", "Test"],
            "starterCode": "",
            "motivationalTip": "Keep going!",
        }
        for i in range(1, count + 1)
    ])


def prerequisite_json() -> str:
    return json.dumps({
        "prerequisites": [
            {
                "category": "Core Concepts",
                "items": [
                    {
                        "title": "Base cases",
                        "description": "When recursion stops",
                        "importance": "Essential",
                        "estimatedTime": "1 hour",
                        "resources": [
                            {
                                "type": "Website",
                                "title": "Recursion guide",
                                "url": "https://example.com/recursion",
                                "description": "Intro",
                                "duration": "Free tutorial",
                            }
                        ],
                    }
                ],
            }
        ],
        "totalEstimatedTime": "1 hour",
        "difficultyAssessment": "Beginner-friendly",
        "learningPath": ["Learn base cases", "Start project"],
    })


@pytest.fixture
def test_settings():
    return Settings(_env_file=None, openai_api_key="", debug=True)


@pytest.fixture
def make_service(test_settings):
    def _make(provider: LLMProvider) -> GenerationService:
        return GenerationService(provider=provider, app_settings=test_settings)
    return _make
