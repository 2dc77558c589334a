"""HTTP tests for the FastAPI app, with a fake provider behind the service."""

import pytest
from fastapi.testclient import TestClient

from api import create_app
from orchestrator import GenerationService

from conftest import FakeProvider, prerequisite_json, project_json

GENERATION_BODY = {"concept": "Recursion", "skillLevel": "Beginner", "domain": "Coding"}

STEP_HELP_BODY = {
    "project": {
        "title": "Fractal Tree",
        "description": "Draw a tree recursively.",
        "domain": "Coding",
        "steps": ["Set up canvas", "Draw trunk", "Recurse"],
    },
    "currentStepIndex": 2,
    "previousSteps": ["Set up canvas", "Draw trunk"],
    "userQuestion": "When should the recursion stop?",
}


@pytest.fixture
def client_for(test_settings):
    def _client(provider, **kwargs):
        service = GenerationService(provider=provider, app_settings=test_settings)
        return TestClient(create_app(service=service, app_settings=test_settings), **kwargs)
    return _client


class TestRoot:
    """Test the health endpoint."""

    def test_root(self, client_for):
        body = client_for(FakeProvider()).get("/").json()
        assert body["message"] == "BuildNow API Server is running!"
        assert body["status"] == "healthy"
        assert body["timestamp"]


class TestGenerateProjects:
    """Test POST /api/generate-projects."""

    def test_live(self, client_for):
        response = client_for(FakeProvider(replies=[project_json(3)])).post(
            "/api/generate-projects", json=GENERATION_BODY
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["totalProjects"] == 3
        assert body["provider"] == "OpenAI GPT-4o-mini"
        assert "isDemoMode" not in body
        assert body["projects"][0]["timeEstimate"] == "2 hours"
        assert {"inputTokens", "outputTokens", "totalTokens", "totalCost", "generatedAt"} <= set(body)

    def test_missing_domain(self, client_for):
        provider = FakeProvider(replies=[project_json(3)])
        response = client_for(provider).post(
            "/api/generate-projects", json={"concept": "Recursion", "skillLevel": "Beginner"}
        )
        assert response.status_code == 400
        body = response.json()
        assert "domain" in body["error"]
        assert body["fields"] == ["domain"]
        assert provider.calls == []

    def test_no_body(self, client_for):
        response = client_for(FakeProvider()).post("/api/generate-projects")
        assert response.status_code == 400
        assert response.json()["fields"] == ["concept", "skillLevel", "domain"]

    def test_non_object_body(self, client_for):
        response = client_for(FakeProvider()).post("/api/generate-projects", json=["Recursion"])
        assert response.status_code == 400

    def test_num_ideas_out_of_range(self, client_for):
        provider = FakeProvider()
        response = client_for(provider).post("/api/generate-projects", json={**GENERATION_BODY, "numIdeas": 50})
        assert response.status_code == 400
        assert response.json()["fields"] == ["numIdeas"]
        assert provider.calls == []

    def test_failure_serves_demo_projects(self, client_for):
        provider = FakeProvider(error=RuntimeError("invalid api key"))
        response = client_for(provider).post("/api/generate-projects", json=GENERATION_BODY)
        assert response.status_code == 200
        body = response.json()
        assert body["isDemoMode"] is True
        assert body["note"]
        assert body["provider"] == "Fallback Data"
        assert body["totalProjects"] == 3
        assert len(provider.calls) == 1


class TestMockProjects:
    """Test GET /api/generate-projects/mock."""

    def test_mock(self, client_for):
        provider = FakeProvider()
        body = client_for(provider).get("/api/generate-projects/mock").json()
        assert body["provider"] == "Mock Data"
        assert body["isDemoMode"] is True
        assert body["totalProjects"] == 3
        assert provider.calls == []


class TestGeneratePrerequisites:
    """Test POST /api/generate-prerequisites."""

    BODY = {
        "projectTitle": "Fractal Tree",
        "projectDescription": "Draw a tree recursively.",
        "tools": ["Canvas"],
        "domain": "Coding",
        "skillLevel": "Beginner",
    }

    def test_live(self, client_for):
        body = client_for(FakeProvider(replies=[prerequisite_json()])).post(
            "/api/generate-prerequisites", json=self.BODY
        ).json()
        assert body["project"]["title"] == "Fractal Tree"
        assert body["prerequisites"]["learningPath"] == ["Learn base cases", "Start project"]
        assert "isDemoMode" not in body

    def test_fallback(self, client_for):
        response = client_for(FakeProvider(replies=["not json"])).post(
            "/api/generate-prerequisites", json=self.BODY
        )
        assert response.status_code == 200
        body = response.json()
        assert body["isDemoMode"] is True
        assert body["prerequisites"]["totalEstimatedTime"] == "3-4 hours"

    def test_missing_title(self, client_for):
        response = client_for(FakeProvider()).post(
            "/api/generate-prerequisites", json={"projectDescription": "Draw a tree."}
        )
        assert response.status_code == 400
        assert response.json()["fields"] == ["projectTitle"]


class TestStepHelp:
    """Test POST /api/ai-step-help."""

    def test_answer(self, client_for):
        provider = FakeProvider(replies=["Stop when the branch length is below 2px."])
        response = client_for(provider).post("/api/ai-step-help", json=STEP_HELP_BODY)
        assert response.status_code == 200
        body = response.json()
        assert body["answer"] == "Stop when the branch length is below 2px."
        assert "Current Step (3):\nRecurse" in provider.calls[0]["prompt"]

    def test_failure_is_500(self, client_for):
        response = client_for(FakeProvider(error=RuntimeError("down"))).post(
            "/api/ai-step-help", json=STEP_HELP_BODY
        )
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to generate AI help. Please try again."
        assert body["type"] == "generation_error"
        assert "down" in body["details"]

    def test_details_hidden_without_debug(self, test_settings):
        quiet = test_settings.model_copy(update={"debug": False})
        service = GenerationService(provider=FakeProvider(error=RuntimeError("down")), app_settings=quiet)
        response = TestClient(create_app(service=service, app_settings=quiet)).post(
            "/api/ai-step-help", json=STEP_HELP_BODY
        )
        assert response.status_code == 500
        assert "details" not in response.json()

    def test_missing_question(self, client_for):
        provider = FakeProvider()
        response = client_for(provider).post(
            "/api/ai-step-help", json={**STEP_HELP_BODY, "userQuestion": ""}
        )
        assert response.status_code == 400
        assert response.json()["fields"] == ["userQuestion"]
        assert provider.calls == []

    def test_step_index_out_of_range(self, client_for):
        provider = FakeProvider()
        response = client_for(provider).post(
            "/api/ai-step-help", json={**STEP_HELP_BODY, "currentStepIndex": 3}
        )
        assert response.status_code == 400
        assert response.json()["fields"] == ["currentStepIndex"]
        assert provider.calls == []

    def test_step_index_zero_accepted(self, client_for):
        response = client_for(FakeProvider(replies=["Open your editor."])).post(
            "/api/ai-step-help", json={**STEP_HELP_BODY, "currentStepIndex": 0, "previousSteps": []}
        )
        assert response.status_code == 200


class TestCostEndpoints:
    """Test the cost estimate and comparison endpoints."""

    def test_estimate(self, client_for):
        body = client_for(FakeProvider()).post(
            "/api/estimate-cost", json={**GENERATION_BODY, "includePrerequisites": True}
        ).json()
        assert body["success"] is True
        assert [item["service"] for item in body["breakdown"]] == [
            "Project Generation", "Prerequisites (per project)",
        ]
        assert len(body["estimatedCost"].split(".")[1]) == 6

    def test_estimate_missing_fields(self, client_for):
        response = client_for(FakeProvider()).post("/api/estimate-cost", json={"concept": "Recursion"})
        assert response.status_code == 400

    def test_comparison(self, client_for):
        body = client_for(FakeProvider()).get("/api/cost-comparison").json()
        assert body["comparison"]["savings"]["tokensSaved"] == 3000
        assert body["recommendations"]


class TestUnexpectedErrors:
    """Errors outside the generation paths become a generic 500."""

    def test_server_error(self, client_for, monkeypatch):
        client = client_for(FakeProvider(), raise_server_exceptions=False)

        def explode(self):
            raise KeyError("boom")

        monkeypatch.setattr(GenerationService, "mock_projects", explode)
        response = client.get("/api/generate-projects/mock")
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "type": "server_error"}
