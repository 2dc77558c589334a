"""FastAPI routes for BuildNow."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from config import Settings
from contracts import (
    GenerationResult,
    validate_cost_estimate_request,
    validate_generation_request,
    validate_prerequisite_request,
    validate_step_help_request,
)
from errors import GatewayError, ParseError
from orchestrator import GenerationService, build_cost_comparison, estimate_request_cost

logger = logging.getLogger(__name__)

FALLBACK_NOTE = "Generated using fallback mode due to API issues."
MOCK_NOTE = "This is demo data. Use the main endpoint for AI-generated projects."


def get_service(request: Request) -> GenerationService:
    return request.app.state.generation_service


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _result_meta(result: GenerationResult, note: Optional[str] = None) -> Dict[str, Any]:
    """provider, usage and, for fallback payloads, the demo indicator."""
    meta: Dict[str, Any] = {"provider": result.provider, **result.usage.to_wire()}
    if result.is_fallback:
        meta["isDemoMode"] = True
        meta["note"] = note or FALLBACK_NOTE
    return meta


def generation_error(message: str, error: Exception, app_settings: Settings) -> JSONResponse:
    body: Dict[str, Any] = {"error": message, "type": "generation_error"}
    if app_settings.debug:
        body["details"] = str(error)
    return JSONResponse(status_code=500, content=body)


router = APIRouter(prefix="/api")


# =============================================================================
# Project generation
# =============================================================================


@router.post("/generate-projects")
def generate_projects(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: GenerationService = Depends(get_service),
    app_settings: Settings = Depends(get_settings),
):
    """Generate project ideas for a concept, skill level and domain."""
    request = validate_generation_request(
        payload,
        default_num_ideas=app_settings.default_num_ideas,
        max_ideas=app_settings.max_ideas_per_request,
    )
    result = service.generate_projects(request)
    return {
        "success": True,
        "projects": [p.to_wire() for p in result.payload],
        "generatedAt": timestamp(),
        "totalProjects": len(result.payload),
        **_result_meta(result),
    }


@router.get("/generate-projects/mock")
def generate_projects_mock(service: GenerationService = Depends(get_service)):
    """Demo projects, for development without an API key."""
    result = service.mock_projects()
    return {
        "success": True,
        "projects": [p.to_wire() for p in result.payload],
        "generatedAt": timestamp(),
        "totalProjects": len(result.payload),
        **_result_meta(result, note=MOCK_NOTE),
    }


# =============================================================================
# Prerequisites
# =============================================================================


@router.post("/generate-prerequisites")
def generate_prerequisites(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: GenerationService = Depends(get_service),
):
    """List what to learn before starting a project."""
    request = validate_prerequisite_request(payload)
    result = service.generate_prerequisites(request)
    return {
        "success": True,
        "project": {
            "title": request.project_title,
            "description": request.project_description,
            "domain": request.domain,
            "skillLevel": request.skill_level,
        },
        "prerequisites": result.payload.to_wire(),
        "generatedAt": timestamp(),
        **_result_meta(result),
    }


# =============================================================================
# Step help
# =============================================================================


@router.post("/ai-step-help")
def ai_step_help(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: GenerationService = Depends(get_service),
    app_settings: Settings = Depends(get_settings),
):
    """Answer a question about the current step. No fallback."""
    request = validate_step_help_request(payload)
    try:
        result = service.step_help(request)
    except (GatewayError, ParseError) as e:
        logger.error("AI step help error: %s", e)
        return generation_error("Failed to generate AI help. Please try again.", e, app_settings)
    return {
        "success": True,
        "answer": result.payload,
        "generatedAt": timestamp(),
        "provider": result.provider,
        **result.usage.to_wire(),
    }


# =============================================================================
# Cost
# =============================================================================


@router.post("/estimate-cost")
def estimate_cost(payload: Optional[Dict[str, Any]] = Body(None)):
    """Advisory cost estimate for a request and optional follow-ups."""
    request = validate_cost_estimate_request(payload)
    return estimate_request_cost(request).to_wire()


@router.get("/cost-comparison")
def cost_comparison():
    """Static before/after prompt optimisation comparison."""
    return build_cost_comparison().to_wire()
