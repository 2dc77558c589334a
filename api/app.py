"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings, settings as default_settings
from errors import GatewayError, InvalidRequestError, ParseError
from orchestrator import GenerationService

from .routes import generation_error, router, timestamp

logger = logging.getLogger(__name__)


def create_app(
    service: Optional[GenerationService] = None,
    app_settings: Optional[Settings] = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        service: Generation service to serve. Built from settings if not given.
        app_settings: Settings for CORS and error detail.
    """
    app_settings = app_settings or default_settings
    app = FastAPI(
        title="BuildNow",
        description="Project ideas, prerequisites and step help for what you just learned",
        version="1.0.0",
    )
    app.state.settings = app_settings
    app.state.generation_service = service or GenerationService(app_settings=app_settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidRequestError)
    async def invalid_request_handler(request: Request, exc: InvalidRequestError):
        return JSONResponse(
            status_code=400,
            content={"error": exc.message, "type": "validation_error", "fields": exc.fields},
        )

    @app.exception_handler(RequestValidationError)
    async def malformed_body_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Request body must be a JSON object", "type": "validation_error", "fields": []},
        )

    @app.exception_handler(GatewayError)
    @app.exception_handler(ParseError)
    async def generation_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled generation error on %s: %s", request.url.path, exc)
        return generation_error("Failed to generate a response. Please try again.", exc, app_settings)

    @app.exception_handler(Exception)
    async def server_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "type": "server_error"},
        )

    app.include_router(router)

    @app.get("/")
    def root():
        return {
            "message": "BuildNow API Server is running!",
            "status": "healthy",
            "timestamp": timestamp(),
        }

    return app
