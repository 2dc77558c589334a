"""Configuration settings for the BuildNow API."""

from dataclasses import dataclass
from typing import Dict, List

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env into os.environ so provider SDKs (e.g. OPENAI_API_KEY) pick up keys
load_dotenv()


@dataclass(frozen=True)
class GenerationParams:
    """Fixed completion parameters for one endpoint."""
    model: str
    max_tokens: int
    temperature: float


class Settings(BaseSettings):
    """Global settings for BuildNow.

    Settings can be overridden via environment variables with BUILDNOW_ prefix.
    Example: BUILDNOW_PROJECTS_MAX_TOKENS=2000
    """

    # Provider
    provider: str = Field(
        default="openai",
        description="LLM provider used by the completion gateway (openai, litellm)"
    )
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key (env: BUILDNOW_OPENAI_API_KEY, falls back to OPENAI_API_KEY)",
    )

    # Project generation
    projects_model: str = Field(default="gpt-4o-mini")
    projects_max_tokens: int = Field(default=1500, gt=0)
    projects_temperature: float = Field(default=0.8, ge=0.0, le=2.0)
    default_num_ideas: int = Field(
        default=3,
        ge=1,
        description="Number of project ideas requested when numIdeas is omitted"
    )
    max_ideas_per_request: int = Field(
        default=10,
        ge=1,
        description="Upper bound accepted for numIdeas"
    )

    # Prerequisite generation
    prerequisites_model: str = Field(default="gpt-4o-mini")
    prerequisites_max_tokens: int = Field(default=1200, gt=0)
    prerequisites_temperature: float = Field(default=0.7, ge=0.0, le=2.0)

    # Step help
    step_help_model: str = Field(default="gpt-4o-mini")
    step_help_max_tokens: int = Field(default=800, gt=0)
    step_help_temperature: float = Field(default=0.8, ge=0.0, le=2.0)

    # Server
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=5050)
    cors_origins: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:5174"],
        description="Origins allowed to call the API from a browser"
    )
    debug: bool = Field(
        default=False,
        description="Include upstream error details in 500 responses"
    )

    # Local project store used by the CLI
    store_path: str = Field(
        default="./.buildnow/projects.json",
        description="JSON file backing the local project store"
    )
    local_user_id: str = Field(
        default="local",
        description="User id the CLI acts as against the local store"
    )

    model_config = {
        "env_prefix": "BUILDNOW_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def projects_params(self) -> GenerationParams:
        return GenerationParams(
            self.projects_model, self.projects_max_tokens, self.projects_temperature
        )

    def prerequisites_params(self) -> GenerationParams:
        return GenerationParams(
            self.prerequisites_model,
            self.prerequisites_max_tokens,
            self.prerequisites_temperature,
        )

    def step_help_params(self) -> GenerationParams:
        return GenerationParams(
            self.step_help_model, self.step_help_max_tokens, self.step_help_temperature
        )


# Advisory prices in USD per 1K tokens. Not a billing source of truth.
DEFAULT_PRICING_MODEL = "gpt-4o-mini"

MODEL_PRICING: Dict[str, Dict[str, float]] = {
    "gpt-4o-mini": {"input": 0.000150, "output": 0.000600},
    "gpt-4o": {"input": 0.0025, "output": 0.010},
}

# Display names reported in the `provider` field of responses
PROVIDER_LABELS: Dict[str, str] = {
    "gpt-4o-mini": "OpenAI GPT-4o-mini",
    "gpt-4o": "OpenAI GPT-4o",
}


# Create singleton instance
settings = Settings()
