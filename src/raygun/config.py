"""Configuration loading and validation.

This module is responsible for:

- Loading `.env` into the process environment (without overriding existing vars).
- Converting environment variables into strongly-typed Pydantic models.
- Validating required fields and providing actionable error messages.
"""

import os
from typing import TypeVar

import dotenv
from pydantic import BaseModel, Field, model_validator

from .sink import DEFAULT_ENDPOINT

_T = TypeVar("_T", int, float)


def _get_env_str(name: str, default: str) -> str:
    """Read a string env var with a default (blank counts as unset)."""
    value = os.getenv(name, "").strip()
    return value or default


def _get_env_bool(name: str, default: bool) -> bool:
    """Read a boolean env var with a default."""
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    normalized = raw.strip().lower()
    if normalized in {"true", "1", "yes", "y", "on"}:
        return True
    if normalized in {"false", "0", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be a boolean (true/false). Got: {raw!r}")


def _get_env_number(name: str, default: _T, cast: type[_T]) -> _T:
    """Read an int/float env var with a default."""
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a {cast.__name__}. Got: {raw!r}") from exc


class RaygunConfig(BaseModel):
    """Configuration for the error-report collector."""

    app_name: str = Field(default="", description="Application name reported with every event")
    api_key: str = Field(default="", description="Raygun application API key")
    enabled: bool = Field(default=True, description="Disable to get a no-op collector")
    endpoint: str = Field(default=DEFAULT_ENDPOINT, description="Base URL of the ingestion API")

    # Delivery pipeline tuning knobs (see env_example.env)
    workers: int = Field(default=1, ge=1, description="Number of delivery worker threads")
    queue_size: int = Field(default=10000, ge=1, description="Capacity of the pending event queue")
    request_timeout: float = Field(default=5.0, gt=0, description="Overall request timeout (seconds)")
    idle_timeout: float = Field(default=30.0, gt=0, description="Idle pooled connection lifetime (seconds)")
    max_idle_conns: int = Field(default=10, ge=1, description="Max pooled connections kept for reuse")

    @model_validator(mode="after")
    def validate_api_key(self) -> "RaygunConfig":
        """Require a real api key unless the collector is disabled."""
        if not self.enabled:
            return self
        if not self.api_key or self.api_key == "your_raygun_api_key_here":
            raise ValueError("RAYGUN_API_KEY is required. Please set it in your .env file.")
        return self


class Config(BaseModel):
    """Top-level application configuration."""

    raygun: RaygunConfig = Field(..., description="Raygun collector configuration")


def load_config() -> Config:
    """Load application configuration from environment variables.

    Notes:
    - Calls `dotenv.load_dotenv()` so local `.env` values are visible to the process.
    - Raises `ValueError` with actionable messages when the collector is enabled
      but the api key is missing or still contains the placeholder value.
    """
    dotenv.load_dotenv()

    raygun = RaygunConfig(
        app_name=_get_env_str("RAYGUN_APP_NAME", ""),
        api_key=os.getenv("RAYGUN_API_KEY", "").strip(),
        enabled=_get_env_bool("RAYGUN_ENABLED", True),
        endpoint=_get_env_str("RAYGUN_ENDPOINT", DEFAULT_ENDPOINT),
        workers=_get_env_number("RAYGUN_WORKERS", 1, int),
        queue_size=_get_env_number("RAYGUN_QUEUE_SIZE", 10000, int),
        request_timeout=_get_env_number("RAYGUN_REQUEST_TIMEOUT", 5.0, float),
        idle_timeout=_get_env_number("RAYGUN_IDLE_TIMEOUT", 30.0, float),
        max_idle_conns=_get_env_number("RAYGUN_MAX_IDLE_CONNS", 10, int),
    )
    return Config(raygun=raygun)
