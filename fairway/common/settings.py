"""
Process settings for fairway: project name, environment, log level and the database connection.
DATABASE_URL here is the only source of the database location; the engine and its pool are built from it.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Final

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError

REQUIRED_ENV_VARS: Final[tuple[str, ...]] = (
    "PROJECT_NAME",
    "ENV",
    "LOG_LEVEL",
    "DATABASE_URL",
)


class Settings(BaseModel):
    """Typed runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    PROJECT_NAME: str
    ENV: str
    LOG_LEVEL: str
    DATABASE_URL: str
    DATABASE_POOL_SIZE: int = 5
    DATABASE_POOL_TIMEOUT_SECONDS: int = 30


def load_settings(*, load_env: bool = True) -> Settings:
    """Load and validate environment settings from `.env` and process environment."""

    if load_env:
        load_dotenv()

    missing = [key for key in REQUIRED_ENV_VARS if not os.getenv(key)]
    if missing:
        missing_values = ", ".join(sorted(missing))
        raise RuntimeError(
            f"Missing required environment variables: {missing_values}. "
            "Populate these values in `.env` before starting the application."
        )

    try:
        return Settings.model_validate(dict(os.environ))
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached accessor for application settings."""

    return load_settings()
