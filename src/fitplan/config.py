"""Configuration settings for the application."""

import os
import sys

from pydantic_settings import BaseSettings

from fitplan.common import (
    AnsiColors,
    colored_print,
)


class Settings(BaseSettings):
    """Pydantic settings class for the application."""

    # Define the settings with default values and types
    # These will be loaded from environment variables or a .env file if not provided
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    LOG_LEVEL: str = "info"  # Options: debug, info, warning, error, critical

    # Agent configuration
    MODEL_PROVIDER: str = "anthropic"  # Options: anthropic, openai
    AGENT_MODEL: str | None = None  # Falls back to the provider default
    MAX_TOKENS: int = 4096
    ANTHROPIC_API_KEY: str | None = None
    OPENAI_API_KEY: str | None = None

    # Filesystem
    PUBLIC_DIR: str = "public"
    WORKING_DIR: str = "."

    class Config:
        """Configuration for Pydantic settings."""

        # Load environment variables from a .env file
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()


def get_required_env(name: str) -> str:
    """
    Return the value of a required environment variable or exit the process.

    The process environment is checked first, then the ``.env``-backed settings. A missing or
    empty value is fatal: an error is written to stderr and the process exits with status 1.
    """
    value = os.environ.get(name) or getattr(settings, name, None)
    if not value:
        colored_print(f"Environment variable {name} is not set", AnsiColors.RED, file=sys.stderr)
        sys.exit(1)
    return str(value)
