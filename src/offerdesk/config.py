"""Centralized, typed configuration using pydantic-settings.

Provides a single ``Settings`` class backed by ``.env`` file and environment
variables, a cached ``get_settings()`` accessor, and a ``validate_credentials()``
startup gate that enforces provider credentials in production mode.

IMPORTANT: This module has ZERO imports from the ``offerdesk`` package to
prevent circular imports.  Only stdlib, pydantic, pydantic_settings, and
structlog are used.
"""

from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path

import structlog
from pydantic import SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()


class Settings(BaseSettings):
    """Application settings loaded from environment variables and ``.env`` file.

    ``SecretStr`` fields prevent accidental leaks of provider keys in logs or
    error output.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- General ---------------------------------------------------------------
    production: bool = False
    port: int = 8000

    # -- Record store ----------------------------------------------------------
    records_db_path: Path = Path("data/offers.db")

    # -- Primary provider (Anthropic) ------------------------------------------
    anthropic_api_key: SecretStr = SecretStr("")
    anthropic_model: str = "claude-haiku-4-5-20251001"

    # -- Secondary provider (OpenAI-compatible) --------------------------------
    openai_api_key: SecretStr = SecretStr("")
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str | None = None

    # -- Parser ----------------------------------------------------------------
    parser_max_attempts: int = 3
    parser_base_delay_seconds: float = 1.0
    # Backoff delays stop doubling once they reach this value.
    parser_max_delay_seconds: float = 30.0
    parser_temperature: float = 0.1
    min_brief_length: int = 50
    min_dm_length: int = 20


@lru_cache
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance.

    Call ``get_settings.cache_clear()`` in tests to reset.

    Returns:
        The application ``Settings``.
    """
    try:
        return Settings()
    except ValidationError as exc:
        # Log only the structured errors list -- never the full exception
        # which may contain raw SecretStr values.
        logger.error("settings_validation_failed", errors=exc.errors())
        sys.exit(1)


def validate_credentials(settings: Settings) -> None:
    """Enforce provider credential presence at startup.

    In **production** mode (``settings.production is True``), the application
    exits with a clear error block if any provider key is missing.  In
    **development** mode, each missing key is logged as a warning and the
    parser simply falls through to whichever provider is configured.

    Args:
        settings: The loaded application settings.
    """
    errors: list[str] = []

    if not settings.anthropic_api_key.get_secret_value():
        errors.append("ANTHROPIC_API_KEY is empty or not set")

    if not settings.openai_api_key.get_secret_value():
        errors.append("OPENAI_API_KEY is empty or not set")

    if not errors:
        logger.info("credential_validation_passed")
        return

    if settings.production:
        for err in errors:
            logger.error("credential_missing", detail=err)
        print("\n=== STARTUP FAILED ===", file=sys.stderr)
        print("Missing required credentials for production mode:", file=sys.stderr)
        for err in errors:
            print(f"  - {err}", file=sys.stderr)
        print("======================\n", file=sys.stderr)
        sys.exit(1)
    else:
        for err in errors:
            logger.warning("credential_missing_dev", detail=err)
