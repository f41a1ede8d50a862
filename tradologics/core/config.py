"""SDK configuration via Pydantic Settings.

Environment-driven configuration for:
- Live API endpoint and bearer token
- Backtest engine socket and receive/send deadlines
- Sandbox tradehook endpoint (and the credentials used by the test suite)
- Telemetry endpoint (OpenTelemetry)

All settings can be overridden via environment variables or a .env file.
"""

import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tradologics.core import constants

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    # --- Live API ---
    TGX_API_SCHEME: str = constants.API_SCHEME
    TGX_API_HOST: str = constants.API_HOST
    TGX_API_BASE_PATH: str = constants.API_BASE_PATH
    TGX_API_TOKEN: str = ""
    HTTP_TIMEOUT: float = constants.HTTP_TIMEOUT

    # --- Backtest Engine ---
    BACKTEST_SOCKET_URL: str = constants.BACKTEST_SOCKET_URL
    BACKTEST_RECEIVE_TIMEOUT_MS: Optional[int] = None
    BACKTEST_SEND_TIMEOUT_MS: Optional[int] = None

    # --- Sandbox ---
    SANDBOX_URL: str = constants.SANDBOX_URL
    TEST_SANDBOX_URL: str = ""
    TEST_SANDBOX_TOKEN: str = ""

    # --- Telemetry ---
    OTEL_EXPORTER_OTLP_ENDPOINT: str = ""

    @field_validator("TGX_API_BASE_PATH", mode="before")
    @classmethod
    def normalize_base_path(cls, v: str):
        stripped = (v or "").strip("/")
        return f"/{stripped}" if stripped else ""

    @field_validator(
        "BACKTEST_RECEIVE_TIMEOUT_MS", "BACKTEST_SEND_TIMEOUT_MS", mode="before"
    )
    @classmethod
    def empty_timeout_is_none(cls, v):
        # A blank env var means "block until the engine replies"
        if v in ("", None):
            return None
        return v


def get_settings() -> Settings:
    """Build settings from the current environment (no caching)."""
    return Settings()


def get_test_config(env_path: Optional[str] = None) -> Settings:
    """
    Settings for the sandbox-backed tests.

    Loads ``env_path`` (or the nearest ``.env`` found by python-dotenv) into the process
    environment first, without overriding variables that are already set.
    """
    if not load_dotenv(env_path):
        logger.info(".env file not found")
    return Settings()
