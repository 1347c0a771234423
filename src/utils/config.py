"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.paths import PROJECT_ROOT

_ENV_FILE = PROJECT_ROOT / ".env"


class AppSettings(BaseSettings):
    """Configuration for the newsroom API.

    Settings are read from environment variables (no prefix) and an optional
    ``.env`` file in the project root. Provider keys are optional so that the
    service can start without every integration configured; handlers report
    a missing key when the corresponding provider is requested.

    :param neon_database_url: PostgreSQL connection string.
    :param admin_token: Shared secret expected in the X-Admin-Token header.
    :param openai_api_key: OpenAI API key.
    :param gemini_api_key: Gemini API key.
    :param brave_api_key: Brave Search subscription token.
    :param comfyui_api_url: Base URL of the ComfyUI instance.
    """

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    neon_database_url: str | None = Field(default=None, description="Postgres connection URL")
    admin_token: str | None = Field(default=None, description="Admin shared secret")

    openai_api_key: str | None = Field(default=None, description="OpenAI API key")
    openai_timeout: float = Field(default=120.0, gt=0, description="OpenAI request timeout (s)")
    openai_max_retries: int = Field(default=2, ge=0, le=5, description="OpenAI SDK retries")

    gemini_api_key: str | None = Field(default=None, description="Gemini API key")
    gemini_model: str = Field(default="gemini-2.5-flash", description="Gemini model name")
    gemini_timeout: float = Field(default=25.0, gt=0, description="Gemini request timeout (s)")

    brave_api_key: str | None = Field(default=None, description="Brave Search API token")
    search_timeout: float = Field(default=10.0, gt=0, description="Search request timeout (s)")

    comfyui_api_url: str = Field(
        default="http://192.168.1.31:8000",
        description="ComfyUI base URL",
    )
    comfyui_poll_attempts: int = Field(default=25, ge=1, le=100)
    comfyui_poll_interval: float = Field(default=5.0, ge=0)


@lru_cache
def get_settings() -> AppSettings:
    """Get cached application settings.

    Settings are loaded once and cached for the lifetime of the process.

    :returns: Configured AppSettings instance.
    """
    return AppSettings()
