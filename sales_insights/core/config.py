"""
Application configuration models and helpers.

Centralizes settings management so the FastAPI app, the analysis providers and
the command-line tooling share a consistent configuration surface.
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    populate_by_name=True,
    protected_namespaces=(),
)


class GeminiSettings(BaseSettings):
    """Configuration for Gemini model access."""

    model_config = _ENV_CONFIG

    api_key: Optional[str] = Field(
        None,
        validation_alias="GEMINI_API_KEY",
        description="When omitted the service answers with a local summary.",
    )
    model_name: str = Field("gemini-1.5-flash", validation_alias="GEMINI_MODEL_NAME")
    temperature: float = Field(0.4, validation_alias="GEMINI_TEMPERATURE")
    max_output_tokens: int = Field(500, validation_alias="GEMINI_MAX_OUTPUT_TOKENS")


class SupabaseSettings(BaseSettings):
    """Settings for the Supabase project holding sales records and audit logs."""

    model_config = _ENV_CONFIG

    url: Optional[str] = Field(None, validation_alias="SUPABASE_URL")
    anon_key: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("SUPABASE_ANON_KEY", "SUPABASE_PUBLISHABLE_KEY"),
        description="Read-only key used for context lookups.",
    )
    service_role_key: Optional[str] = Field(
        None,
        validation_alias="SUPABASE_SERVICE_ROLE_KEY",
        description="Privileged key required for writing analysis logs.",
    )
    sales_records_table: str = Field(
        "sales_records", validation_alias="SUPABASE_SALES_RECORDS_TABLE"
    )
    analysis_log_table: str = Field(
        "analysis_logs", validation_alias="SUPABASE_ANALYSIS_LOG_TABLE"
    )
    context_row_limit: int = Field(500, validation_alias="CONTEXT_ROW_LIMIT")

    @property
    def read_key(self) -> Optional[str]:
        """Key for read access, preferring the least privileged one available."""
        return self.anon_key or self.service_role_key


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = _ENV_CONFIG

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    supabase: SupabaseSettings = Field(default_factory=SupabaseSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()


__all__ = [
    "AppSettings",
    "GeminiSettings",
    "SupabaseSettings",
    "get_settings",
]
