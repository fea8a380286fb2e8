"""
Configuration and settings for the Florte backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/functions/v1")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    log_level: str = Field(default="INFO")

    # Database (the hosted Postgres instance)
    database_url: Optional[str] = Field(default=None)

    # Hosted platform (auth + public storage URLs)
    supabase_url: Optional[str] = Field(default=None)
    supabase_jwt_secret: Optional[str] = Field(default=None)
    supabase_jwt_audience: str = Field(default="authenticated")

    # S3-compatible storage endpoint of the platform
    storage_endpoint: Optional[str] = Field(default=None)
    storage_region: Optional[str] = Field(default=None)
    aws_access_key_id: Optional[str] = Field(default=None)
    aws_secret_access_key: Optional[str] = Field(default=None)

    # LLM / Gemini
    gemini_api_key: Optional[str] = Field(default=None)
    gemini_chat_model: str = Field(default="gemini-2.5-flash")
    gemini_live_model: str = Field(
        default="models/gemini-2.5-flash-native-audio-preview-09-2025"
    )
    gemini_live_voice: str = Field(default="Aoede")
    gemini_live_url: str = Field(
        default=(
            "wss://generativelanguage.googleapis.com/ws/"
            "google.ai.generativelanguage.v1alpha.GenerativeService.BidiGenerateContent"
        )
    )

    # Geocoding pass-through (Nominatim)
    geocoding_base_url: str = Field(default="https://nominatim.openstreetmap.org")
    geocoding_country_codes: str = Field(default="co")
    geocoding_user_agent: str = Field(default="florte-backend/0.1")

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False, validation_alias="FLORTE_USE_IN_MEMORY_BACKENDS"
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
