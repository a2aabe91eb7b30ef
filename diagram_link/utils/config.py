"""Application configuration."""
from __future__ import annotations

from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from .env and environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    viewer_base_url: str = "https://mermaid.live/edit#base64:"
    mermaid_theme: str = "default"
    shortener_enabled: bool = True
    shortener_url: str = Field(
        default="https://tinyurl.com/api-create.php",
        validation_alias=AliasChoices("SHORTENER_URL", "TINYURL_API_URL"),
    )
    shortener_timeout: float = 5.0
    cors_allow_origins: List[str] = ["*"]
    log_level: str = "INFO"


settings = Settings()
