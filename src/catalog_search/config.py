"""Application configuration and settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Application
    app_name: str = "Catalog Search API"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False

    # API
    api_v1_prefix: str = "/api/v1"

    # CORS
    cors_origins: list[str] = ["*"]
    cors_credentials: bool = True
    cors_methods: list[str] = ["GET"]
    cors_headers: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"

    # Search engine
    search_endpoint: str = "http://localhost:9200"
    search_index: str = "catalog"
    search_timeout: float = 10.0  # Seconds

    # Document repository (read-only)
    repository_endpoint: str = "http://localhost:5984"
    repository_database: str = "catalog"
    repository_timeout: float = 10.0  # Seconds


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
