"""
Centralized configuration for the Stamp Card backend.

All settings are loaded from environment variables with sensible defaults.
Integration-specific settings are namespaced (e.g., FIREBASE_*, FORMSG_*).
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Stamp Card API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Firebase / Firestore
    firebase_service_account: str = ""  # JSON key as a string
    google_application_credentials: str = ""  # path to a JSON key file
    firebase_project_id: Optional[str] = None

    # FormSG webhook
    formsg_webhook_secret: str = ""
    formsg_form_secret_key: str = ""

    # Public URL of the frontend (for redirects)
    domain: str = "http://localhost:3000"

    # Feature Flags
    enable_admin_summary: bool = True


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
