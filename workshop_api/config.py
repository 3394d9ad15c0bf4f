"""
Configuration and settings for the workshop API.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ADC = "ADC"
DEFAULT_DATABASE = "(default)"
DEFAULT_ADMIN_PASSWORD = "admin123"
DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://localhost:5173")


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    # Later files win, so the working directory's .env overrides the ones
    # found higher up the tree.
    model_config = SettingsConfigDict(
        env_file=("../../.env", "../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    api_prefix: str = Field(default="/api")

    # Server (PORT, HOST)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)
    log_level: str = Field(default="INFO")

    # Firestore (FIREBASE_PROJECT_ID, FIREBASE_SERVICE_ACCOUNT_PATH, ...)
    firebase_project_id: Optional[str] = Field(default=None)
    firebase_service_account_path: Optional[str] = Field(default=None)
    firestore_database_id: Optional[str] = Field(default=None)
    firestore_subcollection_id: str = Field(default="workshop_attendees")

    # Set by Cloud Run on every revision.
    k_service: Optional[str] = Field(default=None)

    # Admin login (ADMIN_PASSWORD)
    admin_password: str = Field(default=DEFAULT_ADMIN_PASSWORD)

    # Front-end bundle; served only when the directory exists.
    static_dir: str = Field(default="./static")

    cors_origins: tuple[str, ...] = Field(default=DEFAULT_CORS_ORIGINS)

    # Development toggles (WORKSHOP_USE_IN_MEMORY_BACKENDS)
    use_in_memory_backends: bool = Field(
        default=False, validation_alias="WORKSHOP_USE_IN_MEMORY_BACKENDS"
    )

    @property
    def credentials_source(self) -> str:
        """Service account file path, or ``ADC`` for ambient credentials."""
        path = (self.firebase_service_account_path or "").strip()
        if not path or path == ADC:
            return ADC
        return path

    @property
    def database_id(self) -> Optional[str]:
        """Named database, or None to use the project's default database."""
        value = (self.firestore_database_id or "").strip()
        if not value or value == DEFAULT_DATABASE:
            return None
        return value

    @property
    def uses_default_admin_password(self) -> bool:
        return self.admin_password == DEFAULT_ADMIN_PASSWORD


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
