"""
Configuration management for the Espresso API.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Espresso API")
    debug: bool = Field(default=False)
    environment: str = Field(default="development")

    # API
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=3001)
    api_version: str = Field(default="v2")

    # Firebase / GCP
    firebase_project_id: str = Field(default="headbits-tha")
    firebase_storage_bucket: str = Field(default="headbits-tha.appspot.com")

    # Backends
    document_store: Literal["firestore", "sql"] = Field(
        default="firestore",
        description="Document store backend. 'sql' keeps documents in a local SQLAlchemy table.",
    )
    database_url: str = Field(default="sqlite:///./espresso.db")
    artifact_oracle: Literal["fixture", "bucket"] = Field(
        default="fixture",
        description="Where deployment artifact ids are looked up.",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_format: Literal["json", "console"] = Field(default="json")

    @property
    def api_prefix(self) -> str:
        return f"/api/{self.api_version}"


@lru_cache
def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
