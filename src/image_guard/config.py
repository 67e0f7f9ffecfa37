"""Configuration management for Image Guard."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class S3Settings(BaseSettings):
    """S3/MinIO configuration."""

    model_config = SettingsConfigDict(env_prefix="S3_")

    endpoint_url: str | None = None  # None for AWS S3, set for MinIO
    access_key_id: str = ""
    secret_access_key: str = ""
    bucket_name: str = "content-images"
    region: str = "us-east-1"

    # Base for public object URLs; derived from endpoint/bucket when empty
    public_base_url: str = ""


class ClientSettings(BaseSettings):
    """Upload client configuration."""

    model_config = SettingsConfigDict(env_prefix="CLIENT_")

    validation_url: str = "http://localhost:8000/api/v1/validate-image"
    request_timeout: float = 10.0  # seconds

    # What to do when the validation service cannot be reached.
    # "closed" aborts the upload, "open" falls back to the client-side check only.
    failure_policy: Literal["closed", "open"] = "closed"

    upload_prefix: str = "uploads"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "Image Guard"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # API settings
    api_prefix: str = "/api/v1"

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "console"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Sub-configs
    s3: S3Settings = Field(default_factory=S3Settings)
    client: ClientSettings = Field(default_factory=ClientSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
