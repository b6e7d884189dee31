# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Configuration management for the GCP Resource Inventory Server.

This module handles loading and validating configuration from environment
variables with sensible defaults. The settings object is built once at
startup and handed to the service container and the HTTP handlers; it is
read-only for the life of the process.
"""

from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for local development.
    In production, these should be set via environment variables
    or a .env file.
    """

    # Server Configuration
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to",
        validation_alias=AliasChoices("INVENTORY_SERVER_HOST", "HOST"),
    )
    port: int = Field(
        default=8080,
        description="Port to run the server on",
        validation_alias=AliasChoices("INVENTORY_SERVER_PORT", "PORT"),
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        validation_alias="LOG_LEVEL",
    )
    environment: str = Field(
        default="development",
        description="Environment name (development, staging, production)",
        validation_alias=AliasChoices("ENVIRONMENT", "ENV"),
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
        validation_alias="DEBUG",
    )

    # GCP Configuration
    project_id: str = Field(
        default="interns-test-2025",
        description="GCP project whose zones are inventoried",
        validation_alias=AliasChoices("GCP_PROJECT_ID", "GOOGLE_CLOUD_PROJECT"),
    )
    credentials_file: Optional[str] = Field(
        default="application_default_credentials.json",
        description="Credentials JSON file (falls back to ADC when missing)",
        validation_alias=AliasChoices("GCP_CREDENTIALS_FILE", "GOOGLE_APPLICATION_CREDENTIALS"),
    )

    # Single-resource deployment mode
    resource_id: Optional[str] = Field(
        default=None,
        description=(
            "Pin the single-resource lookup to this resource name. When set, "
            "/api/resources answers with that resource instead of a listing."
        ),
        validation_alias="RESOURCE_ID",
    )

    # Fan-out Configuration
    max_concurrent_zones: int = Field(
        default=32,
        ge=1,
        description="Maximum zones probed in parallel per request",
        validation_alias="MAX_CONCURRENT_ZONES",
    )
    request_deadline_seconds: float = Field(
        default=0,
        ge=0,
        description="Per-request fan-out deadline in seconds (0 disables it)",
        validation_alias="REQUEST_DEADLINE_SECONDS",
    )
    api_call_timeout_seconds: float = Field(
        default=30,
        gt=0,
        description="Timeout for a single Compute Engine API call",
        validation_alias="API_CALL_TIMEOUT_SECONDS",
    )

    # CORS Configuration
    cors_allowed_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins, or *",
        validation_alias="CORS_ALLOWED_ORIGINS",
    )

    # Cloud Logging Configuration
    cloud_logging_enabled: bool = Field(
        default=False,
        description="Ship application logs to Google Cloud Logging",
        validation_alias="CLOUD_LOGGING_ENABLED",
    )
    cloud_logging_log_name: str = Field(
        default="gcp-resource-inventory",
        description="Cloud Logging log name",
        validation_alias="CLOUD_LOGGING_LOG_NAME",
    )

    model_config = SettingsConfigDict(
        env_prefix="",  # No prefix for environment variables
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    @field_validator("resource_id", "credentials_file")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @property
    def pinned_mode(self) -> bool:
        """True when the server is bound to a single resource id."""
        return self.resource_id is not None


def get_settings() -> Settings:
    """
    Get application settings.

    Loads settings from environment variables and .env file.

    Returns:
        Settings instance with all configuration values
    """
    return Settings()


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def settings() -> Settings:
    """
    Get the global settings instance.

    Creates the settings instance on first call and caches it.

    Returns:
        Global Settings instance
    """
    global _settings
    if _settings is None:
        _settings = get_settings()
    return _settings
