"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.shared import DEFAULT_TENANT, EnumEnvironment, EnumLogLevel
from src.shared.env import load_secret_file_variables  # noqa: F401


class ContextBrokerSettings(BaseSettings):
    """NGSI-LD context broker connection settings."""

    url: str = Field(
        default="http://localhost:8080",
        description="Context broker root URL",
        validation_alias=AliasChoices("BROKER_URL", "CONTEXT_BROKER_URL"),
    )
    tenant: str = Field(
        default=DEFAULT_TENANT,
        description="NGSI-LD tenant, sent as NGSILD-Tenant unless default",
    )
    timeout: float = Field(
        default=30.0, description="Per-request timeout in seconds"
    )
    page_size: int = Field(
        default=1000, description="Entities requested per query page"
    )
    max_pages: int = Field(
        default=50, description="Upper bound on pages fetched per query"
    )

    model_config = SettingsConfigDict(
        env_prefix="BROKER_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


class CacheSettings(BaseSettings):
    """Refresh cadence shared by every dataset cache."""

    success_interval_seconds: float = Field(
        default=300.0, description="Delay before the next refresh after a success"
    )
    failure_interval_seconds: float = Field(
        default=10.0, description="Delay before retrying after a failed refresh"
    )
    shutdown_timeout_seconds: float = Field(
        default=5.0, description="How long shutdown waits for each refresh loop"
    )
    autostart: bool = Field(
        default=True, description="Start the refresh loops on application startup"
    )

    model_config = SettingsConfigDict(
        env_prefix="CACHE_", case_sensitive=False, extra="ignore"
    )


class BeachSettings(BaseSettings):
    """Beach dataset settings."""

    max_wqo_distance: int = Field(
        default=1000,
        description="Radius in metres for attaching water temperatures to a beach",
    )

    model_config = SettingsConfigDict(
        env_prefix="BEACHES_", case_sensitive=False, extra="ignore"
    )


class GESettings(BaseSettings):
    """Service metadata and server settings."""

    title: str = Field(default="Open Data Gateway", description="Service title")
    description: str = Field(
        default="Open datasets cached from an NGSI-LD context broker "
        "and served as JSON, GeoJSON and CSV",
        description="Service description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("GE_GIT_COMMIT", "GIT_COMMIT"),
    )
    build_time: str = Field(
        default="unknown",
        description="Build timestamp",
        validation_alias=AliasChoices("GE_BUILD_TIME", "BUILD_TIME"),
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    host: str = Field(default="0.0.0.0", description="Interface to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="GE_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    broker: ContextBrokerSettings = Field(default_factory=ContextBrokerSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    beaches: BeachSettings = Field(default_factory=BeachSettings)
    ge: GESettings = Field(default_factory=GESettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on environment.
    """
    return AppSettings()


settings = get_settings()
