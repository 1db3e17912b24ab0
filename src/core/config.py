"""Application settings loaded from the environment.

Every option has a default suited to local development, so the API starts
against ``mongodb://localhost:27017`` with no configuration at all.
Environment variables override the defaults and a ``.env`` file in the
working directory is read as well. Nested groups use ``__`` as the
delimiter, for example ``DATABASE_CONFIG__MONGODB_URL`` or
``CORS_CONFIG__FRONTEND_URL``.

Production deployments switch tracing to OTLP with 10% sampling unless
told otherwise.
"""

import os
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogConfig(BaseModel):
    """Loguru output and request logging options."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_formatter_type: Literal["console", "json"] | None = Field(
        default=None,
        description="Log output formatter. Auto-detected if not specified.",
    )
    excluded_paths: list[str] = Field(
        default_factory=lambda: ["/health"],
        description="Paths to exclude from request logging",
    )
    slow_request_threshold_ms: int = Field(
        default=1000,
        gt=0,
        description="Threshold for slow request warnings (milliseconds)",
    )
    sensitive_fields: list[str] = Field(
        default_factory=lambda: [
            "password",
            "token",
            "secret",
            "api_key",
            "authorization",
        ],
        description="Field names to redact",
    )


class ObservabilityConfig(BaseModel):
    """Tracing export and sampling."""

    enable_tracing: bool = Field(
        default=True,
        description="Enable OpenTelemetry tracing",
    )
    exporter_type: Literal["console", "otlp", "none"] = Field(
        default="console",
        description="console logs spans, otlp ships them, none drops them",
    )
    exporter_endpoint: str | None = Field(
        default=None,
        description="OTLP exporter endpoint",
    )
    trace_sample_rate: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Trace sampling rate (0.0 to 1.0)",
    )

    @field_validator("exporter_endpoint", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for nullable fields."""
        if v == "":
            return None
        return v


class DatabaseConfig(BaseModel):
    """Document store (MongoDB) connection settings."""

    mongodb_url: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string (mongodb:// or mongodb+srv://)",
    )
    database_name: str = Field(
        default="cosmibit",
        min_length=1,
        description="Name of the database holding the content collections",
    )
    max_pool_size: int = Field(
        default=10,
        ge=1,
        le=500,
        description="Maximum number of pooled connections per server",
    )
    server_selection_timeout_ms: int = Field(
        default=5000,
        gt=0,
        description="How long the driver waits to find an available server",
    )

    @field_validator("mongodb_url", mode="after")
    @classmethod
    def validate_mongodb_url(cls, v: str) -> str:
        """Validate the connection string uses a MongoDB scheme."""
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            msg = "MongoDB URL must start with mongodb:// or mongodb+srv://"
            raise ValueError(msg)
        return v


class CorsConfig(BaseModel):
    """Cross-origin policy for the single frontend origin."""

    frontend_url: str = Field(
        default="http://localhost:5173",
        description="The one origin allowed to call the API from a browser",
    )
    allowed_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        description="Methods allowed for cross-origin requests",
    )
    allow_credentials: bool = Field(
        default=True,
        description="Whether cookies and credentials may be sent cross-origin",
    )
    max_age: int = Field(
        default=3600,
        ge=0,
        description="Preflight cache lifetime in seconds",
    )

    @field_validator("frontend_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Browsers send the Origin header without a trailing slash."""
        return v.rstrip("/")


class Settings(BaseSettings):
    """Top-level settings, cached by ``get_settings``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        env_nested_delimiter="__",
    )

    # Application settings
    app_name: str = Field(default="CosmiBit", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment the application is running in",
    )
    debug: bool = Field(default=True, description="Debug mode flag")

    # API settings
    api_host: str = Field(default="127.0.0.1", description="API host")
    api_port: int = Field(default=8080, description="API port")
    api_prefix: str = Field(
        default="/api/v1", description="Common versioned root for resource routes"
    )
    docs_url: str | None = Field(default="/docs", description="Swagger UI URL")
    redoc_url: str | None = Field(default="/redoc", description="ReDoc URL")
    openapi_url: str | None = Field(
        default="/openapi.json", description="OpenAPI schema URL"
    )

    log_config: LogConfig = Field(
        default_factory=LogConfig, description="Logging configuration"
    )
    observability_config: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig, description="Observability configuration"
    )
    database_config: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Document store configuration"
    )
    cors_config: CorsConfig = Field(
        default_factory=CorsConfig, description="Cross-origin configuration"
    )

    def model_post_init(self, __context: object) -> None:
        """Post initialization to set environment-based defaults."""
        super().model_post_init(__context)

        if self.log_config.log_formatter_type is None:
            self.log_config.log_formatter_type = self._detect_formatter()

        if self.environment == "production":
            if self.observability_config.exporter_type == "console":
                self.observability_config.exporter_type = "otlp"
            if self.observability_config.trace_sample_rate == 1.0:
                self.observability_config.trace_sample_rate = 0.1

    def _detect_formatter(self) -> Literal["console", "json"]:
        """Auto-detect log formatter based on environment."""
        # Managed container platforms ingest structured stdout
        if os.getenv("K_SERVICE") or os.getenv("AWS_EXECUTION_ENV"):
            return "json"
        if self.environment == "development":
            return "console"
        return "json"

    @field_validator("docs_url", "redoc_url", "openapi_url", mode="before")
    @classmethod
    def disable_on_empty(cls, v: str | None) -> str | None:
        """An empty value turns the documentation route off."""
        return v or None

    @field_validator("api_prefix", mode="after")
    @classmethod
    def normalize_api_prefix(cls, v: str) -> str:
        """Ensure the prefix has a leading slash and no trailing slash."""
        return "/" + v.strip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
