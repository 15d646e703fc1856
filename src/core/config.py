"""
Core configuration module for the Departure Timetable Optimizer.

This module manages all application settings using Pydantic Settings,
providing type-safe configuration with environment variable support.
"""

from typing import List, Optional, Dict, Any
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via environment variables of the same
    name (case-insensitive), or from a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application settings
    app_name: str = "Departure Timetable Optimizer"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # API settings
    api_v1_prefix: str = "/api/v1"
    api_docs_url: str = "/api/docs"
    api_redoc_url: str = "/api/redoc"
    api_openapi_url: str = "/api/openapi.json"

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000

    # Logfire settings
    logfire_token: str = ""
    logfire_service_name: str = "timetable-api"
    logfire_environment: str = "development"

    # CORS settings, comma-separated
    cors_origins: str = "*"

    # Upload settings
    max_upload_size_mb: int = Field(default=10, ge=1)

    # Optimizer settings
    optimizer_generations: int = Field(default=10, ge=1)
    optimizer_population_size: int = Field(default=30, ge=2)
    optimizer_random_seed: Optional[int] = None
    optimizer_parallel: bool = False

    @field_validator("environment", "logfire_environment")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        """Environments are compared lower-case."""
        return v.strip().lower()

    def get_cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def get_logfire_settings(self) -> Dict[str, Any]:
        """Get Logfire configuration."""
        return {
            "token": self.logfire_token or None,
            "service_name": self.logfire_service_name,
            "environment": self.logfire_environment,
            "send_to_logfire": "if-token-present",
        }

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


# Create global settings instance
settings = Settings()
