"""
Configuration management for Contract Manager.
"""

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
    app_name: str = Field(default="Contract Manager")
    debug: bool = Field(default=False)
    environment: str = Field(default="development")

    # API
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)
    api_workers: int = Field(default=1)
    api_prefix: str = Field(default="/api")

    # Database
    database_url: str = Field(default="sqlite:///./contract_manager.db")

    # Frontend origin allowed by CORS
    frontend_url: str = Field(default="http://localhost:3000")

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(
        default="json",
        description="Renderer for structured logs: 'json' or 'console'.",
    )


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
