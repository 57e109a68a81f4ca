"""Configuration settings for the Arena stats application."""

from __future__ import annotations

from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Riot API Configuration
    riot_api_key: str = Field(default="dev_api_key")
    riot_region: str = Field(default="europe")
    riot_platform: str = Field(default="euw1")
    request_timeout: float = Field(default=30.0, gt=0)

    # Arena match history
    arena_queue_id: int = Field(default=1700)
    arena_start_time: int = Field(
        default=1709247600,
        description="Epoch seconds of the oldest match considered",
    )
    match_page_size: int = Field(default=100, ge=1, le=100)

    # Shared upstream budget (token bucket)
    rate_limit_reservoir: int = Field(default=100, ge=1)
    rate_limit_refresh_amount: int = Field(default=100, ge=1)
    rate_limit_refresh_interval: float = Field(default=120.0, gt=0)
    rate_limit_max_concurrent: int = Field(default=1, ge=1)
    rate_limit_min_time: float = Field(default=0.05, ge=0)
    rate_limit_default_retry_after: float = Field(default=1.0, ge=0)

    # Static champion reference
    data_dragon_version: str = Field(default="14.10.1")
    data_dragon_locale: str = Field(default="en_US")

    # Database Configuration
    postgres_db: str = Field(default="riot_games")
    postgres_user: str = Field(default="riot_api_user")
    postgres_password: str = Field(default="dev_password")
    postgres_host: str = Field(default="postgres")
    postgres_port: int = Field(default=5432)
    database_url_override: Optional[str] = Field(default=None)

    @property
    def database_url(self) -> str:
        """Construct async database URL from components."""
        if self.database_url_override:
            return self.database_url_override
        return f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"

    # Application Configuration
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # HTTP server
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=3000, ge=1, le=65535)

    # CORS Configuration
    cors_origins: str = Field(default="http://localhost:3000,http://127.0.0.1:3000")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise the log level and reject unknown names."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [
            origin.strip() for origin in self.cors_origins.split(",") if origin.strip()
        ]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix for environment variables
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance."""
    # Pydantic v2 will automatically load from environment variables
    return Settings()


# Create a global settings instance lazily
settings: Settings | None = None


def get_global_settings() -> Settings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
