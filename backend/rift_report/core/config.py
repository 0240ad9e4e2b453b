"""Configuration settings for the Rift Report service."""

from __future__ import annotations

from typing import List

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Riot API Configuration
    riot_api_key: str = Field(default="")
    riot_region: str = Field(default="americas")
    riot_platform: str = Field(default="na1")

    request_timeout_ms: int = Field(
        default=8000, gt=0, description="Per-request deadline for upstream calls"
    )
    max_rate_limit_retries: int = Field(
        default=3, ge=0, description="Retries granted to a request answered with 429"
    )

    # Match ingestion
    match_cache_size: int = Field(default=600, gt=0)
    lane_phase_limit: int = Field(
        default=5,
        ge=0,
        le=20,
        description="Number of history rows that receive timeline lane-phase stats",
    )

    # Application Configuration
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # CORS Configuration
    cors_origins: str = Field(default="http://localhost:3000,http://127.0.0.1:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [
            origin.strip() for origin in self.cors_origins.split(",") if origin.strip()
        ]

    @field_validator("riot_region", "riot_platform")
    @classmethod
    def lowercase_routing(cls, v: str) -> str:
        """Routing values are lower-case in every Riot host name."""
        return v.strip().lower()

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Create a global settings instance lazily
settings: Settings | None = None


def get_global_settings() -> Settings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
