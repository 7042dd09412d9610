"""
Application configuration using Pydantic settings.
"""
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Stage Table Source
    stage_table_url: Optional[str] = Field(
        default=None,
        description="Base URL of a remote phenology stage table service"
    )
    stage_table_api_key: str = Field(
        default="",
        description="API key for the remote stage table service"
    )
    stage_table_crop: Optional[str] = Field(
        default=None,
        description="Crop filter sent to the remote stage table service"
    )
    stage_table_path: Optional[str] = Field(
        default=None,
        description="Path to a JSON file holding the phenology stage table"
    )
    request_timeout: float = Field(
        default=10.0,
        description="Timeout in seconds for stage table requests"
    )

    # Retry Configuration
    max_retry_attempts: int = Field(
        default=3,
        description="Maximum number of retry attempts for stage table requests"
    )
    retry_backoff_multiplier: int = Field(
        default=1,
        description="Multiplier for exponential backoff"
    )
    retry_min_wait: int = Field(
        default=1,
        description="Minimum wait time in seconds between retries"
    )
    retry_max_wait: int = Field(
        default=5,
        description="Maximum wait time in seconds between retries"
    )

    # Decision Thresholds
    leaf_wetness_high_hours: float = Field(
        default=10.0,
        description="Leaf wetness above which disease risk is High"
    )
    leaf_wetness_moderate_hours: float = Field(
        default=5.0,
        description="Leaf wetness above which disease risk is Moderate"
    )
    spray_max_wind_speed_ms: float = Field(
        default=5.0,
        description="Wind speed above which spraying is unsafe (m/s)"
    )
    spray_min_temperature_c: float = Field(
        default=10.0,
        description="Temperature below which treatments lose efficacy (°C)"
    )
    spray_max_temperature_c: float = Field(
        default=25.0,
        description="Temperature above which spraying risks leaf scorch (°C)"
    )
    pest_trap_weekly_threshold: int = Field(
        default=5,
        description="Weekly codling moth trap count above which treatment is advised"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="Orchard Decision Engine",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
