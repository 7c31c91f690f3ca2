"""
Configuration Settings

Centralized configuration management using Pydantic and environment variables.
"""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Values can be overridden in a .env file or the process environment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Proximity search
    proximity_radius_meters: float = 5000.0

    # Heatmap settings
    heatmap_catchment_radius_meters: float = 10000.0
    heatmap_grid_divisions: int = 50

    # Feature conversion
    fallback_half_width_degrees: float = 0.0001  # ~11 m at the equator

    # Geometry validation
    acreage_tolerance: float = 0.1

    # Batch execution
    max_workers: Optional[int] = None
    batch_chunk_size: int = 64

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "json"

    # Application settings
    environment: str = "development"
    debug: bool = False


# Singleton instance
settings = Settings()
