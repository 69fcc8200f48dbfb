"""Application settings with environment variable support.

Uses pydantic-settings for typed configuration validation.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Render log events as JSON")

    # Feature flags
    debug_mode: bool = Field(default=False, description="Enable debug features")
    enable_export: bool = Field(default=True, description="Enable result export")

    # Export
    export_dir: str = Field(default="results", description="Directory for exported files")

    # Presentation
    default_level: Literal["simple", "pro"] = Field(
        default="simple", description="Initial calculator level"
    )
    share_base_url: str = Field(
        default="http://localhost:8501/", description="Base URL used for share links"
    )

    model_config = {
        "env_prefix": "RENDITE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()
