"""Configuration management for the section extraction service.

This module provides centralized configuration using pydantic-settings,
loading values from environment variables with sensible defaults.

Example:
    >>> from src.api.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.default_gap_n_dt)
    2.0
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Environment variables use uppercase names matching the attribute names.

    Attributes:
        app_name: Name of the application for OpenAPI docs.
        app_version: API version string.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        default_gap_n_dt: Gap threshold (in sample periods) used when a
            request does not set one.
        section_description_template: Template for section group
            descriptions; ``{name}`` is replaced by the label.
        skip_empty_labels: Whether blank labels act as breaks instead of
            forming their own sections.
        max_samples: Maximum number of samples accepted per request.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = "Stimulus Section Service"
    app_version: str = "1.0.0"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Section defaults
    default_gap_n_dt: float = 2.0
    section_description_template: str = 'Section demarked by "{name}".'
    skip_empty_labels: bool = False

    # Input limits
    max_samples: int = 5_000_000


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance with values from environment.
    """
    return Settings()
