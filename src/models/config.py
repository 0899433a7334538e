"""Configuration data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AppConfig:
    """Application configuration settings."""
    api_base_url: str = "http://localhost:8000"
    request_timeout: float | None = None  # None = wait indefinitely
    log_level: str = "INFO"
    language: str = "english"
