"""
Settings for WebPrint.

Values come from environment variables prefixed ``WEBPRINT_`` (or a ``.env``
file). A single cached instance is shared process-wide; tests swap it with
``init_settings`` and ``reset_settings``.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(
        env_prefix="WEBPRINT_",
        env_file=".env",
        extra="ignore",
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 8110
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173"])

    # Layout readiness
    layout_poll_interval: float = Field(default=0.05, gt=0)
    layout_stable_observations: int = Field(default=2, ge=2)
    layout_max_observations: int = Field(default=40, ge=2)
    layout_timeout: float = Field(default=10.0, gt=0)

    # Rasterization
    raster_scale: float = Field(default=2.0, gt=0)
    browser_headless: bool = True
    default_page_preset: str = "letter"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the process-wide settings, creating them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def init_settings(settings: Settings) -> Settings:
    """Install an explicit settings instance."""
    global _settings
    _settings = settings
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads env."""
    global _settings
    _settings = None


__all__ = ["Settings", "get_settings", "init_settings", "reset_settings"]
