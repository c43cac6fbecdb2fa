"""
Configuration management for the tracker service.
"""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Player whose hiscores seed the initial stats (OSRS_USERNAME)
    osrs_username: Optional[str] = None

    # Item name reference data
    item_db_path: str = "osrsreboxed-db/docs/items-complete.json"

    # Hiscores baseline fetch
    hiscores_url: str = "https://secure.runescape.com/m=hiscore_oldschool/index_lite.json"
    hiscores_timeout: float = 10.0  # seconds
    fetch_baseline: bool = True

    # Service configuration
    host: str = "0.0.0.0"
    port: int = 80
    debug: bool = False
    log_level: str = "info"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra environment variables


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


def settings_summary(settings: Settings) -> list:
    """Human-readable startup summary lines."""
    return [
        f"Host: {settings.host}:{settings.port}",
        f"Debug: {settings.debug}",
        f"Username: {settings.osrs_username or '(not set)'}",
        f"Item database: {settings.item_db_path}",
        f"Baseline fetch: {'enabled' if settings.fetch_baseline else 'disabled'}",
    ]
