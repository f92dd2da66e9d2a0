"""Application settings and configuration."""

from decimal import Decimal
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory based on platform."""
    return Path.home() / "Documents" / "Alpha Tracker Data"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Alpha Tracker"

    # Data directory (all app data lives here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    log_level: str = "INFO"
    log_to_file: bool = False

    # Paper portfolio
    initial_cash: Decimal = Decimal("100000")
    trade_validation: Literal["strict", "permissive"] = "strict"
    oversell_policy: Literal["clamp", "reject"] = "clamp"

    # Calendar used for daily asset snapshots
    timezone: str = "UTC"

    default_language: Literal["zh", "en"] = "zh"

    # Research gateway (offline stub is used when no key is configured)
    openai_api_key: Optional[str] = None
    research_model: str = "gpt-4.1-mini"
    research_search_tool: str = "web_search"
    gateway_timeout_seconds: float = 300.0

    market_refresh_hours: int = 4

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "alpha_tracker.db"
        return f"sqlite:///{db_path}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
