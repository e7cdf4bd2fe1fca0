"""Application configuration via environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "Packwise"
    debug: bool = False
    log_dir: Path = Path.home() / ".logs" / "packwise"

    # Server
    host: str = "0.0.0.0"  # Bind to all interfaces for external access
    port: int = 8000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Database
    database_url: str = "sqlite:///./packwise.db"

    # Persistence
    autosave_interval_seconds: int = 5
    seed_builtins: bool = True  # Install built-in conditions on an empty catalog


settings = Settings()
