# storefront/core/config.py
"""
Configuration for the storefront client, CLI and development backend.

Values come from environment variables or a `.env` file and fall back
to safe defaults for local development.
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Points at the repository root
BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """
    Settings for the storefront client, loaded with Pydantic BaseSettings.
    Secrets come from .env, everything else has a default.
    """
    # General project settings
    BASE_DIR: Path = BASE_DIR
    PROJECT_NAME: str = "Seekon Storefront"
    PROJECT_VERSION: str = "0.1.0"

    # REST backend
    API_URL: str = "http://localhost:3000"
    API_PREFIX: str = "/api"
    REQUEST_TIMEOUT: float = 10.0

    # Local session storage (bearer token)
    TOKEN_FILE: Path = Path.home() / ".seekon" / "session.json"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE_PATH: Optional[str] = None

    # Development backend
    BACKEND_HOST: str = "127.0.0.1"
    BACKEND_PORT: int = 3000
    ADMIN_EMAIL: str = "admin@seekon.com"
    ADMIN_PASSWORD: str = "admin1234"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def api_base_url(self) -> str:
        """Base URL every API path is resolved against."""
        return f"{self.API_URL.rstrip('/')}{self.API_PREFIX}"


# Global settings instance
settings = Settings()
