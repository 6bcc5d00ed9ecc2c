"""
Configuration module for the Health Chat Service.
Uses Pydantic BaseSettings for validation - app fails fast on bad config.
"""
import logging
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("memory", "sqlite")


class Settings(BaseSettings):
    """
    Application settings read from environment variables and `.env`.

    Every field has a default, so the service starts with no configuration
    at all using the in-memory stores.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Configuration
    health_chat_host: str = Field(default="0.0.0.0", description="API host")
    health_chat_port: int = Field(default=5000, description="API port")
    health_chat_reload: bool = Field(default=False, description="Enable hot reload")
    health_chat_cors_origins: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)",
    )

    # Storage Configuration
    health_chat_storage_backend: str = Field(
        default="memory",
        description="Store implementation: 'memory' (transient) or 'sqlite' (durable)",
    )
    health_chat_db_dir: str = Field(default="data", description="Database directory")
    health_chat_db_file: str = Field(default="health_chat.db", description="Database filename")
    health_chat_db_busy_timeout: int = Field(default=5000, description="SQLite busy timeout in milliseconds")

    # Chat Configuration
    health_chat_history_limit: int = Field(
        default=10,
        ge=1,
        description="Number of recent turns returned with each chat reply",
    )

    @field_validator("health_chat_storage_backend")
    @classmethod
    def validate_storage_backend(cls, value: str) -> str:
        """Reject unknown backends at startup rather than on first request."""
        backend = value.strip().lower()
        if backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unknown storage backend '{value}'. Expected one of: {', '.join(STORAGE_BACKENDS)}"
            )
        return backend

    @property
    def database_path(self) -> str:
        """Get the full database path."""
        return str(Path(self.health_chat_db_dir) / self.health_chat_db_file)

    @property
    def cors_origins_list(self) -> List[str]:
        """Get the allowed CORS origins as a list."""
        return [o.strip() for o in self.health_chat_cors_origins.split(",") if o.strip()]


settings = Settings()

API_HOST = settings.health_chat_host
API_PORT = settings.health_chat_port
API_RELOAD = settings.health_chat_reload

DATABASE_PATH = settings.database_path
DATABASE_BUSY_TIMEOUT = settings.health_chat_db_busy_timeout
