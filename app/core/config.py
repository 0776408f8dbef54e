"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables and .env file.
DATABASE_URL has no default: the service refuses to start without it.
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Application
    # =========================================================================
    app_name: str = "User Session Auth"
    app_version: str = "1.0.0"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    # =========================================================================
    # Server
    # =========================================================================
    host: str = "0.0.0.0"
    port: int = Field(default=3000, description="Listening port")

    # =========================================================================
    # Security
    # =========================================================================
    bcrypt_rounds: int = Field(
        default=10,
        ge=4,
        le=31,
        description="bcrypt cost factor (log2 of key expansion rounds)",
    )

    # =========================================================================
    # Database
    # =========================================================================
    database_url: str = Field(
        ...,
        description="Async SQLAlchemy URL, e.g. postgresql+asyncpg://user:pw@host/db",
    )

    db_pool_size: int = 10
    db_max_overflow: int = 20

    # Dev convenience; production schemas are managed by Alembic
    create_tables_on_startup: bool = True

    # =========================================================================
    # Redis & Celery
    # =========================================================================
    celery_broker_url: str = Field(
        default="redis://localhost:6379/0",
        description="Celery message broker URL",
    )

    celery_result_backend: str = Field(
        default="redis://localhost:6379/1",
        description="Celery result backend URL",
    )

    welcome_notifications_enabled: bool = True

    @property
    def sync_database_url(self) -> str:
        """Database URL with the async driver swapped for a sync one (Alembic)."""
        url = self.database_url
        for async_driver, sync_driver in (
            ("+asyncpg", "+psycopg2"),
            ("+aiosqlite", ""),
        ):
            url = url.replace(async_driver, sync_driver)
        return url


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience alias
settings = get_settings()
