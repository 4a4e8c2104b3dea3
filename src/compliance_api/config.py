"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_DATABASE_SCHEMES = ("postgresql://", "postgres://", "sqlite://", "sqlite+aiosqlite://")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Compliance Records API"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Database (required - no default)
    database_url: str = Field(
        description="PostgreSQL connection URL. Must be set via environment variable."
    )
    database_pool_size: int = 5
    database_max_overflow: int = 10
    # Per-statement timeout; a timeout is surfaced to the caller and never retried
    database_command_timeout_seconds: float = 10.0

    # Compliance rules
    expiring_soon_days: int = Field(default=30, ge=0)
    default_expiry_window_days: int = Field(default=30, ge=0)
    max_expiry_window_days: int = Field(default=365, ge=1)

    # CORS settings
    cors_origins: str = "http://localhost:3000"  # Comma-separated list

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings for deployment requirements."""
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG mode cannot be enabled in production environment. "
                "This would expose API documentation and detailed error messages."
            )

        url = self.database_url
        if not url.startswith(SUPPORTED_DATABASE_SCHEMES):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL starting with 'postgresql://' "
                "or 'postgres://' (SQLite is accepted for local development and tests)"
            )

        # SQLite has no row locks; the primary contact invariant needs them in production
        if self.environment == "production" and url.startswith("sqlite"):
            raise ValueError("SQLite cannot be used in production environment")

        if self.default_expiry_window_days > self.max_expiry_window_days:
            raise ValueError(
                "DEFAULT_EXPIRY_WINDOW_DAYS cannot exceed MAX_EXPIRY_WINDOW_DAYS"
            )

        return self

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured store is SQLite."""
        return self.database_url.startswith("sqlite")

    @property
    def async_database_url(self) -> str:
        """Get async database URL for SQLAlchemy.

        PostgreSQL URLs are converted to asyncpg, translating sslmode to ssl:
        - sslmode=disable -> ssl=disable
        - sslmode=require -> ssl=require
        SQLite URLs are converted to aiosqlite.
        """
        url = self.database_url
        if self.is_sqlite:
            if url.startswith("sqlite://"):
                url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
            return url
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        url = url.replace("sslmode=", "ssl=")
        return url

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
