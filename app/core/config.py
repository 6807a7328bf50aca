"""
Configuration management for the saved searches service.

This module provides centralized configuration management supporting:
- Environment variables and .env files
- PostgreSQL (production) or any async SQLAlchemy URL (local/testing)
- JWT verification settings for the auth gate
"""

from functools import lru_cache
from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog

logger = structlog.get_logger(__name__)


class Settings(BaseSettings):
    """
    Main application settings with smart defaults for local development.
    """

    # Environment Detection
    ENVIRONMENT: str = Field(
        default="local",
        description="Environment (local/development/staging/production)"
    )
    DEBUG: bool = Field(
        default=False,
        description="Debug mode"
    )

    # Core Application Settings
    APP_NAME: str = Field(
        default="Saved Searches API",
        description="Application name"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application version"
    )

    # Security (Required)
    SECRET_KEY: str = Field(
        ...,
        description="JWT verification secret key (min 32 chars)"
    )
    JWT_ALGORITHM: str = Field(
        default="HS256",
        description="JWT algorithm"
    )
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=15,
        description="Lifetime of tokens minted by the local token helper"
    )

    # Server Configuration
    HOST: str = Field(
        default="0.0.0.0",
        description="Server host"
    )
    PORT: int = Field(
        default=8000,
        description="Server port"
    )

    # CORS Configuration
    CORS_ORIGINS: str = Field(
        default="*",
        description="Comma-separated CORS origins"
    )

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )
    LOG_FORMAT: str = Field(
        default="console",
        description="Log format (json/console)"
    )

    # Database Configuration
    DATABASE_URL: Optional[str] = Field(
        default=None,
        description="Full async SQLAlchemy URL; overrides the POSTGRES_* settings"
    )
    POSTGRES_URL: Optional[str] = Field(
        default=None,
        description="PostgreSQL connection URL"
    )
    POSTGRES_HOST: str = Field(
        default="localhost",
        description="PostgreSQL host"
    )
    POSTGRES_PORT: int = Field(
        default=5432,
        description="PostgreSQL port"
    )
    POSTGRES_USER: str = Field(
        default="saved_search_user",
        description="PostgreSQL user"
    )
    POSTGRES_PASSWORD: str = Field(
        default="saved_search_password",
        description="PostgreSQL password"
    )
    POSTGRES_DB: str = Field(
        default="saved_searches",
        description="PostgreSQL database name"
    )
    DATABASE_ECHO: bool = Field(
        default=False,
        description="Echo SQL statements to the log"
    )
    DATABASE_POOL_SIZE: int = Field(
        default=10,
        description="Connection pool size (ignored for SQLite)"
    )
    DATABASE_MAX_OVERFLOW: int = Field(
        default=20,
        description="Connection pool overflow (ignored for SQLite)"
    )
    DATABASE_CREATE_TABLES: bool = Field(
        default=True,
        description="Create tables from model metadata on startup"
    )

    # Request handling
    REQUEST_TIMEOUT: Optional[float] = Field(
        default=30.0,
        description="Per-request store timeout in seconds (None disables)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator('SECRET_KEY')
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """Validate that secret key is secure enough."""
        if len(v) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters long")
        return v

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate and normalize environment name."""
        v = v.lower()
        if v not in ('local', 'development', 'staging', 'production'):
            logger.warning(f"Unknown environment: {v}, defaulting to 'local'")
            return 'local'
        return v

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == 'production'

    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == 'local'

    def get_cors_origins(self) -> List[str]:
        """Get CORS origins as a list."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    def get_postgres_url(self) -> str:
        """Get PostgreSQL connection URL."""
        if self.POSTGRES_URL:
            return self.POSTGRES_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    def get_database_url(self) -> str:
        """
        Get the async SQLAlchemy database URL.

        Converts plain postgres URLs to the asyncpg driver; any explicit
        DATABASE_URL is used as-is.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL

        url = self.get_postgres_url()
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        return url

    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.get_database_url().startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings.

    Loads settings from environment variables and .env file and returns
    a validated Settings instance.
    """
    settings = Settings()

    logger.info(
        "Settings loaded",
        environment=settings.ENVIRONMENT,
        debug=settings.DEBUG,
        sqlite=settings.is_sqlite(),
    )

    return settings
