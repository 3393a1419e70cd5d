"""
Configuration management using Pydantic Settings.
Design: Single source of truth for environment variables (database parts, listener, hashing, tokens).
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings loaded from environment. Validates at startup."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "houseback"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: list[str] = ["*"]

    # Database (PostgreSQL). DATABASE_URL wins over the individual parts.
    database_url: str | None = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "houseback"
    db_ssl: bool = False
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_timeout: float = 30.0
    db_connect_timeout: float = 10.0
    db_command_timeout: float = 30.0
    db_check_on_startup: bool = True

    # Password hashing work factor
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # JWT issued at signin
    secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 30

    @property
    def sqlalchemy_database_url(self) -> str:
        """Async SQLAlchemy URL, built from the DB_* parts when DATABASE_URL is not set."""
        if self.database_url:
            if self.database_url.startswith("postgres://"):
                return "postgresql+asyncpg://" + self.database_url[len("postgres://"):]
            if self.database_url.startswith("postgresql://"):
                return "postgresql+asyncpg://" + self.database_url[len("postgresql://"):]
            return self.database_url
        url = URL.create(
            "postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)

    @property
    def uses_asyncpg(self) -> bool:
        return self.sqlalchemy_database_url.startswith("postgresql+asyncpg")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance. Avoids re-reading env on every request."""
    return Settings()
