"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App settings
    app_name: str = "OpenMusic API"
    debug: bool = False
    secret_key: str  # Required, no default

    # Database
    database_url: str = "sqlite+aiosqlite:///./open_music.db"

    # Redis cache
    redis_url: str = "redis://localhost:6379/0"
    cache_expire_seconds: int = 1800

    # JWT Authentication
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 30

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str, info) -> str:
        """Validate that secret_key is secure."""
        if not v:
            raise ValueError("SECRET_KEY is required")

        # In production mode, ensure secret key is strong
        debug = info.data.get("debug", False)
        if not debug:
            if len(v) < 32:
                raise ValueError("SECRET_KEY must be at least 32 characters in production mode")
            if v in ("change-me-in-production", "secret", "password", "changeme"):
                raise ValueError("SECRET_KEY must not be a common weak value")

        return v

    @field_validator("cache_expire_seconds")
    @classmethod
    def validate_cache_expire_seconds(cls, v: int) -> int:
        """Validate that the cache expiry is a positive number of seconds."""
        if v <= 0:
            raise ValueError("CACHE_EXPIRE_SECONDS must be a positive number of seconds")
        return v

    def validate_runtime_config(self) -> list[str]:
        """Validate runtime configuration and return warnings."""
        warnings = []

        if self.database_url.startswith("sqlite"):
            warnings.append("DATABASE_URL points at SQLite - use PostgreSQL in production")

        if self.redis_url.startswith("redis://localhost"):
            warnings.append("REDIS_URL points at localhost - like counts are cached per host")

        # Warn about debug mode in production
        if self.debug:
            warnings.append("DEBUG mode is enabled - should be disabled in production")

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
