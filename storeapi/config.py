"""
Configuration management using Pydantic Settings.
Challenge: Centralized config, env validation, type safety.
Design: Single source of truth for all environment variables. The MongoDB
connection string and database name have no defaults, so a missing value
fails at startup instead of at the first request.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment. Validates at startup."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Store API"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    # Sessions (signed cookie)
    secret_key: str = "change-me-in-production"
    session_cookie: str = "storeapi_session"
    session_max_age: int = 8 * 60 * 60

    # Document store (MongoDB)
    mongodb_uri: str
    db_name: str
    mongo_max_pool_size: int = 10
    mongo_server_selection_timeout_ms: int = 5000
    mongo_socket_timeout_ms: int = 45000


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance. Avoids re-reading env on every request."""
    return Settings()
