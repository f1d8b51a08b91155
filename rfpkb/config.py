"""
Application Configuration

Centralized configuration management using Pydantic settings.
Loads from environment variables with fallback to .env file.
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Note: We use lru_cache on get_settings() so configuration is only
    loaded once. Tests that need different values must set the
    environment before the first import, or call get_settings.cache_clear().
    """

    # Database settings
    # Any SQLAlchemy URL works. Pool sizing only applies to server databases,
    # SQLite uses its own pool.
    DATABASE_URL: str = "sqlite:///./rfpkb.db"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 40

    # Security settings
    # SECRET_KEY is the privileged service key. It signs session tokens and
    # must never be sent to a client.
    SECRET_KEY: str = "dev-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Public URL advertised to clients (the browser-facing backend URL)
    PUBLIC_API_URL: str = "http://localhost:8000"

    # Object storage for uploaded documents
    STORAGE_ROOT: str = "./storage"
    STORAGE_BUCKET: str = "documents"
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # Application settings
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures we only instantiate settings once.
    """
    return Settings()
