"""
Configuration management using Pydantic settings.
Selects the storage backend from DATABASE_URL and configures the object store,
uploads and API surface from environment variables.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings
from typing import Optional, List
from functools import lru_cache


OBJECT_STORAGE_BACKENDS = ("local", "database", "memory")


class Settings(BaseSettings):
    """Application settings read from the environment and an optional .env file."""

    # Application configuration
    app_name: str = "Rental Listings API"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False

    # Relational backend; the in-memory store is used when unset
    database_url: Optional[str] = None
    db_echo: bool = False
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_recycle: int = 3600

    # Seed demo locations, properties and images into an empty store on startup
    seed_demo_data: bool = True

    # Object storage configuration
    object_storage_backend: str = "local"
    object_storage_dir: str = "./object_storage"

    # Legacy uploads served under /uploads
    upload_dir: str = "./uploads"
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    allowed_file_types: List[str] = ["image/jpeg", "image/png", "image/gif", "image/webp"]

    # API configuration
    api_prefix: str = "/api"
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5000", "http://localhost:8000"]

    # Pagination defaults
    default_page_size: int = 20
    max_page_size: int = 100

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("database_url", mode="before")
    @classmethod
    def validate_database_url(cls, v):
        """Normalize database URLs onto the async drivers."""
        if not v:
            return None

        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql+asyncpg://", 1)
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        if v.startswith("sqlite://"):
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @field_validator("object_storage_backend")
    @classmethod
    def validate_object_storage_backend(cls, v):
        """Validate the object storage backend name."""
        v = v.lower()
        if v not in OBJECT_STORAGE_BACKENDS:
            raise ValueError(f"Object storage backend must be one of: {list(OBJECT_STORAGE_BACKENDS)}")
        return v

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, v):
        """API prefix must be an absolute path without a trailing slash."""
        if not v.startswith("/"):
            raise ValueError("API prefix must start with '/'")
        return v.rstrip("/")

    @property
    def use_database(self) -> bool:
        """Whether the relational backend is configured."""
        return bool(self.database_url)

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return bool(self.database_url) and self.database_url.startswith("sqlite")

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings throughout the app lifecycle.
    """
    return Settings()


# Global settings instance
settings = get_settings()
