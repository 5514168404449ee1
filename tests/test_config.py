"""
Tests for settings parsing and backend selection.
"""

import pytest
from pydantic import ValidationError

from app.config import Settings


class TestDatabaseUrl:
    """Test DATABASE_URL normalization."""

    @pytest.mark.parametrize("url, expected", [
        ("postgres://u:p@db/rentals", "postgresql+asyncpg://u:p@db/rentals"),
        ("postgresql://u:p@db/rentals", "postgresql+asyncpg://u:p@db/rentals"),
        ("postgresql+asyncpg://u:p@db/rentals", "postgresql+asyncpg://u:p@db/rentals"),
        ("sqlite:///./rentals.db", "sqlite+aiosqlite:///./rentals.db"),
    ])
    def test_urls_use_async_drivers(self, url, expected):
        config = Settings(database_url=url)

        assert config.database_url == expected
        assert config.use_database is True

    @pytest.mark.parametrize("url", [None, ""])
    def test_missing_url_selects_memory_storage(self, url):
        config = Settings(database_url=url)

        assert config.database_url is None
        assert config.use_database is False
        assert config.is_sqlite is False

    def test_sqlite_detection(self):
        assert Settings(database_url="sqlite:///:memory:").is_sqlite is True


class TestSettingsValidation:
    """Test validation of the remaining settings."""

    def test_object_storage_backend_is_normalized(self):
        assert Settings(object_storage_backend="MEMORY").object_storage_backend == "memory"

    def test_unknown_object_storage_backend(self):
        with pytest.raises(ValidationError):
            Settings(object_storage_backend="s3")

    def test_unknown_environment(self):
        with pytest.raises(ValidationError):
            Settings(environment="qa")

    def test_api_prefix_trailing_slash_removed(self):
        assert Settings(api_prefix="/api/").api_prefix == "/api"

    def test_api_prefix_must_be_absolute(self):
        with pytest.raises(ValidationError):
            Settings(api_prefix="api")
