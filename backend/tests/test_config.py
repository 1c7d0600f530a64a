"""Settings — tests for environment-driven configuration.

Tests cover:
    - postgresql:// URLs are rewritten for asyncpg; other URLs pass through
    - REQUIRE_SLUG and PUBLIC_BASE_URL are read from the environment
    - get_settings() returns one cached instance
"""

import pytest

from cardsmith.config import Settings, get_settings


@pytest.mark.parametrize("url,expected", [
    ("postgresql://u:p@host/db", "postgresql+asyncpg://u:p@host/db"),
    ("postgresql+asyncpg://u:p@host/db", "postgresql+asyncpg://u:p@host/db"),
    ("sqlite+aiosqlite:///cards.db", "sqlite+aiosqlite:///cards.db"),
])
def test_database_url_normalized(url, expected):
    assert Settings(database_url=url).database_url == expected


def test_card_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("REQUIRE_SLUG", "false")
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://cards.example.com/")
    settings = Settings()
    assert settings.require_slug is False
    assert settings.public_base_url == "https://cards.example.com"


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
