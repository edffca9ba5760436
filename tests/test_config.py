"""Tests for configuration."""

from catalog_search.config import Settings, get_settings


def test_settings_defaults():
    """Test that settings have correct default values."""
    settings = Settings()
    assert settings.app_name == "Catalog Search API"
    assert settings.app_version == "0.1.0"
    assert settings.environment in ["development", "staging", "production"]
    assert settings.api_v1_prefix == "/api/v1"


def test_get_settings_returns_singleton():
    """Test that get_settings returns the same instance."""
    assert get_settings() is get_settings()


def test_settings_from_environment(monkeypatch):
    """Backend endpoints are read from the environment."""
    monkeypatch.setenv("SEARCH_ENDPOINT", "http://es.internal:9200")
    monkeypatch.setenv("SEARCH_INDEX", "catalog-v2")
    monkeypatch.setenv("REPOSITORY_TIMEOUT", "2.5")

    settings = Settings()

    assert settings.search_endpoint == "http://es.internal:9200"
    assert settings.search_index == "catalog-v2"
    assert settings.repository_timeout == 2.5
