"""Tests for application settings."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from gbif_names.config import DEFAULT_BASE_URL, Settings, get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Test Settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GBIF_NAMES_GBIF_BASE_URL", raising=False)
        monkeypatch.delenv("GBIF_NAMES_TIMEOUT", raising=False)
        settings = Settings(_env_file=None)
        assert settings.gbif_base_url == DEFAULT_BASE_URL
        assert settings.timeout == 30.0
        assert settings.app_name == "gbif-names"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GBIF_NAMES_GBIF_BASE_URL", "http://localhost:8080/v1")
        monkeypatch.setenv("GBIF_NAMES_TIMEOUT", "5")
        settings = Settings(_env_file=None)
        assert settings.gbif_base_url == "http://localhost:8080/v1"
        assert settings.timeout == 5.0

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            Settings(_env_file=None, timeout=0)


class TestGetSettings:
    """Test the cached accessor."""

    def test_cached(self) -> None:
        assert get_settings() is get_settings()
