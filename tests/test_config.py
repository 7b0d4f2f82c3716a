"""Tests for client settings."""

import pytest
from pydantic import ValidationError

from tuteliq.config import DEFAULT_BASE_URL, ClientSettings, get_settings


class TestClientSettings:
    """Tests for ClientSettings loading."""

    def test_defaults(self, monkeypatch):
        """Defaults apply when no environment is set."""
        for name in ("TUTELIQ_API_KEY", "TUTELIQ_BASE_URL", "TUTELIQ_MAX_RETRIES"):
            monkeypatch.delenv(name, raising=False)

        settings = ClientSettings(_env_file=None)

        assert settings.api_key is None
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.timeout_seconds == 30.0
        assert settings.max_retries == 3
        assert settings.retry_delay_seconds == 1.0

    def test_reads_prefixed_environment(self, monkeypatch):
        """TUTELIQ_* variables populate the settings."""
        monkeypatch.setenv("TUTELIQ_API_KEY", "env-key-123456")
        monkeypatch.setenv("TUTELIQ_MAX_RETRIES", "5")
        monkeypatch.setenv("TUTELIQ_RETRY_DELAY_SECONDS", "0.5")

        settings = ClientSettings(_env_file=None)

        assert settings.api_key.get_secret_value() == "env-key-123456"
        assert settings.max_retries == 5
        assert settings.retry_delay_seconds == 0.5

    def test_api_key_is_masked(self, monkeypatch):
        """The API key is not exposed by repr."""
        monkeypatch.setenv("TUTELIQ_API_KEY", "env-key-123456")

        settings = ClientSettings(_env_file=None)

        assert "env-key-123456" not in repr(settings)

    @pytest.mark.parametrize(
        ("name", "value"),
        [
            ("TUTELIQ_MAX_RETRIES", "0"),
            ("TUTELIQ_TIMEOUT_SECONDS", "0"),
            ("TUTELIQ_RETRY_DELAY_SECONDS", "-1"),
        ],
    )
    def test_rejects_out_of_range_values(self, monkeypatch, name, value):
        """Retry and timeout settings must be positive."""
        monkeypatch.setenv(name, value)

        with pytest.raises(ValidationError):
            ClientSettings(_env_file=None)


class TestGetSettings:
    """Tests for the cached settings accessor."""

    def test_returns_cached_instance(self):
        """Repeated calls return the same object."""
        get_settings.cache_clear()

        assert get_settings() is get_settings()

        get_settings.cache_clear()
