"""Tests for application configuration."""
import pytest
from pydantic import ValidationError

from core.config import DEFAULT_API_URL, Settings, get_settings


class TestDefaults:
    """Tests for values used when nothing is configured."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Unset variables fall back to the public API and a bounded timeout."""
        for name in ("RAINDROP_TOKEN", "RAINDROP_API_URL", "RAINDROP_TIMEOUT", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.raindrop_token == ""
        assert settings.raindrop_api_url == DEFAULT_API_URL
        assert settings.raindrop_timeout == 30.0
        assert settings.log_level == "INFO"


class TestEnvironment:
    """Tests for reading settings from environment variables."""

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables populate the settings."""
        monkeypatch.setenv("RAINDROP_TOKEN", "secret")
        monkeypatch.setenv("RAINDROP_API_URL", "http://localhost:9000/rest/v1/")
        monkeypatch.setenv("RAINDROP_TIMEOUT", "2.5")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.raindrop_token == "secret"
        assert settings.raindrop_api_url == "http://localhost:9000/rest/v1"
        assert settings.raindrop_timeout == 2.5
        assert settings.log_level == "DEBUG"

    def test_reads_env_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        """A .env file supplies the token when the environment does not."""
        monkeypatch.delenv("RAINDROP_TOKEN", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("RAINDROP_TOKEN=from-file\n")

        settings = Settings(_env_file=env_file)

        assert settings.raindrop_token == "from-file"

    def test_blank_token_is_empty(self) -> None:
        """Whitespace-only tokens are treated as missing."""
        settings = Settings(_env_file=None, RAINDROP_TOKEN="   ")

        assert settings.raindrop_token == ""


class TestValidation:
    """Tests for rejected values."""

    def test_invalid_log_level(self) -> None:
        """Unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, LOG_LEVEL="LOUD")

    @pytest.mark.parametrize("timeout", ["0", "-1", "soon"])
    def test_invalid_timeout(self, timeout: str) -> None:
        """Timeouts must be positive numbers."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, RAINDROP_TIMEOUT=timeout)


def test_get_settings_is_cached() -> None:
    """get_settings returns the same instance on every call."""
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
