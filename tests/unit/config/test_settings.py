"""Unit tests for GitHub settings models."""

import pytest
from pydantic import ValidationError

from src.config.models import GitHubSettings, LoggingSettings, LogLevel
from src.github.client import GitHubClientConfig


class TestGitHubSettings:
    """Tests for GitHubSettings environment handling."""

    def test_defaults(self):
        settings = GitHubSettings()

        assert settings.token is None
        assert settings.user_agent == "pr-minder/1.0"
        assert settings.timeout == 10.0
        assert settings.cache_enabled is True

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch):
        """
        Why: Deployments configure the client through GITHUB_* variables
        What: Tests that every prefixed variable is picked up
        How: Sets all variables and checks the parsed settings
        """
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_env_token")
        monkeypatch.setenv("GITHUB_BASE_URL", "https://ghe.example.com/api/v3")
        monkeypatch.setenv("GITHUB_USER_AGENT", "custom-agent/2.0")
        monkeypatch.setenv("GITHUB_TIMEOUT", "30")
        monkeypatch.setenv("GITHUB_CACHE_ENABLED", "false")
        monkeypatch.setenv("GITHUB_CACHE_TTL", "60")

        settings = GitHubSettings()

        assert settings.token is not None
        assert settings.token.get_secret_value() == "ghp_env_token"
        assert settings.base_url == "https://ghe.example.com/api/v3"
        assert settings.user_agent == "custom-agent/2.0"
        assert settings.timeout == 30.0
        assert settings.cache_enabled is False
        assert settings.cache_ttl == 60.0

    def test_empty_token_is_absent(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("GITHUB_TOKEN", "")

        assert GitHubSettings().token is None

    def test_token_not_in_repr(self):
        settings = GitHubSettings(token="ghp_supersecret")

        assert "ghp_supersecret" not in repr(settings)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"timeout": 0},
            {"timeout": 301},
            {"cache_ttl": -1},
            {"base_url": "api.github.com"},
            {"base_url": "ftp://api.github.com"},
        ],
    )
    def test_invalid_values(self, kwargs: dict):
        with pytest.raises(ValidationError):
            GitHubSettings(**kwargs)

    def test_to_client_config(self):
        """
        Why: The client receives plain immutable config, never pydantic models
        What: Tests that settings convert into an equivalent GitHubClientConfig
        How: Builds settings with explicit values and compares the result
        """
        settings = GitHubSettings(
            token="ghp_abc12345xyz",
            base_url="https://ghe.example.com/api/v3",
            timeout=15,
            cache_enabled=False,
            cache_ttl=30,
        )

        client_config = settings.to_client_config()

        assert client_config == GitHubClientConfig(
            token="ghp_abc12345xyz",
            base_url="https://ghe.example.com/api/v3",
            user_agent="pr-minder/1.0",
            timeout=15.0,
            cache_enabled=False,
            cache_ttl=30.0,
        )

    def test_to_client_config_without_token(self):
        assert GitHubSettings().to_client_config().token is None


class TestLoggingSettings:
    """Tests for LoggingSettings."""

    def test_defaults(self):
        settings = LoggingSettings()

        assert settings.level == LogLevel.INFO
        assert "%(message)s" in settings.format

    def test_level_from_string(self):
        assert LoggingSettings(level="WARNING").level == LogLevel.WARNING
