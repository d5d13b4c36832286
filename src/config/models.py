"""Pydantic configuration models for the PR minder.

The environment is read here, once, when settings are constructed. The
resulting GitHubClientConfig is handed to the client, which never looks at
the environment itself.

Environment variables (prefix ``GITHUB_``):
- GITHUB_TOKEN: Personal access token (optional; requests fail fast without it)
- GITHUB_BASE_URL: API root (default: https://api.github.com)
- GITHUB_USER_AGENT: Client identification string
- GITHUB_TIMEOUT: Per-request timeout in seconds
- GITHUB_CACHE_ENABLED: Enable the single pull request cache
- GITHUB_CACHE_TTL: Cache TTL in seconds, 0 disables the cache
"""

from enum import Enum
from urllib.parse import urlparse

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.github.client import GitHubClientConfig


class LogLevel(str, Enum):
    """Supported logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class GitHubSettings(BaseSettings):
    """GitHub client settings with environment variable support."""

    token: SecretStr | None = Field(
        default=None, description="GitHub personal access token"
    )
    base_url: str = Field(
        default="https://api.github.com", description="GitHub REST API root"
    )
    user_agent: str = Field(
        default="pr-minder/1.0", description="Client identification string"
    )
    timeout: float = Field(
        default=10.0, gt=0, le=300, description="Per-request timeout in seconds"
    )
    cache_enabled: bool = Field(
        default=True, description="Cache single pull request lookups"
    )
    cache_ttl: float = Field(
        default=120.0, ge=0, le=3600, description="Cache TTL in seconds"
    )

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate the API root is an absolute http(s) URL."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid GitHub base URL: {v}")
        return v

    @field_validator("token", mode="before")
    @classmethod
    def empty_token_is_none(cls, v: object) -> object:
        """Treat an empty token as absent."""
        if v == "":
            return None
        return v

    def to_client_config(self) -> GitHubClientConfig:
        """Build the immutable client configuration."""
        return GitHubClientConfig(
            token=self.token.get_secret_value() if self.token else None,
            base_url=self.base_url,
            user_agent=self.user_agent,
            timeout=self.timeout,
            cache_enabled=self.cache_enabled,
            cache_ttl=self.cache_ttl,
        )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Root log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="logging.Formatter format string",
    )


class Config(BaseModel):
    """Root configuration."""

    github: GitHubSettings = Field(default_factory=GitHubSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
