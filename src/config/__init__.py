"""Configuration management for the PR minder.

Example usage:
    from src.config import load_config
    from src.github import GitHubClient

    config = load_config("config.yaml")
    async with GitHubClient(config.github.to_client_config()) as client:
        pull = await client.fetch_pull_request("octocat", "Hello-World", 1)
"""

from .exceptions import (
    ConfigurationError,
    ConfigurationFileError,
    ConfigurationValidationError,
    EnvironmentVariableError,
)
from .loader import load_config, substitute_env_vars
from .models import Config, GitHubSettings, LoggingSettings, LogLevel

__all__ = [
    "Config",
    "ConfigurationError",
    "ConfigurationFileError",
    "ConfigurationValidationError",
    "EnvironmentVariableError",
    "GitHubSettings",
    "LogLevel",
    "LoggingSettings",
    "load_config",
    "substitute_env_vars",
]
