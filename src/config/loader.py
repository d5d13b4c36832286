"""Configuration loading.

The loading hierarchy is:
1. Default values from Pydantic models
2. Environment variables (``GITHUB_*``)
3. Configuration file (YAML), whose string values may reference environment
   variables as ``${VAR_NAME}`` or ``${VAR_NAME:default}``
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import (
    ConfigurationFileError,
    ConfigurationValidationError,
    EnvironmentVariableError,
)
from .models import Config, GitHubSettings, LoggingSettings

ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in string values, recursively.

    Raises:
        EnvironmentVariableError: If a variable without default is unset
    """
    if isinstance(value, str):

        def replacer(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)

            env_value = os.getenv(var_name)
            if env_value is not None:
                return env_value
            if default_value is not None:
                return default_value
            raise EnvironmentVariableError(var_name)

        return ENV_VAR_PATTERN.sub(replacer, value)
    if isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    return value


def _read_yaml(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise ConfigurationFileError(
            f"Configuration file not found: {config_path}", str(config_path)
        )

    if not config_path.is_file():
        raise ConfigurationFileError(
            f"Configuration path is not a file: {config_path}", str(config_path)
        )

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationFileError(
            f"Failed to parse YAML configuration: {e}", str(config_path)
        ) from e
    except OSError as e:
        raise ConfigurationFileError(
            f"Failed to read configuration file: {e}", str(config_path)
        ) from e

    if config_data is None:
        return {}
    if not isinstance(config_data, dict):
        raise ConfigurationFileError(
            "Configuration file must contain a mapping at the top level",
            str(config_path),
        )
    return config_data


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from the environment and an optional YAML file.

    Args:
        config_path: Path to a YAML file with ``github`` and ``logging`` sections

    Returns:
        Validated configuration

    Raises:
        ConfigurationFileError: If the file cannot be read or parsed
        ConfigurationValidationError: If the resulting values are invalid
    """
    config_data: dict[str, Any] = {}
    if config_path is not None:
        config_data = substitute_env_vars(_read_yaml(Path(config_path)))

    try:
        # Construct GitHubSettings directly so file values overlay the environment
        github = GitHubSettings(**(config_data.get("github") or {}))
        logging_settings = LoggingSettings(**(config_data.get("logging") or {}))
        return Config(github=github, logging=logging_settings)
    except ValidationError as e:
        raise ConfigurationValidationError(
            f"Configuration validation failed: {e}",
            validation_errors=e.errors(),
        ) from e
