"""Errors raised while loading pr-minder settings."""

from typing import Any


class ConfigurationError(Exception):
    """Base exception for settings that cannot be loaded."""


class ConfigurationFileError(ConfigurationError):
    """Raised when the YAML file is missing, unreadable or not a mapping."""

    def __init__(self, message: str, file_path: str | None = None):
        super().__init__(message)
        self.file_path = file_path


class ConfigurationValidationError(ConfigurationError):
    """Raised when GitHub or logging settings fail pydantic validation."""

    def __init__(self, message: str, validation_errors: list[Any] | None = None):
        """Initialize validation error.

        Args:
            message: Summary including pydantic's rendering of the errors
            validation_errors: ``ValidationError.errors()`` entries
        """
        super().__init__(message)
        self.validation_errors = validation_errors or []


class EnvironmentVariableError(ConfigurationError):
    """Raised when a ``${VAR}`` reference without default is unset."""

    def __init__(self, variable_name: str):
        super().__init__(f"Required environment variable '{variable_name}' not found")
        self.variable_name = variable_name
