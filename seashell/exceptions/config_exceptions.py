"""
Configuration Exceptions

Author: SeaShell Project
Version: 1.0.0
"""

from typing import Optional, Any

from .base_exceptions import SeaShellError


class ConfigException(SeaShellError):
    """Base exception for configuration errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message, error_code=error_code or 1000, context=context)


class ConfigLoadError(ConfigException):
    """
    The configuration file cannot be read or parsed.

    Example:
        >>> raise ConfigLoadError("Configuration file not found", path="seashell.json")
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(
            message,
            error_code=1001,
            context={"path": path} if path else None
        )
        self.path = path


class ConfigValidationError(ConfigException):
    """Raised when a configuration value is out of range or of the wrong type."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(
            message,
            error_code=1002,
            context={"key": key} if key else None
        )
        self.key = key
