"""
SeaShell Configuration Loader

Configuration management for the interpreter:
- JSON configuration file loading
- Configuration validation
- Default value handling
- Runtime configuration updates

Every value has a default, so the shell runs without any file.

Author: SeaShell Project
Version: 1.0.0
"""

import json
import threading
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Optional

from seashell.exceptions import ConfigLoadError, ConfigValidationError
from seashell.logger import LogLevel


@dataclass
class LimitsConfig:
    """Input size limits. Lines or token lists over a limit are rejected."""
    max_line_length: int = 99
    max_tokens: int = 10


@dataclass
class RedirectionConfig:
    """Redirection settings."""
    # Permission bits for files created by > and >>, before the umask.
    # World-writable by default, matching the historical behavior.
    file_mode: int = 0o777


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    console_output: bool = True
    use_colors: bool = True


@dataclass
class ShellConfig:
    """Shell configuration settings."""
    prompt: str = "\nSeaShell> "
    show_banner: bool = True


@dataclass
class Config:
    """
    Main configuration container.

    Holds all configuration settings for the interpreter.
    """
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    redirection: RedirectionConfig = field(default_factory=RedirectionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)


class ConfigLoader:
    """
    Configuration loader and manager.

    Handles loading configuration from JSON files, validating
    settings, and providing runtime configuration access.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('seashell.json')
        >>> print(config.limits.max_tokens)
        10
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        """Singleton pattern for configuration access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
                cls._instance._loaded = False
            return cls._instance

    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded settings

        Raises:
            ConfigLoadError: If the file cannot be read or parsed
            ConfigValidationError: If a value is invalid
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigLoadError(
                f"Configuration file not found: {config_path}",
                path=config_path
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigLoadError(
                f"Invalid JSON in configuration file: {e}",
                path=config_path
            )
        except OSError as e:
            raise ConfigLoadError(
                f"Cannot read configuration file: {e}",
                path=config_path
            )

        if not isinstance(data, dict):
            raise ConfigLoadError(
                "Configuration file must contain a JSON object",
                path=config_path
            )

        config = self._parse_config(data)
        self._validate(config)
        self._config = config
        self._loaded = True
        return self._config

    def _parse_config(self, data: dict[str, Any]) -> Config:
        """Parse configuration data into Config object."""
        config = Config()

        for section in ('limits', 'redirection', 'logging', 'shell'):
            if section in data and not isinstance(data[section], dict):
                raise ConfigValidationError(
                    f"Configuration section '{section}' must be a JSON object",
                    key=section
                )

        if 'limits' in data:
            limits_data = data['limits']
            config.limits = LimitsConfig(
                max_line_length=limits_data.get('max_line_length', config.limits.max_line_length),
                max_tokens=limits_data.get('max_tokens', config.limits.max_tokens),
            )

        if 'redirection' in data:
            redir_data = data['redirection']
            config.redirection = RedirectionConfig(
                file_mode=_parse_mode(redir_data.get('file_mode', config.redirection.file_mode)),
            )

        if 'logging' in data:
            log_data = data['logging']
            config.logging = LoggingConfig(
                level=log_data.get('level', config.logging.level),
                log_file=log_data.get('log_file', config.logging.log_file),
                console_output=log_data.get('console_output', config.logging.console_output),
                use_colors=log_data.get('use_colors', config.logging.use_colors),
            )

        if 'shell' in data:
            shell_data = data['shell']
            config.shell = ShellConfig(
                prompt=shell_data.get('prompt', config.shell.prompt),
                show_banner=shell_data.get('show_banner', config.shell.show_banner),
            )

        return config

    @staticmethod
    def _validate(config: Config) -> None:
        """Check value ranges that the dataclasses cannot express."""
        for key in ('max_line_length', 'max_tokens'):
            value = getattr(config.limits, key)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigValidationError(
                    f"limits.{key} must be a positive integer, got {value!r}",
                    key=f"limits.{key}"
                )

        mode = config.redirection.file_mode
        if isinstance(mode, bool) or not isinstance(mode, int) or not 0 <= mode <= 0o7777:
            raise ConfigValidationError(
                f"redirection.file_mode must be between 0 and 0o7777, got {mode!r}",
                key="redirection.file_mode"
            )

        try:
            LogLevel.from_name(str(config.logging.level))
        except ValueError as e:
            raise ConfigValidationError(str(e), key="logging.level")

        if not isinstance(config.shell.prompt, str):
            raise ConfigValidationError("shell.prompt must be a string", key="shell.prompt")

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'limits.max_tokens')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        obj: Any = self._config

        for part in key.split('.'):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.

        Args:
            key: Dot-notation key (e.g., 'redirection.file_mode')
            value: Value to set

        Note:
            This modifies configuration at runtime but does not
            persist changes to disk.
        """
        parts = key.split('.')
        obj: Any = self._config

        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        final_key = parts[-1]
        if not is_dataclass(obj) or final_key not in {f.name for f in fields(obj)}:
            raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        previous = getattr(obj, final_key)
        setattr(obj, final_key, value)
        try:
            self._validate(self._config)
        except ConfigValidationError:
            setattr(obj, final_key, previous)
            raise

    def reset(self) -> Config:
        """Drop any loaded settings and go back to the defaults."""
        self._config = Config()
        self._loaded = False
        return self._config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        def dataclass_to_dict(obj: Any) -> Any:
            if is_dataclass(obj):
                return {
                    k: dataclass_to_dict(v)
                    for k, v in obj.__dict__.items()
                }
            elif isinstance(obj, list):
                return [dataclass_to_dict(item) for item in obj]
            elif isinstance(obj, dict):
                return {k: dataclass_to_dict(v) for k, v in obj.items()}
            else:
                return obj

        return dataclass_to_dict(self._config)


def _parse_mode(value: Any) -> Any:
    """Accept a permission mode as an int or an octal string ("0644", "0o644")."""
    if isinstance(value, str):
        text = value.strip().lower()
        if text.startswith('0o'):
            text = text[2:]
        try:
            return int(text, 8)
        except ValueError:
            raise ConfigValidationError(
                f"redirection.file_mode is not an octal number: {value!r}",
                key="redirection.file_mode"
            ) from None
    return value


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config object with current settings
    """
    return ConfigLoader().config
