"""
SeaShell Core Module

Configuration shared by every other component.
"""

from .config_loader import (
    ConfigLoader,
    Config,
    LimitsConfig,
    RedirectionConfig,
    LoggingConfig,
    ShellConfig,
    get_config,
)

__all__ = [
    'ConfigLoader',
    'Config',
    'LimitsConfig',
    'RedirectionConfig',
    'LoggingConfig',
    'ShellConfig',
    'get_config',
]
