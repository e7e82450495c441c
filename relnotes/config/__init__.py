"""Configuration module."""

from .settings import (
    Config,
    ConfigError,
    get_config,
    load_json_config,
    find_config_file,
    create_sample_config,
)

__all__ = [
    "Config",
    "ConfigError",
    "get_config",
    "load_json_config",
    "find_config_file",
    "create_sample_config",
]
