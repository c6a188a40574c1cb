"""Configuration loading.

Main Entry Points
-----------------
load_config : Load a configuration from a YAML string
load_config_file : Load a configuration file
"""

from .errors import (
    ConfigCycleError,
    ConfigError,
    ConfigIncludeError,
    ConfigPathError,
    ConfigTypeError,
)
from .load import load_config, load_config_file, resolve_config_path
from .operations import parse_value, set_nested_value

__all__ = [
    "load_config",
    "load_config_file",
    "resolve_config_path",
    "parse_value",
    "set_nested_value",
    "ConfigError",
    "ConfigIncludeError",
    "ConfigCycleError",
    "ConfigPathError",
    "ConfigTypeError",
]
