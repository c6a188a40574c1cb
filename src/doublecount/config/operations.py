"""Helper functions to manipulate configuration dictionaries."""

from copy import deepcopy
from typing import Any, Dict, Tuple

import yaml

from .errors import ConfigPathError, ConfigTypeError

__all__ = ["deep_merge", "parse_value", "set_nested_value", "apply_overrides"]


def deep_merge(
    base_dict: Dict[str, Any], override_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Recursively merge override_dict into base_dict.

    Parameters
    ----------
    base_dict : Dict[str, Any]
        Base dictionary
    override_dict : Dict[str, Any]
        Override dictionary

    Returns
    -------
    Dict[str, Any]
        Merged dictionary (new copy)
    """
    result = deepcopy(base_dict)
    for key, value in override_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result


def parse_value(value_str: Any) -> Any:
    """Parse a string value into the appropriate Python type.

    Parameters
    ----------
    value_str : Any
        Value to parse (if string, attempts YAML parsing)

    Returns
    -------
    Any
        Parsed value
    """
    if not isinstance(value_str, str) or value_str.strip() == "":
        return value_str

    try:
        return yaml.safe_load(value_str)
    except yaml.YAMLError:
        return value_str


def set_nested_value(
    config: Dict[str, Any], key_path: str, value: Any, delete: bool = False
) -> Tuple[Dict[str, Any], bool]:
    """Set or delete a nested value using dot notation.

    Missing intermediate blocks are created when setting a value.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration dictionary
    key_path : str
        Dot-separated path (e.g., "io.reader.hit_label")
    value : Any
        Value to set (ignored if delete=True)
    delete : bool, default False
        If True, delete the key

    Returns
    -------
    Tuple[Dict[str, Any], bool]
        (modified config, whether operation was applied)

    Raises
    ------
    ConfigPathError
        If deleting a key path which does not exist
    ConfigTypeError
        If the path traverses a non-dict value
    """
    keys = key_path.split(".")
    current = config
    for i, key in enumerate(keys[:-1]):
        if key not in current:
            if delete:
                partial_path = ".".join(keys[: i + 1])
                raise ConfigPathError(
                    f"Cannot delete '{key_path}': path '{partial_path}' does not exist"
                )
            current[key] = {}
        elif not isinstance(current[key], dict):
            raise ConfigTypeError(
                f"Cannot set '{key_path}': '{key}' is not a dictionary"
            )
        current = current[key]

    final_key = keys[-1]
    if delete:
        if final_key not in current:
            raise ConfigPathError(f"Cannot delete '{key_path}': key does not exist")
        del current[final_key]
    else:
        current[final_key] = value

    return config, True


def apply_overrides(config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Apply a block of dot-notation overrides to a configuration.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration dictionary
    overrides : Dict[str, Any]
        Map from dot-separated key paths to values

    Returns
    -------
    Dict[str, Any]
        Updated configuration
    """
    for key_path, value in overrides.items():
        config, _ = set_nested_value(config, key_path, parse_value(value))

    return config
