"""Main configuration loading functions.

Configuration files are YAML files which support two directives on top of
plain YAML:

.. code-block:: yaml

    include: base.yaml              # or a list of files, merged in order
    override:
      io.reader.hit_label: gaushit  # dot-notation overrides applied last

Included files are merged depth-first, the including file's own content
taking precedence over the included ones.
"""

import os
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigCycleError, ConfigIncludeError, ConfigTypeError
from .operations import apply_overrides, deep_merge

__all__ = ["load_config", "load_config_file", "resolve_config_path"]

INCLUDE_KEY = "include"
OVERRIDE_KEY = "override"


def resolve_config_path(filename: str, current_dir: str) -> str:
    """Resolve a configuration file path.

    Tries the path as is (if absolute), relative to `current_dir`, then with
    a `.yaml` or `.yml` extension appended.

    Parameters
    ----------
    filename : str
        Config filename or path to resolve
    current_dir : str
        Directory of the config file doing the including

    Returns
    -------
    str
        Resolved absolute path

    Raises
    ------
    ConfigIncludeError
        If the file cannot be found
    """
    base = filename if os.path.isabs(filename) else os.path.join(current_dir, filename)
    for candidate in (base, f"{base}.yaml", f"{base}.yml"):
        if os.path.isfile(candidate):
            return os.path.abspath(candidate)

    raise ConfigIncludeError(f"Configuration file not found: {filename}")


def _load_config_recursive(
    config_str: str, root_dir: str, include_stack: List[str]
) -> Dict[str, Any]:
    """Parse a YAML string, resolving its includes and overrides.

    Parameters
    ----------
    config_str : str
        YAML configuration string
    root_dir : str
        Directory against which to resolve relative include paths
    include_stack : List[str]
        Files currently being loaded (for cycle detection)

    Returns
    -------
    Dict[str, Any]
        Merged configuration
    """
    config = yaml.safe_load(config_str) or {}
    if not isinstance(config, dict):
        raise ConfigTypeError("The top level of a configuration must be a dictionary.")

    # Merge the included files first
    includes = config.pop(INCLUDE_KEY, [])
    if isinstance(includes, str):
        includes = [includes]

    merged = {}
    for include in includes:
        path = resolve_config_path(include, root_dir)
        if path in include_stack:
            raise ConfigCycleError(include_stack + [path])

        with open(path, "r", encoding="utf-8") as cfg_file:
            included = _load_config_recursive(
                cfg_file.read(), os.path.dirname(path), include_stack + [path]
            )
        merged = deep_merge(merged, included)

    # Then the file's own content, then its overrides
    overrides = config.pop(OVERRIDE_KEY, None) or {}
    merged = deep_merge(merged, config)

    return apply_overrides(merged, overrides)


def load_config(config_str: str, root_dir: Optional[str] = None) -> Dict[str, Any]:
    """Load a configuration from a YAML string.

    Parameters
    ----------
    config_str : str
        YAML configuration string
    root_dir : str, optional
        Directory against which to resolve includes (default: current)

    Returns
    -------
    Dict[str, Any]
        Loaded and merged configuration
    """
    root_dir = root_dir if root_dir is not None else os.getcwd()

    return _load_config_recursive(config_str, root_dir, [])


def load_config_file(cfg_path: str) -> Dict[str, Any]:
    """Load a configuration from a file.

    Parameters
    ----------
    cfg_path : str
        Path to configuration file

    Returns
    -------
    Dict[str, Any]
        Loaded and merged configuration

    Raises
    ------
    ConfigCycleError
        If circular include detected
    ConfigIncludeError
        If included file not found
    """
    cfg_path = os.path.abspath(cfg_path)
    with open(cfg_path, "r", encoding="utf-8") as cfg_file:
        config_str = cfg_file.read()

    return _load_config_recursive(config_str, os.path.dirname(cfg_path), [cfg_path])
