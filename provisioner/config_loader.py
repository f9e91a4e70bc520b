# provisioner/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the provisioner.

Handles loading settings from Pydantic model defaults, environment
variables, a YAML file, and command-line arguments, applying a specific
order of precedence:
1. Pydantic Model Defaults
2. Environment Variables (loaded by Pydantic's BaseSettings)
3. YAML Configuration File
4. Command-Line Arguments
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from .config_models import PROJECT_ROOT, AppSettings

module_logger = logging.getLogger(__name__)

CONFIG_FILE_DEFAULT = "provision.yaml"


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively updates a dictionary `source` with values from another dictionary
    `overrides`. Nested dictionaries are merged key by key; None values in
    `overrides` never replace an existing value.

    Parameters:
        source: Dict[str, Any]
            The dictionary to be updated. This dictionary gets modified in place.
        overrides: Dict[str, Any]
            The dictionary containing values to update or add to the `source`.

    Returns:
        Dict[str, Any]:
            The updated dictionary after applying all `overrides` to the input `source`.
    """
    for key, value in overrides.items():
        if (
            isinstance(value, dict)
            and key in source
            and isinstance(source[key], dict)
        ):
            source[key] = _deep_update(source[key], value)
        elif value is not None:
            source[key] = value
    return source


def _read_yaml_config(
    yaml_config_path: Path, logger_to_use: logging.Logger
) -> Dict[str, Any]:
    """Reads a YAML mapping from disk, returning {} when it is absent or unusable."""
    if not (yaml_config_path.exists() and yaml_config_path.is_file()):
        logger_to_use.debug(
            f"Configuration file '{yaml_config_path}' not found. Using defaults, environment variables, and CLI args."
        )
        return {}

    try:
        with open(yaml_config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger_to_use.warning(
            f"Could not parse YAML config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}
    except IOError as e:
        logger_to_use.warning(
            f"Could not read config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}

    if yaml_data is None:
        return {}
    if not isinstance(yaml_data, dict):
        logger_to_use.warning(
            f"Config file '{yaml_config_path}' does not contain a valid YAML dictionary. Ignoring."
        )
        return {}

    logger_to_use.info(f"Loaded configuration from {yaml_config_path}")
    return yaml_data


def load_app_settings(
    cli_args: Optional[argparse.Namespace] = None,
    config_file_path: Union[str, Path, None] = None,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads application settings with the precedence
    defaults < environment < YAML file < command line.

    Args:
        cli_args: Parsed command-line arguments (from argparse).
        config_file_path: Path to the YAML configuration file. Relative paths
            are resolved against the project root. Defaults to provision.yaml.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        SystemExit: If the merged configuration fails validation.
    """
    logger_to_use = current_logger if current_logger else module_logger

    current_values_dict = AppSettings().model_dump(exclude_defaults=False)

    yaml_config_path = Path(config_file_path or CONFIG_FILE_DEFAULT)
    if not yaml_config_path.is_absolute():
        yaml_config_path = PROJECT_ROOT / yaml_config_path
    current_values_dict = _deep_update(
        current_values_dict, _read_yaml_config(yaml_config_path, logger_to_use)
    )

    if cli_args:
        cli_arg_dict = vars(cli_args)
        mapped_cli_values: Dict[str, Any] = {}

        if cli_arg_dict.get("staging_dir") is not None:
            mapped_cli_values["staging_dir"] = Path(cli_arg_dict["staging_dir"])
        if cli_arg_dict.get("log_file") is not None:
            mapped_cli_values["log_file"] = Path(cli_arg_dict["log_file"])

        current_values_dict = _deep_update(
            current_values_dict, mapped_cli_values
        )

    try:
        return AppSettings(**current_values_dict)
    except ValidationError as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise SystemExit(f"Configuration error: {e}") from e
