# common/system_utils.py
# -*- coding: utf-8 -*-
"""
Host probes for the provisioner.

This module includes functions for determining the host architecture,
checking for the required runtime, and reading product-version metadata
from binaries.
"""

import logging
import os
import platform
import subprocess
from pathlib import Path
from typing import Any, List, Optional

from common.command_utils import get_symbols, log_message, run_command
from provisioner.config_models import AppSettings
from provisioner.engine.errors import RuntimeMissingError

module_logger = logging.getLogger(__name__)


def is_64bit_host() -> bool:
    """
    Determine whether the operating system is 64-bit.

    A 32-bit interpreter on a 64-bit Windows host reports a 32-bit machine,
    so the WOW64 environment variable is consulted as well.

    Returns:
        True for a 64-bit operating system, False otherwise.
    """
    if os.environ.get("PROCESSOR_ARCHITEW6432"):
        return True
    return platform.machine().lower().endswith("64")


def find_runtime_versions(runtime_root: Path, version_prefix: str) -> List[str]:
    """
    List the version-named subdirectories of `runtime_root` that start with
    `version_prefix`, sorted by name.

    Args:
        runtime_root: Directory holding one subdirectory per installed runtime.
        version_prefix: Required prefix such as "v4.0".

    Returns:
        The matching directory names. Empty when the root does not exist.
    """
    root = Path(runtime_root)
    if not root.is_dir():
        return []
    return sorted(
        child.name
        for child in root.iterdir()
        if child.is_dir() and child.name.startswith(version_prefix)
    )


def require_runtime(
    runtime_root: Path,
    version_prefix: str,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Ensure a runtime matching `version_prefix` is installed.

    Returns:
        The name of the newest matching runtime directory.

    Raises:
        RuntimeMissingError: If no subdirectory matches.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    versions = find_runtime_versions(runtime_root, version_prefix)
    if not versions:
        raise RuntimeMissingError(version_prefix, Path(runtime_root))

    log_message(
        f"{symbols.get('success', '✅')} Found runtime {versions[-1]} under {runtime_root}",
        "info",
        logger_to_use,
        app_settings,
    )
    return versions[-1]


def get_product_version(
    file_path: Path,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> Optional[str]:
    """
    Read the product version embedded in a binary's version resource.

    Directories and files without a version resource yield None.

    Args:
        file_path: The binary to inspect.
        app_settings: Settings providing the PowerShell command name.
        current_logger: Optional logger instance.

    Returns:
        The product version string, or None if it cannot be determined.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    path = Path(file_path)
    if not path.is_file():
        return None

    powershell = (
        app_settings.powershell_command if app_settings else "powershell"
    )
    literal_path = str(path).replace("'", "''")
    command = [
        powershell,
        "-NoProfile",
        "-NonInteractive",
        "-Command",
        f"(Get-Item -LiteralPath '{literal_path}').VersionInfo.ProductVersion",
    ]
    try:
        result = run_command(
            command,
            app_settings,
            check=True,
            capture_output=True,
            current_logger=logger_to_use,
        )
    except FileNotFoundError:
        log_message(
            f"{symbols.get('warning', '!')} {powershell} not found. Cannot read the version of {path}.",
            "warning",
            logger_to_use,
            app_settings,
        )
        return None
    except subprocess.CalledProcessError:
        return None

    version = (result.stdout or "").strip()
    return version or None


def is_feature_installed(
    config_store: Any,
    key: str,
    value_name: str,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Check whether an optional platform feature is installed.

    The feature counts as installed when `key` exists and its `value_name`
    value is set to something other than zero.

    Args:
        config_store: Store exposing `get_value(key, value_name)`.
        key: Full key path written by the feature's setup.
        value_name: Name of the value the setup sets on success.
        app_settings: Settings providing log symbols.
        current_logger: Optional logger instance.

    Returns:
        True if the feature is installed, False otherwise.
    """
    logger_to_use = current_logger if current_logger else module_logger
    data = config_store.get_value(key, value_name)
    installed = data is not None and data.strip().lower() not in ("", "0", "0x0")
    log_message(
        f"{get_symbols(app_settings).get('info', 'ℹ️')} Feature probe {key}\\{value_name}: "
        f"{'installed' if installed else 'not installed'}",
        "debug",
        logger_to_use,
        app_settings,
    )
    return installed
