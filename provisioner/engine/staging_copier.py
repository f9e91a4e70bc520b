# provisioner/engine/staging_copier.py
# -*- coding: utf-8 -*-
"""
Moves resolved files into the staging directory and from there onto the
build machine.
"""

import logging
from pathlib import Path
from typing import Optional

from common.command_utils import get_symbols, log_message
from common.file_utils import copy_path_into, ensure_directory
from provisioner.config_models import AppSettings

from .file_locator import ResolvedFile

module_logger = logging.getLogger(__name__)


def collect_into(
    staging_dir: Path,
    resolved_file: ResolvedFile,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Copy a resolved file or directory into the staging directory.

    The staging directory is created if needed and existing copies are
    overwritten.

    Args:
        staging_dir: The staging directory.
        resolved_file: The entry to copy.
        app_settings: Settings providing log symbols.
        current_logger: Optional logger instance.

    Returns:
        The path of the staged copy.
    """
    logger_to_use = current_logger if current_logger else module_logger
    ensure_directory(staging_dir, app_settings, logger_to_use)
    staged = copy_path_into(resolved_file.path, staging_dir)
    log_message(
        f"{get_symbols(app_settings).get('success', '✅')} Copied {resolved_file.path} to {staged}",
        "info",
        logger_to_use,
        app_settings,
    )
    return staged


def install_from(
    staging_dir: Path,
    file_name: str,
    target_dir: Path,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Copy `file_name` from the staging directory into `target_dir`.

    A missing staged entry is logged as a warning and nothing is copied.

    Returns:
        True if the entry was copied, False if it was not staged.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    staged = Path(staging_dir) / file_name
    if not staged.exists():
        log_message(
            f"{symbols.get('warning', '!')} {file_name} was not found in {staging_dir}. Skipping.",
            "warning",
            logger_to_use,
            app_settings,
        )
        return False

    ensure_directory(target_dir, app_settings, logger_to_use)
    installed = copy_path_into(staged, target_dir)
    log_message(
        f"{symbols.get('success', '✅')} Copied {staged} to {installed}",
        "info",
        logger_to_use,
        app_settings,
    )
    return True
