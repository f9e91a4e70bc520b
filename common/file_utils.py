# common/file_utils.py
# -*- coding: utf-8 -*-
"""
File system utility functions for copying entries and preparing directories.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from provisioner.config_models import AppSettings

from .command_utils import get_symbols, log_message

module_logger = logging.getLogger(__name__)


def ensure_directory(
    directory_path: Path,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Create `directory_path` and any missing parents.

    Parameters:
        directory_path (Path): The directory to create.
        app_settings (Optional[AppSettings]): Settings providing log symbols.
        current_logger (Optional[logging.Logger]): Logger instance to use.

    Returns:
        Path: The directory path.
    """
    logger_to_use = current_logger if current_logger else module_logger
    directory = Path(directory_path)
    if not directory.is_dir():
        directory.mkdir(parents=True, exist_ok=True)
        log_message(
            f"{get_symbols(app_settings).get('package', '📦')} Created directory {directory}",
            "info",
            logger_to_use,
            app_settings,
        )
    return directory


def copy_path_into(source: Path, destination_dir: Path) -> Path:
    """
    Copy a file or a directory tree into `destination_dir`, keeping its name.

    Existing files at the destination are overwritten. Directories are merged
    into any existing directory of the same name.

    Parameters:
        source (Path): File or directory to copy.
        destination_dir (Path): Directory that receives the copy. Must exist.

    Returns:
        Path: The path of the copy.
    """
    source = Path(source)
    destination = Path(destination_dir) / source.name
    if source.is_dir():
        shutil.copytree(source, destination, dirs_exist_ok=True)
    else:
        shutil.copy2(source, destination)
    return destination
