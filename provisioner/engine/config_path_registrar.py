# provisioner/engine/config_path_registrar.py
# -*- coding: utf-8 -*-
"""
Publishes a directory to the build toolchain through the configuration store.
"""

import logging
from typing import Optional

from common.command_utils import get_symbols, log_message
from provisioner.config_models import AppSettings

from .stores import RegistryConfigStore

module_logger = logging.getLogger(__name__)


def set_discovery_path(
    config_store: RegistryConfigStore,
    store_key: str,
    path_value: str,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Make `path_value` the default value of `store_key`.

    The store is only written when the key has no value or a different one,
    so repeated installs leave it untouched.

    Args:
        config_store: The configuration store.
        store_key: Full key path, including the machine root.
        path_value: Directory the toolchain should search.
        app_settings: Settings providing log symbols.
        current_logger: Optional logger instance.

    Returns:
        The value in effect after the call.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    current_value = config_store.get_default(store_key)
    if current_value != path_value:
        config_store.set_default(store_key, path_value)
        current_value = path_value
    else:
        log_message(
            f"{symbols.get('info', 'ℹ️')} {store_key} is already up to date.",
            "debug",
            logger_to_use,
            app_settings,
        )

    log_message(
        f"{symbols.get('success', '✅')} {store_key} = {current_value}",
        "info",
        logger_to_use,
        app_settings,
    )
    return current_value
