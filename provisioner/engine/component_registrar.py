# provisioner/engine/component_registrar.py
# -*- coding: utf-8 -*-
"""
Registers staged assemblies into the component store and verifies the result.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from common.command_utils import get_symbols, log_message
from provisioner.config_models import AppSettings

from .errors import RegistrationVerificationError
from .stores import ComponentStore

module_logger = logging.getLogger(__name__)


class RegistrationResult(str, Enum):
    REGISTERED = "registered"
    SKIPPED = "skipped"
    NOT_STAGED = "not_staged"


class ComponentRegistrar:
    """
    Registers files from the staging directory with the registration tool.

    The tool's exit status is not trusted; every registration is confirmed
    by querying the component store afterwards.
    """

    def __init__(
        self,
        component_store: ComponentStore,
        tool_path: Path,
        app_settings: Optional[AppSettings] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            component_store: The store to register into and verify against.
            tool_path: Path of the registration utility.
            app_settings: Settings providing log symbols.
            logger: Optional logger instance.
        """
        self.component_store = component_store
        self.tool_path = Path(tool_path)
        self.app_settings = app_settings
        self.logger = logger or module_logger

    def register(
        self, staging_dir: Path, file_name: str, skip_if_present: bool = False
    ) -> RegistrationResult:
        """
        Register `staging_dir/file_name` into the component store.

        Args:
            staging_dir: Directory holding the staged file.
            file_name: Name of the file to register.
            skip_if_present: Leave the store untouched if it already holds
                a component with this name.

        Returns:
            NOT_STAGED if the file is missing from staging, SKIPPED if it was
            already present and skipping was requested, REGISTERED otherwise.

        Raises:
            RegistrationVerificationError: If the store does not list the file
                after the tool has run.
        """
        symbols = get_symbols(self.app_settings)
        staged = Path(staging_dir) / file_name

        if not staged.is_file():
            log_message(
                f"{symbols.get('warning', '!')} {file_name} was not found in {staging_dir}. Not registering it.",
                "warning",
                self.logger,
                self.app_settings,
            )
            return RegistrationResult.NOT_STAGED

        if skip_if_present and self.component_store.contains(file_name):
            log_message(
                f"{symbols.get('info', 'ℹ️')} {file_name} is already in the component store. Skipping registration.",
                "info",
                self.logger,
                self.app_settings,
            )
            return RegistrationResult.SKIPPED

        result = self.component_store.install(self.tool_path, staged)

        if not self.component_store.contains(file_name):
            raise RegistrationVerificationError(
                file_name,
                self.component_store.location,
                returncode=getattr(result, "returncode", None),
            )

        log_message(
            f"{symbols.get('success', '✅')} Registered {file_name} in {self.component_store.location}",
            "info",
            self.logger,
            self.app_settings,
        )
        return RegistrationResult.REGISTERED
