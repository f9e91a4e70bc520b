# provisioner/engine/stores.py
# -*- coding: utf-8 -*-
"""
Access to the two system-wide stores the provisioner changes: the
component store and the configuration store.
"""

import logging
import re
import subprocess
from pathlib import Path
from typing import Optional

from common.command_utils import get_symbols, log_message, run_command
from provisioner.config_models import AppSettings

from .file_locator import SearchSpec, find_candidates

module_logger = logging.getLogger(__name__)

# Matches "    (Default)    REG_SZ    C:\some path" and "    Install    REG_DWORD    0x1"
_REG_VALUE_LINE = re.compile(r"^\s*(?P<name>.+?)\s{2,}(?P<type>REG_[A-Z_]+)(?:\s{2,}(?P<data>.*))?$")
# English reg.exe output; localized hosts print other text, read back as data.
_VALUE_NOT_SET = "(value not set)"


class ComponentStore:
    """
    Directory-backed store of shared components.

    Queried by walking the store root for a file name; changed only through
    the external registration tool.
    """

    def __init__(
        self,
        root: Path,
        app_settings: Optional[AppSettings] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.root = Path(root)
        self.app_settings = app_settings
        self.logger = logger or module_logger

    @property
    def location(self) -> Path:
        return self.root

    def contains(self, file_name: str) -> bool:
        """Return True if at least one component named `file_name` is present."""
        spec = SearchSpec(root=self.root, file_name=file_name, recursive=True)
        return bool(find_candidates(spec, current_logger=self.logger))

    def install(
        self, tool_path: Path, component_path: Path
    ) -> Optional[subprocess.CompletedProcess]:
        """
        Run the registration tool against `component_path`.

        Neither a non-zero exit status nor a missing tool is raised on; both
        are logged and callers verify the outcome with `contains`.

        Returns:
            The completed process, or None if the tool could not be started.
        """
        symbols = get_symbols(self.app_settings)
        try:
            result = run_command(
                [str(tool_path), "/i", str(component_path), "/silent"],
                self.app_settings,
                check=False,
                capture_output=True,
                current_logger=self.logger,
            )
        except FileNotFoundError:
            log_message(
                f"{symbols.get('warning', '!')} {tool_path} could not be run for "
                f"{Path(component_path).name}.",
                "warning",
                self.logger,
                self.app_settings,
            )
            return None
        if result.returncode != 0:
            log_message(
                f"{symbols.get('warning', '!')} {Path(tool_path).name} exited with code "
                f"{result.returncode} for {Path(component_path).name}.",
                "warning",
                self.logger,
                self.app_settings,
            )
        return result


class RegistryConfigStore:
    """Machine configuration store read and written through the `reg` tool."""

    def __init__(
        self,
        app_settings: Optional[AppSettings] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.app_settings = app_settings
        self.logger = logger or module_logger
        self.reg_command = (
            app_settings.reg_command if app_settings else "reg"
        )

    def _query(self, key: str, value_args: list) -> Optional[str]:
        result = run_command(
            [self.reg_command, "query", key, *value_args],
            self.app_settings,
            check=False,
            capture_output=True,
            current_logger=self.logger,
        )
        if result.returncode != 0:
            return None
        for line in (result.stdout or "").splitlines():
            match = _REG_VALUE_LINE.match(line)
            if match:
                data = (match.group("data") or "").strip()
                if data == _VALUE_NOT_SET:
                    return None
                return data
        return None

    def get_default(self, key: str) -> Optional[str]:
        """Return the default value of `key`, or None if the key or value is absent."""
        return self._query(key, ["/ve"])

    def get_value(self, key: str, value_name: str) -> Optional[str]:
        """Return the data of the named value under `key`, or None if absent."""
        return self._query(key, ["/v", value_name])

    def set_default(self, key: str, value: str) -> None:
        """Write `value` as the default string value of `key`, creating the key."""
        run_command(
            [self.reg_command, "add", key, "/ve", "/t", "REG_SZ", "/d", value, "/f"],
            self.app_settings,
            check=True,
            capture_output=True,
            current_logger=self.logger,
        )
