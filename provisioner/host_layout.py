# provisioner/host_layout.py
# -*- coding: utf-8 -*-
"""
Architecture-dependent locations on the host.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict

from common.system_utils import is_64bit_host

from .config_models import AppSettings
from .manifests import ManifestList, RootKind


class HostLayout(BaseModel):
    """Paths and keys for one host, fixed for the whole run."""

    model_config = ConfigDict(frozen=True)

    is_64bit: bool
    program_files: Path
    registry_software_root: str
    runtime_root: Path
    component_store_root: Path

    def manifest_root(self, manifest: ManifestList) -> Path:
        """Directory a manifest's entries are found in and installed to."""
        if manifest.root_kind == RootKind.COMPONENT_STORE:
            return self.component_store_root
        if not manifest.relative_root:
            return self.program_files
        return self.program_files / manifest.relative_root

    def registry_key(self, relative_key: str) -> str:
        return f"{self.registry_software_root}\\{relative_key}"


def get_host_layout(
    app_settings: AppSettings, is_64bit: Optional[bool] = None
) -> HostLayout:
    """
    Build the layout for this host.

    64-bit hosts use the 32-bit program files directory and the WOW64 view of
    the configuration store; 32-bit hosts use the native ones.

    Args:
        app_settings: The application settings.
        is_64bit: Override for the architecture probe.
    """
    if is_64bit is None:
        is_64bit = is_64bit_host()

    host = app_settings.host
    registry = app_settings.registry
    if is_64bit:
        program_files = host.program_files_x86
        software_root = f"{registry.machine_root}\\{registry.wow64_node}"
    else:
        program_files = host.program_files
        software_root = registry.machine_root

    return HostLayout(
        is_64bit=is_64bit,
        program_files=Path(program_files),
        registry_software_root=software_root,
        runtime_root=Path(host.runtime_root),
        component_store_root=Path(host.component_store_root),
    )
