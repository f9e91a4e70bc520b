# provisioner/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the provisioner,
including defaults, type annotations, and descriptions.
It utilizes Pydantic for data validation and settings management.
"""

from pathlib import Path
from typing import Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Default Static Values (can be overridden by config file/env/cli) ---
# Directory holding provision.py. The tool is run from this checkout, not
# from an installed copy, so Files/ and provision.yaml sit beside it.
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent
STAGING_DIR_NAME_DEFAULT: str = "Files"
LOG_PREFIX_DEFAULT: str = "[PROVISION]"

PROGRAM_FILES_DEFAULT: str = r"C:\Program Files"
PROGRAM_FILES_X86_DEFAULT: str = r"C:\Program Files (x86)"
RUNTIME_ROOT_DEFAULT: str = r"C:\Windows\Microsoft.NET\Framework"
COMPONENT_STORE_ROOT_DEFAULT: str = r"C:\Windows\Microsoft.NET\assembly\GAC_MSIL"
RUNTIME_VERSION_PREFIX_DEFAULT: str = "v4.0"

REGISTRY_MACHINE_ROOT_DEFAULT: str = r"HKLM\SOFTWARE"
REGISTRY_WOW64_NODE_DEFAULT: str = "Wow6432Node"
DISCOVERY_KEY_DEFAULT: str = (
    r"Microsoft\.NETFramework\v4.0.30319\AssemblyFoldersEx"
    r"\VisualStudio11TestTools"
)
FEATURE_KEY_DEFAULT: str = r"Microsoft\DevDiv\vs\Servicing\11.0"
FEATURE_VALUE_DEFAULT: str = "Install"

REG_COMMAND_DEFAULT: str = "reg"
POWERSHELL_COMMAND_DEFAULT: str = "powershell"
REGISTRATION_TOOL_DEFAULT: str = "gacutil.exe"

SYMBOLS_DEFAULT: Dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "rocket": "🚀",
    "sparkles": "✨",
    "critical": "🔥",
    "debug": "🐛",
}


class HostSettings(BaseSettings):
    """Filesystem locations on the host being provisioned."""

    model_config = SettingsConfigDict(
        env_prefix="PROVISION_HOST_", extra="ignore"
    )

    program_files: str = Field(
        default=PROGRAM_FILES_DEFAULT,
        description="Program files root used on 32-bit hosts.",
    )
    program_files_x86: str = Field(
        default=PROGRAM_FILES_X86_DEFAULT,
        description="32-bit program files root used on 64-bit hosts.",
    )
    runtime_root: str = Field(
        default=RUNTIME_ROOT_DEFAULT,
        description="Directory holding one version-named subdirectory per installed runtime.",
    )
    component_store_root: str = Field(
        default=COMPONENT_STORE_ROOT_DEFAULT,
        description="Root of the system-wide component store.",
    )
    runtime_version_prefix: str = Field(
        default=RUNTIME_VERSION_PREFIX_DEFAULT,
        description="Prefix a runtime subdirectory name must start with for the run to proceed.",
    )


class RegistrySettings(BaseSettings):
    """Configuration store keys. Keys are relative to the software root."""

    model_config = SettingsConfigDict(
        env_prefix="PROVISION_REGISTRY_", extra="ignore"
    )

    machine_root: str = Field(
        default=REGISTRY_MACHINE_ROOT_DEFAULT,
        description="Software root of the machine-wide configuration store.",
    )
    wow64_node: str = Field(
        default=REGISTRY_WOW64_NODE_DEFAULT,
        description="Sub-key holding the 32-bit view on 64-bit hosts.",
    )
    discovery_key: str = Field(
        default=DISCOVERY_KEY_DEFAULT,
        description="Key whose default value lists the reference assembly directory.",
    )
    feature_key: str = Field(
        default=FEATURE_KEY_DEFAULT,
        description="Key probed to decide whether the primary feature is already installed.",
    )
    feature_value: str = Field(
        default=FEATURE_VALUE_DEFAULT,
        description="Named value under feature_key that must be set to a non-zero value.",
    )


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(env_prefix="PROVISION_", extra="ignore")

    staging_dir: Path = Field(
        default=PROJECT_ROOT / STAGING_DIR_NAME_DEFAULT,
        description="Directory holding the collected files between collect and install.",
    )
    log_prefix: str = Field(
        default=LOG_PREFIX_DEFAULT,
        description="Prefix for log messages from the provisioner.",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional path of a JSON-lines log file.",
    )
    reg_command: str = Field(
        default=REG_COMMAND_DEFAULT,
        description="Command used to query and update the configuration store.",
    )
    powershell_command: str = Field(
        default=POWERSHELL_COMMAND_DEFAULT,
        description="Command used to read product-version metadata from files.",
    )
    registration_tool: str = Field(
        default=REGISTRATION_TOOL_DEFAULT,
        description="File name of the registration utility inside the staging directory.",
    )

    host: HostSettings = Field(default_factory=HostSettings)
    registry: RegistrySettings = Field(default_factory=RegistrySettings)

    symbols: Dict[str, str] = Field(
        default_factory=lambda: dict(SYMBOLS_DEFAULT)
    )
