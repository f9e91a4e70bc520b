# provisioner/tasks.py
# -*- coding: utf-8 -*-
"""
Individual provisioning steps, run by the orchestrator for collect and install.

Each task receives the orchestrator's shared `context` and the
`app_settings`. Progress counters are kept in `context["summary"]`.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from common.command_utils import get_symbols, log_message
from common.file_utils import ensure_directory
from common.system_utils import is_feature_installed, require_runtime

from .config_models import AppSettings
from .engine.component_registrar import ComponentRegistrar, RegistrationResult
from .engine.config_path_registrar import set_discovery_path
from .engine.file_locator import SearchSpec, VersionReader, locate
from .engine.staging_copier import collect_into, install_from
from .engine.stores import RegistryConfigStore
from .host_layout import HostLayout
from .manifests import ManifestList

module_logger = logging.getLogger(__name__)


class RunSummary(BaseModel):
    """Counters reported at the end of a run."""

    collected: int = 0
    installed: int = 0
    missing: int = 0
    registered: int = 0
    skipped: int = 0
    notes: List[str] = Field(default_factory=list)

    def describe(self) -> str:
        return (
            f"collected={self.collected} installed={self.installed} "
            f"registered={self.registered} skipped={self.skipped} "
            f"missing={self.missing}"
        )


def _summary(context: Dict[str, Any]) -> RunSummary:
    return context.setdefault("summary", RunSummary())


def check_runtime(
    layout: HostLayout,
    context: Dict[str, Any],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """Fail the run unless the required runtime is installed."""
    version = require_runtime(
        layout.runtime_root,
        app_settings.host.runtime_version_prefix,
        app_settings,
        current_logger,
    )
    context["runtime_version"] = version
    return version


def prepare_staging(
    context: Dict[str, Any],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> Path:
    return ensure_directory(app_settings.staging_dir, app_settings, current_logger)


def collect_manifest(
    manifest: ManifestList,
    layout: HostLayout,
    context: Dict[str, Any],
    app_settings: AppSettings,
    version_reader: Optional[VersionReader] = None,
    current_logger: Optional[logging.Logger] = None,
) -> int:
    """
    Resolve every entry of `manifest` and copy it into the staging directory.

    Entries that cannot be found are logged and skipped. An entry matching
    more than one file raises AmbiguousMatchError, which ends the run.

    Returns:
        The number of entries collected.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    summary = _summary(context)
    root = layout.manifest_root(manifest)

    collected = 0
    for entry in manifest.entries:
        spec = SearchSpec(
            root=root,
            file_name=entry,
            recursive=manifest.recursive,
            version_prefix=manifest.version_prefix,
        )
        resolved = locate(spec, version_reader, app_settings, logger_to_use)
        if resolved is None:
            log_message(
                f"{symbols.get('warning', '!')} {entry} was not found under {root}. Skipping.",
                "warning",
                logger_to_use,
                app_settings,
            )
            summary.missing += 1
            continue
        collect_into(app_settings.staging_dir, resolved, app_settings, logger_to_use)
        collected += 1

    summary.collected += collected
    return collected


def install_manifest(
    manifest: ManifestList,
    layout: HostLayout,
    context: Dict[str, Any],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> int:
    """
    Copy every entry of `manifest` from the staging directory to its root
    on this host. Entries missing from staging are logged and skipped.

    Returns:
        The number of entries installed.
    """
    summary = _summary(context)
    target_dir = layout.manifest_root(manifest)

    installed = 0
    for entry in manifest.entries:
        if install_from(
            app_settings.staging_dir, entry, target_dir, app_settings, current_logger
        ):
            installed += 1
        else:
            summary.missing += 1

    summary.installed += installed
    return installed


def install_reference_assemblies(
    manifest: ManifestList,
    layout: HostLayout,
    config_store: RegistryConfigStore,
    context: Dict[str, Any],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Install the reference assemblies and publish their directory, unless the
    feature that ships them is already installed on this host.

    Returns:
        True if the assemblies were installed, False if the step was skipped.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    registry = app_settings.registry

    feature_key = layout.registry_key(registry.feature_key)
    if is_feature_installed(
        config_store, feature_key, registry.feature_value, app_settings, logger_to_use
    ):
        note = (
            f"Skipped {manifest.name}: the feature registered at "
            f"{feature_key} is already installed."
        )
        log_message(
            f"{symbols.get('info', 'ℹ️')} {note}",
            "info",
            logger_to_use,
            app_settings,
        )
        _summary(context).notes.append(note)
        return False

    install_manifest(manifest, layout, context, app_settings, logger_to_use)
    set_discovery_path(
        config_store,
        layout.registry_key(registry.discovery_key),
        str(layout.manifest_root(manifest)),
        app_settings,
        logger_to_use,
    )
    return True


def register_components(
    registrar: ComponentRegistrar,
    file_names: Sequence[str],
    skip_if_present: bool,
    context: Dict[str, Any],
    app_settings: AppSettings,
) -> Dict[str, RegistrationResult]:
    """
    Register each staged file into the component store.

    Returns:
        The outcome per file name.
    """
    summary = _summary(context)
    outcomes: Dict[str, RegistrationResult] = {}
    for file_name in file_names:
        outcome = registrar.register(
            app_settings.staging_dir, file_name, skip_if_present=skip_if_present
        )
        outcomes[file_name] = outcome
        if outcome == RegistrationResult.REGISTERED:
            summary.registered += 1
        elif outcome == RegistrationResult.SKIPPED:
            summary.skipped += 1
        else:
            summary.missing += 1
    return outcomes
