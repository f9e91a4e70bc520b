# provisioner/modes.py
# -*- coding: utf-8 -*-
"""
The two top-level provisioning modes.

collect: run on a configured development machine; gathers every manifest
    entry into the staging directory.
install: run on a build machine; copies the staged entries into place and
    registers assemblies with the component store.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

from common.orchestrator import Orchestrator

from .config_models import AppSettings
from .engine.component_registrar import ComponentRegistrar
from .engine.file_locator import VersionReader
from .engine.stores import ComponentStore, RegistryConfigStore
from .host_layout import HostLayout, get_host_layout
from .manifests import (
    COLLECT_ORDER,
    COMPONENT_STORE_ASSEMBLIES,
    INSTALL_COPY_ORDER,
    REFERENCE_ASSEMBLIES,
    TOOL_DEPENDENCY_ASSEMBLIES,
    ManifestList,
)
from .tasks import (
    RunSummary,
    check_runtime,
    collect_manifest,
    install_manifest,
    install_reference_assemblies,
    prepare_staging,
    register_components,
)

module_logger = logging.getLogger(__name__)


def _finish(orchestrator: Orchestrator, mode: str, logger: logging.Logger) -> RunSummary:
    summary = orchestrator.context.get("summary") or RunSummary()
    for note in summary.notes:
        logger.info(f"Note: {note}")
    logger.info(f"{mode.capitalize()} finished: {summary.describe()}")
    return summary


def run_collect(
    app_settings: AppSettings,
    logger: Optional[logging.Logger] = None,
    layout: Optional[HostLayout] = None,
    manifests: Sequence[ManifestList] = COLLECT_ORDER,
    version_reader: Optional[VersionReader] = None,
) -> RunSummary:
    """
    Gather every manifest entry from this machine into the staging directory.

    Args:
        app_settings: The application settings.
        logger: Optional logger instance.
        layout: Host layout; probed from the host when omitted.
        manifests: Manifest lists to collect, in order.
        version_reader: Override for reading product versions.

    Returns:
        The run summary. A fatal error exits the process instead.
    """
    logger = logger or module_logger
    layout = layout or get_host_layout(app_settings)

    orchestrator = Orchestrator(app_settings, logger)
    orchestrator.context["summary"] = RunSummary()
    orchestrator.add_task(
        "Check runtime", check_runtime, [layout], {"current_logger": logger}
    )
    orchestrator.add_task(
        "Prepare staging directory",
        prepare_staging,
        kwargs={"current_logger": logger},
    )
    for manifest in manifests:
        orchestrator.add_task(
            f"Collect {manifest.name}",
            collect_manifest,
            [manifest, layout],
            {"version_reader": version_reader, "current_logger": logger},
        )

    orchestrator.run()
    return _finish(orchestrator, "collect", logger)


def run_install(
    app_settings: AppSettings,
    logger: Optional[logging.Logger] = None,
    layout: Optional[HostLayout] = None,
    config_store: Optional[RegistryConfigStore] = None,
    component_store: Optional[ComponentStore] = None,
) -> RunSummary:
    """
    Install the staged files onto this machine.

    The reference assemblies are skipped when the feature that ships them
    is already present. Component store assemblies are registered on every
    run; tool dependencies only when missing from the store.

    Args:
        app_settings: The application settings.
        logger: Optional logger instance.
        layout: Host layout; probed from the host when omitted.
        config_store: Configuration store; the registry when omitted.
        component_store: Component store; the one at the layout's root when omitted.

    Returns:
        The run summary. A fatal error exits the process instead.
    """
    logger = logger or module_logger
    layout = layout or get_host_layout(app_settings)
    config_store = config_store or RegistryConfigStore(app_settings, logger)
    component_store = component_store or ComponentStore(
        layout.component_store_root, app_settings, logger
    )
    registrar = ComponentRegistrar(
        component_store,
        Path(app_settings.staging_dir) / app_settings.registration_tool,
        app_settings,
        logger,
    )

    orchestrator = Orchestrator(app_settings, logger)
    orchestrator.context["summary"] = RunSummary()
    orchestrator.add_task(
        "Check runtime", check_runtime, [layout], {"current_logger": logger}
    )
    orchestrator.add_task(
        f"Install {REFERENCE_ASSEMBLIES.name}",
        install_reference_assemblies,
        [REFERENCE_ASSEMBLIES, layout, config_store],
        {"current_logger": logger},
    )
    for manifest in INSTALL_COPY_ORDER:
        orchestrator.add_task(
            f"Install {manifest.name}",
            install_manifest,
            [manifest, layout],
            {"current_logger": logger},
        )
    orchestrator.add_task(
        f"Register {COMPONENT_STORE_ASSEMBLIES.name}",
        register_components,
        [registrar, COMPONENT_STORE_ASSEMBLIES.entries, False],
    )
    orchestrator.add_task(
        "Register tool dependency assemblies",
        register_components,
        [registrar, TOOL_DEPENDENCY_ASSEMBLIES, True],
    )

    orchestrator.run()
    return _finish(orchestrator, "install", logger)
