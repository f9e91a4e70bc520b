# tests/provisioner/test_modes.py
from pathlib import Path

import pytest

from provisioner.manifests import (
    BUILD_EXTENSION_DIRECTORIES,
    BUILD_EXTENSION_FILES,
    COMPONENT_STORE_ASSEMBLIES,
    REFERENCE_ASSEMBLIES,
    TOOL_DEPENDENCY_ASSEMBLIES,
    UTILITY_FILES,
)
from provisioner.modes import run_collect, run_install


STORE_VERSION_DIR = "v4.0_11.0.0.0__b03f5f7f11d50a3a"


def fake_version_reader(path: Path):
    """Versions are encoded in the component store directory name."""
    parent = path.parent.name
    if parent.startswith("v4.0_"):
        return parent[len("v4.0_"):].split("__")[0]
    return None


def populate_development_host(layout):
    for manifest in (REFERENCE_ASSEMBLIES, BUILD_EXTENSION_FILES, UTILITY_FILES):
        root = layout.manifest_root(manifest)
        root.mkdir(parents=True, exist_ok=True)
        for entry in manifest.entries:
            if entry == "1033":
                (root / entry).mkdir()
                (root / entry / "gacutlrc.dll").write_bytes(b"rc")
            else:
                (root / entry).write_bytes(b"payload")

    extensions_root = layout.manifest_root(BUILD_EXTENSION_DIRECTORIES)
    for entry in BUILD_EXTENSION_DIRECTORIES.entries:
        (extensions_root / entry).mkdir(parents=True)
        (extensions_root / entry / "Microsoft.Web.targets").write_text("<Project/>")

    for entry in COMPONENT_STORE_ASSEMBLIES.entries:
        store_dir = layout.component_store_root / Path(entry).stem / STORE_VERSION_DIR
        store_dir.mkdir(parents=True)
        (store_dir / entry).write_bytes(b"assembly")


def stage_everything(staging_dir: Path):
    staging_dir.mkdir(parents=True, exist_ok=True)
    for manifest in (
        REFERENCE_ASSEMBLIES,
        BUILD_EXTENSION_FILES,
        COMPONENT_STORE_ASSEMBLIES,
    ):
        for entry in manifest.entries:
            (staging_dir / entry).write_bytes(b"payload")
    for entry in BUILD_EXTENSION_DIRECTORIES.entries:
        (staging_dir / entry).mkdir()
        (staging_dir / entry / "Microsoft.Web.targets").write_text("<Project/>")
    (staging_dir / "gacutil.exe").write_bytes(b"tool")


# --- collect ---


def test_collect_stages_every_entry(app_settings, layout, runtime_installed):
    populate_development_host(layout)

    summary = run_collect(app_settings, layout=layout, version_reader=fake_version_reader)

    staging = app_settings.staging_dir
    assert (staging / "Microsoft.VisualStudio.TestTools.UITesting.dll").is_file()
    assert (staging / "WebApplications" / "Microsoft.Web.targets").is_file()
    assert (staging / "Microsoft.TeamTest.targets").is_file()
    assert (staging / "Microsoft.VisualStudio.QualityTools.Common.dll").is_file()
    assert (staging / "1033" / "gacutlrc.dll").is_file()
    assert summary.missing == 0
    assert summary.collected == sum(
        len(m.entries)
        for m in (
            REFERENCE_ASSEMBLIES,
            BUILD_EXTENSION_DIRECTORIES,
            BUILD_EXTENSION_FILES,
            COMPONENT_STORE_ASSEMBLIES,
            UTILITY_FILES,
        )
    )


def test_collect_skips_missing_entries(app_settings, layout, runtime_installed, caplog):
    summary = run_collect(app_settings, layout=layout, version_reader=fake_version_reader)

    assert summary.collected == 0
    assert summary.missing > 0
    assert app_settings.staging_dir.is_dir()
    assert "Microsoft.TeamTest.targets was not found under" in caplog.text


def test_collect_ignores_other_versions(app_settings, layout, runtime_installed):
    entry = COMPONENT_STORE_ASSEMBLIES.entries[0]
    old_dir = layout.component_store_root / Path(entry).stem / "v4.0_10.0.0.0__b03f5f7f11d50a3a"
    old_dir.mkdir(parents=True)
    (old_dir / entry).write_bytes(b"old")

    summary = run_collect(
        app_settings,
        layout=layout,
        manifests=(COMPONENT_STORE_ASSEMBLIES,),
        version_reader=fake_version_reader,
    )

    assert summary.collected == 0
    assert not (app_settings.staging_dir / entry).exists()


def test_collect_ambiguous_match_halts(app_settings, layout, runtime_installed):
    populate_development_host(layout)
    entry = COMPONENT_STORE_ASSEMBLIES.entries[0]
    second_dir = layout.component_store_root / Path(entry).stem / "v4.0_11.0.1.0__b03f5f7f11d50a3a"
    second_dir.mkdir(parents=True)
    (second_dir / entry).write_bytes(b"another build")

    with pytest.raises(SystemExit) as excinfo:
        run_collect(app_settings, layout=layout, version_reader=fake_version_reader)

    assert excinfo.value.code == 1
    # Lists before the failure were staged, later ones were not.
    assert (app_settings.staging_dir / "Microsoft.TeamTest.targets").is_file()
    assert not (app_settings.staging_dir / "gacutil.exe").exists()


def test_collect_requires_runtime(app_settings, layout):
    populate_development_host(layout)

    with pytest.raises(SystemExit) as excinfo:
        run_collect(app_settings, layout=layout, version_reader=fake_version_reader)

    assert excinfo.value.code == 1
    assert not app_settings.staging_dir.exists()


# --- install ---


def test_install_full_run(app_settings, layout, runtime_installed, config_store, component_store):
    stage_everything(app_settings.staging_dir)

    summary = run_install(
        app_settings,
        layout=layout,
        config_store=config_store,
        component_store=component_store,
    )

    reference_root = layout.manifest_root(REFERENCE_ASSEMBLIES)
    assert (reference_root / REFERENCE_ASSEMBLIES.entries[0]).is_file()
    assert (layout.manifest_root(BUILD_EXTENSION_DIRECTORIES) / "Web" / "Microsoft.Web.targets").is_file()
    assert (layout.manifest_root(BUILD_EXTENSION_FILES) / "Microsoft.TeamTest.targets").is_file()

    discovery_key = layout.registry_key(app_settings.registry.discovery_key)
    assert config_store.writes == [(discovery_key, str(reference_root))]
    assert discovery_key.startswith("HKLM\\SOFTWARE\\Wow6432Node\\")

    registered_names = [path.name for path in component_store.installed]
    assert registered_names == list(COMPONENT_STORE_ASSEMBLIES.entries) + list(
        TOOL_DEPENDENCY_ASSEMBLIES
    )
    assert summary.registered == len(registered_names)
    assert summary.missing == 0


def test_install_twice_does_not_rewrite_discovery_key(
    app_settings, layout, runtime_installed, config_store, component_store
):
    stage_everything(app_settings.staging_dir)
    run_install(app_settings, layout=layout, config_store=config_store, component_store=component_store)

    summary = run_install(
        app_settings, layout=layout, config_store=config_store, component_store=component_store
    )

    assert len(config_store.writes) == 1
    # Component store assemblies are always re-registered; tool dependencies are not.
    assert summary.registered == len(COMPONENT_STORE_ASSEMBLIES.entries)
    assert summary.skipped == len(TOOL_DEPENDENCY_ASSEMBLIES)


def test_install_skips_reference_assemblies_when_feature_present(
    app_settings, layout, runtime_installed, config_store, component_store
):
    stage_everything(app_settings.staging_dir)
    feature_key = layout.registry_key(app_settings.registry.feature_key)
    config_store.values[(feature_key, "Install")] = "0x1"

    summary = run_install(
        app_settings, layout=layout, config_store=config_store, component_store=component_store
    )

    assert config_store.writes == []
    assert not layout.manifest_root(REFERENCE_ASSEMBLIES).exists()
    assert (layout.manifest_root(BUILD_EXTENSION_FILES) / "Microsoft.TeamTest.targets").is_file()
    assert len(summary.notes) == 1
    assert "already installed" in summary.notes[0]


def test_install_with_empty_staging_completes(
    app_settings, layout, runtime_installed, config_store, component_store
):
    app_settings.staging_dir.mkdir()

    summary = run_install(
        app_settings, layout=layout, config_store=config_store, component_store=component_store
    )

    assert summary.installed == 0
    assert summary.registered == 0
    assert component_store.installed == []
    assert summary.missing == (
        len(REFERENCE_ASSEMBLIES.entries)
        + len(BUILD_EXTENSION_DIRECTORIES.entries)
        + len(BUILD_EXTENSION_FILES.entries)
        + len(COMPONENT_STORE_ASSEMBLIES.entries)
        + len(TOOL_DEPENDENCY_ASSEMBLIES)
    )


def test_install_fails_when_registration_is_not_verified(
    app_settings, layout, runtime_installed, config_store, failing_component_store
):
    stage_everything(app_settings.staging_dir)
    failing_store = failing_component_store

    with pytest.raises(SystemExit) as excinfo:
        run_install(
            app_settings, layout=layout, config_store=config_store, component_store=failing_store
        )

    assert excinfo.value.code == 1
    assert len(failing_store.installed) == 1


def test_install_requires_runtime(app_settings, layout, config_store, component_store):
    stage_everything(app_settings.staging_dir)

    with pytest.raises(SystemExit):
        run_install(
            app_settings, layout=layout, config_store=config_store, component_store=component_store
        )

    assert config_store.writes == []
    assert component_store.installed == []
