# tests/conftest.py
import logging
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from provisioner.config_models import AppSettings, HostSettings
from provisioner.engine.stores import ComponentStore
from provisioner.host_layout import get_host_layout


class FakeConfigStore:
    """In-memory stand-in for the registry, counting writes."""

    def __init__(self, values: Optional[Dict[Tuple[str, str], str]] = None):
        # Keyed by (key, value name); the default value uses name "".
        self.values: Dict[Tuple[str, str], str] = dict(values or {})
        self.writes: List[Tuple[str, str]] = []

    def get_default(self, key: str) -> Optional[str]:
        return self.values.get((key, ""))

    def get_value(self, key: str, value_name: str) -> Optional[str]:
        return self.values.get((key, value_name))

    def set_default(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        self.values[(key, "")] = value


class RecordingComponentStore(ComponentStore):
    """Component store whose registration tool copies the file into the store."""

    def __init__(self, root: Path, register_succeeds: bool = True):
        super().__init__(root)
        self.register_succeeds = register_succeeds
        self.installed: List[Path] = []

    def install(self, tool_path, component_path):
        component_path = Path(component_path)
        self.installed.append(component_path)
        if self.register_succeeds:
            destination = self.root / component_path.stem / "v4.0_11.0.0.0__b03f5f7f11d50a3a"
            destination.mkdir(parents=True, exist_ok=True)
            shutil.copy2(component_path, destination / component_path.name)
        return subprocess.CompletedProcess([str(tool_path)], 0, "", "")


@pytest.fixture
def app_settings(tmp_path):
    """Settings with every host location inside the test's temporary directory."""
    return AppSettings(
        staging_dir=tmp_path / "Files",
        host=HostSettings(
            program_files=str(tmp_path / "ProgramFiles"),
            program_files_x86=str(tmp_path / "ProgramFilesX86"),
            runtime_root=str(tmp_path / "Framework"),
            component_store_root=str(tmp_path / "GAC_MSIL"),
            runtime_version_prefix="v4.0",
        ),
    )


@pytest.fixture
def layout(app_settings):
    return get_host_layout(app_settings, is_64bit=True)


@pytest.fixture
def runtime_installed(layout):
    runtime_dir = layout.runtime_root / "v4.0.30319"
    runtime_dir.mkdir(parents=True)
    return runtime_dir


@pytest.fixture
def config_store():
    return FakeConfigStore()


@pytest.fixture
def component_store(layout):
    return RecordingComponentStore(layout.component_store_root)


@pytest.fixture
def restore_root_logging():
    """Undo handler and level changes made by setup_logging."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture
def failing_component_store(layout):
    return RecordingComponentStore(layout.component_store_root, register_succeeds=False)
