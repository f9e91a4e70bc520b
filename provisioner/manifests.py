# provisioner/manifests.py
# -*- coding: utf-8 -*-
"""
The fixed file lists moved from the development machine to the build machine.

Relative roots use forward slashes and are joined onto the program files
directory chosen for the host architecture.
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

TEST_TOOLS_VERSION_PREFIX: str = "11.0"


class RootKind(str, Enum):
    PROGRAM_FILES = "program_files"
    COMPONENT_STORE = "component_store"


class ManifestList(BaseModel):
    """A named, ordered set of entries found under a common root."""

    model_config = ConfigDict(frozen=True)

    name: str
    entries: Tuple[str, ...]
    root_kind: RootKind = RootKind.PROGRAM_FILES
    relative_root: str = ""
    recursive: bool = False
    version_prefix: Optional[str] = None


REFERENCE_ASSEMBLIES = ManifestList(
    name="reference assemblies",
    relative_root="Microsoft Visual Studio 11.0/Common7/IDE/PublicAssemblies",
    entries=(
        "Microsoft.VisualStudio.QualityTools.UnitTestFramework.dll",
        "Microsoft.VisualStudio.QualityTools.CodedUITestFramework.dll",
        "Microsoft.VisualStudio.TestTools.UITest.Common.dll",
        "Microsoft.VisualStudio.TestTools.UITest.Extension.dll",
        "Microsoft.VisualStudio.TestTools.UITesting.dll",
    ),
)

BUILD_EXTENSION_DIRECTORIES = ManifestList(
    name="build extension directories",
    relative_root="MSBuild/Microsoft/VisualStudio/v11.0",
    entries=(
        "Web",
        "WebApplications",
    ),
)

BUILD_EXTENSION_FILES = ManifestList(
    name="build extension files",
    relative_root="MSBuild/Microsoft/VisualStudio/v11.0/TeamTest",
    entries=("Microsoft.TeamTest.targets",),
)

COMPONENT_STORE_ASSEMBLIES = ManifestList(
    name="component store assemblies",
    root_kind=RootKind.COMPONENT_STORE,
    recursive=True,
    version_prefix=TEST_TOOLS_VERSION_PREFIX,
    entries=(
        "Microsoft.VisualStudio.QualityTools.Common.dll",
        "Microsoft.VisualStudio.QualityTools.ExecutionCommon.dll",
        "Microsoft.VisualStudio.QualityTools.Resource.dll",
        "Microsoft.VisualStudio.QualityTools.Tips.UnitTest.Adapter.dll",
        "Microsoft.VisualStudio.QualityTools.Tips.UnitTest.ObjectModel.dll",
    ),
)

# The registration utility itself. Installs run it from the staging directory.
UTILITY_FILES = ManifestList(
    name="utility files",
    relative_root="Microsoft SDKs/Windows/v8.0A/bin/NETFX 4.0 Tools",
    entries=(
        "gacutil.exe",
        "gacutil.exe.config",
        "1033",
    ),
)

# Reference assemblies the test tools load from the component store at run time.
TOOL_DEPENDENCY_ASSEMBLIES: Tuple[str, ...] = (
    "Microsoft.VisualStudio.QualityTools.UnitTestFramework.dll",
)

COLLECT_ORDER: Tuple[ManifestList, ...] = (
    REFERENCE_ASSEMBLIES,
    BUILD_EXTENSION_DIRECTORIES,
    BUILD_EXTENSION_FILES,
    COMPONENT_STORE_ASSEMBLIES,
    UTILITY_FILES,
)

# Copied unconditionally on install; the reference assemblies are handled apart.
INSTALL_COPY_ORDER: Tuple[ManifestList, ...] = (
    BUILD_EXTENSION_DIRECTORIES,
    BUILD_EXTENSION_FILES,
)
