# provisioner/engine/file_locator.py
# -*- coding: utf-8 -*-
"""
Resolves a manifest entry to a single file or directory on disk.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict

from common import system_utils
from provisioner.config_models import AppSettings

from .errors import AmbiguousMatchError

module_logger = logging.getLogger(__name__)

VersionReader = Callable[[Path], Optional[str]]


class SearchSpec(BaseModel):
    """Where and how to look for one manifest entry."""

    model_config = ConfigDict(frozen=True)

    root: Path
    file_name: str
    recursive: bool = False
    version_prefix: Optional[str] = None


class ResolvedFile(BaseModel):
    """A manifest entry found on disk."""

    model_config = ConfigDict(frozen=True)

    path: Path
    version: Optional[str] = None


def _matching_paths(spec: SearchSpec) -> List[Path]:
    root = Path(spec.root)
    if not spec.recursive:
        candidate = root / spec.file_name
        return [candidate] if candidate.exists() else []

    if not root.is_dir():
        return []
    wanted = spec.file_name.lower()
    return sorted(p for p in root.rglob("*") if p.name.lower() == wanted)


def find_candidates(
    spec: SearchSpec,
    version_reader: Optional[VersionReader] = None,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> List[ResolvedFile]:
    """
    Find every path that satisfies `spec`.

    Non-recursive specs only check `root/file_name`. Recursive specs walk
    the whole tree under `root` and compare names case-insensitively. When
    `spec.version_prefix` is set, only candidates whose product version
    starts with it are kept; unversioned candidates are dropped.

    Args:
        spec: The search to perform.
        version_reader: Callable returning a path's product version. Defaults
            to reading the version resource through the host.
        app_settings: Application settings passed to the default version reader.
        current_logger: Optional logger instance.

    Returns:
        All matching candidates, sorted by path.
    """
    logger_to_use = current_logger if current_logger else module_logger
    paths = _matching_paths(spec)

    if spec.version_prefix is None:
        return [ResolvedFile(path=p) for p in paths]

    if version_reader is None:

        def version_reader(path: Path) -> Optional[str]:
            return system_utils.get_product_version(
                path, app_settings, logger_to_use
            )

    candidates = []
    for path in paths:
        version = version_reader(path)
        logger_to_use.debug(f"{path} has product version {version!r}")
        if version is not None and version.startswith(spec.version_prefix):
            candidates.append(ResolvedFile(path=path, version=version))
    return candidates


def locate(
    spec: SearchSpec,
    version_reader: Optional[VersionReader] = None,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> Optional[ResolvedFile]:
    """
    Resolve `spec` to at most one file.

    Returns:
        The single match, or None when nothing matches.

    Raises:
        AmbiguousMatchError: If more than one candidate matches.
    """
    candidates = find_candidates(
        spec, version_reader, app_settings, current_logger
    )
    if len(candidates) > 1:
        raise AmbiguousMatchError(
            spec.file_name, spec.root, [c.path for c in candidates]
        )
    return candidates[0] if candidates else None
