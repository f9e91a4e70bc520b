# provisioner/engine/errors.py
# -*- coding: utf-8 -*-
"""
Exceptions raised by the provisioning engine.

A file that cannot be found is not an exception: it is logged as a warning
and processing moves on to the next entry. Everything below is fatal.
"""

from pathlib import Path
from typing import Optional, Sequence


class ProvisioningError(Exception):
    """Base class for fatal provisioning errors."""


class AmbiguousMatchError(ProvisioningError):
    """More than one file on disk resolves to the same manifest entry."""

    def __init__(
        self, file_name: str, root: Path, candidates: Sequence[Path]
    ):
        self.file_name = file_name
        self.root = root
        self.candidates = list(candidates)
        listing = ", ".join(str(c) for c in self.candidates)
        super().__init__(
            f"Found {len(self.candidates)} matches for '{file_name}' under "
            f"'{root}', expected at most one: {listing}"
        )


class RuntimeMissingError(ProvisioningError):
    """The required platform runtime is not installed."""

    def __init__(self, version_prefix: str, runtime_root: Path):
        self.version_prefix = version_prefix
        self.runtime_root = runtime_root
        super().__init__(
            f"Required runtime version '{version_prefix}' was not found "
            f"under '{runtime_root}'. Install it before running this tool."
        )


class RegistrationVerificationError(ProvisioningError):
    """The registration tool ran but the component store does not list the file."""

    def __init__(
        self,
        file_name: str,
        store_location: Path,
        returncode: Optional[int] = None,
    ):
        self.file_name = file_name
        self.store_location = store_location
        self.returncode = returncode
        super().__init__(
            f"Registration of '{file_name}' could not be verified: it is "
            f"not present in the component store at '{store_location}'."
        )


class ModeSelectionError(ProvisioningError):
    """Neither or both of the collect and install modes were requested."""
