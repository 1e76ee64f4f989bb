# Path: assetindex/core/errors.py
# Purpose: Define the exception hierarchy raised by indexing and purge workflows.
# Layer: core.
# Details: Fatal errors propagate to the CLI layer; per-item errors are counted by builders.

from __future__ import annotations

from pathlib import Path


class AssetIndexError(Exception):
    """Base class for all errors raised by assetindex."""


class ScanRootNotFoundError(AssetIndexError):
    """Raised when the directory a builder should scan does not exist."""

    def __init__(self, root: Path) -> None:
        super().__init__(f"Scan root not found: {root}")
        self.root = root


class MetadataError(AssetIndexError):
    """Raised when a metadata sidecar cannot be read or fails validation."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid metadata file {path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidCutoffError(AssetIndexError):
    """Raised when a purge cutoff date cannot be parsed."""
