# Path: assetindex/core/models/__init__.py
# Purpose: Package initializer for domain model definitions.
# Layer: core/models.
# Details: Exposes dataclasses for index documents and the sidecar schema.

from .domain import (
    BuildResult,
    Dimensions,
    GameAssetEntry,
    GameAssetIndex,
    UserContentEntry,
    UserContentIndex,
)
from .sidecar import ImageMetadata, SidecarDimensions

__all__ = [
    "BuildResult",
    "Dimensions",
    "GameAssetEntry",
    "GameAssetIndex",
    "ImageMetadata",
    "SidecarDimensions",
    "UserContentEntry",
    "UserContentIndex",
]
