# Path: assetindex/core/indexing/__init__.py
# Purpose: Package initializer for indexing utilities.
# Layer: core/indexing.
# Details: Exposes scanning, metadata extraction, and index building helpers.

from .scanner import ImageScanner
from .metadata import GameAssetExtractor, UserContentExtractor
from .index_builder import GameAssetIndexBuilder, UserContentIndexBuilder

__all__ = [
    "ImageScanner",
    "GameAssetExtractor",
    "UserContentExtractor",
    "GameAssetIndexBuilder",
    "UserContentIndexBuilder",
]
