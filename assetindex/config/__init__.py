# Path: assetindex/config/__init__.py
# Purpose: Package initializer for configuration module.
# Layer: config.
# Details: Exposes settings models for application-wide configuration.

from .settings import AppSettings, GameAssetSettings, UserContentSettings

__all__ = ["AppSettings", "GameAssetSettings", "UserContentSettings"]
