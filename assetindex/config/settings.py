# Path: assetindex/config/settings.py
# Purpose: Provide typed application configuration models.
# Layer: config.
# Details: Centralizes scan roots, output locations, and logging options for every builder.

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field


class GameAssetSettings(BaseModel):
    """Settings for the game-asset index builder."""

    cdn_dir: Path = Field(default=Path("game-assets/images"), description="Root directory scanned for images.")
    output_dir: Path = Field(default=Path("game-assets/images"), description="Directory receiving the index files.")
    index_filename: str = Field(default="image-index.json", description="Name of the primary index document.")
    search_index_filename: str = Field(
        default="image-search-index.json",
        description="Name of the object-keyed lookup document.",
    )
    base_path: str = Field(default="/images", description="Base path of the scanned tree as served by the CDN.")

    @property
    def index_path(self) -> Path:
        return self.output_dir / self.index_filename

    @property
    def search_index_path(self) -> Path:
        return self.output_dir / self.search_index_filename


class UserContentSettings(BaseModel):
    """Settings for the user-content index builder and purge workflow."""

    base_dir: Path = Field(
        default=Path("user-content/images"),
        description="Root directory holding uploaded images and their metadata sidecars.",
    )
    index_filename: str = Field(default="image-index.json", description="Name of the generated index document.")

    @property
    def index_path(self) -> Path:
        return self.base_dir / self.index_filename


class AppSettings(BaseModel):
    """Top-level settings shared across scripts."""

    game_assets: GameAssetSettings = Field(default_factory=GameAssetSettings)
    user_content: UserContentSettings = Field(default_factory=UserContentSettings)
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")
    log_dir: Optional[Path] = Field(default=None, description="Directory for rotating log files; console only if unset.")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppSettings":
        """Instantiate settings from environment variables when available."""

        env = os.environ if environ is None else environ
        game_assets = GameAssetSettings()
        if env.get("ASSETINDEX_CDN_DIR"):
            game_assets.cdn_dir = Path(env["ASSETINDEX_CDN_DIR"])
        if env.get("ASSETINDEX_OUTPUT_DIR"):
            game_assets.output_dir = Path(env["ASSETINDEX_OUTPUT_DIR"])

        user_content = UserContentSettings()
        if env.get("ASSETINDEX_USER_CONTENT_DIR"):
            user_content.base_dir = Path(env["ASSETINDEX_USER_CONTENT_DIR"])

        log_dir = env.get("ASSETINDEX_LOG_DIR")
        return cls(
            game_assets=game_assets,
            user_content=user_content,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
            log_dir=Path(log_dir) if log_dir else None,
        )


__all__ = ["AppSettings", "GameAssetSettings", "UserContentSettings"]
