# Path: assetindex/scripts/build_game_asset_index.py
# Purpose: CLI tool to scan the game-asset CDN tree and build its image indexes.
# Layer: scripts.
# Details: Wires settings, logging, and GameAssetIndexBuilder; exits 1 only on fatal errors.

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from assetindex.common.logging import configure_logging, get_logger
from assetindex.config import AppSettings
from assetindex.core.errors import AssetIndexError
from assetindex.core.indexing.index_builder import GameAssetIndexBuilder

log = get_logger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Build image-index.json and image-search-index.json for the game assets."""

    parser = argparse.ArgumentParser(description="Build the game asset image index")
    parser.add_argument("--cdn-dir", type=Path, default=None, help="Path to CDN image directory (default: game-assets/images)")
    parser.add_argument("--output-dir", type=Path, default=None, help="Path to output directory (default: game-assets/images)")
    args = parser.parse_args(argv)

    settings = AppSettings.from_env()
    if args.cdn_dir is not None:
        settings.game_assets.cdn_dir = args.cdn_dir
    if args.output_dir is not None:
        settings.game_assets.output_dir = args.output_dir
    configure_logging(settings.log_level, settings.log_dir)

    try:
        GameAssetIndexBuilder(settings.game_assets).build()
    except (AssetIndexError, OSError) as exc:
        log.error("Fatal error: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
