# Path: assetindex/scripts/generate_image_index.py
# Purpose: CLI tool to regenerate the user-content image index from metadata sidecars.
# Layer: scripts.
# Details: Runs against the conventional user-content path (overridable through the environment).

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from assetindex.common.logging import configure_logging, get_logger
from assetindex.config import AppSettings
from assetindex.core.errors import AssetIndexError
from assetindex.core.indexing.index_builder import UserContentIndexBuilder

log = get_logger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Write user-content/images/image-index.json."""

    parser = argparse.ArgumentParser(description="Generate the user-content image index")
    parser.parse_args(argv)

    settings = AppSettings.from_env()
    configure_logging(settings.log_level, settings.log_dir)

    try:
        UserContentIndexBuilder(settings.user_content).build()
    except (AssetIndexError, OSError) as exc:
        log.error("Fatal error: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
