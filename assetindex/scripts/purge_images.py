# Path: assetindex/scripts/purge_images.py
# Purpose: CLI tool to delete uploaded images older than a cutoff date.
# Layer: scripts.
# Details: Prints the purge summary; without --dry-run deletes files and regenerates the index.

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from assetindex.common.logging import configure_logging, get_logger
from assetindex.config import AppSettings
from assetindex.core.errors import AssetIndexError
from assetindex.core.purge import ImagePurger

log = get_logger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Purge user-content images uploaded on or before --before."""

    parser = argparse.ArgumentParser(description="Delete user-content images uploaded on or before a date")
    parser.add_argument("--before", required=True, help="Cutoff date (YYYY-MM-DD, inclusive, end of day UTC)")
    parser.add_argument("--dry-run", action="store_true", help="Report what would be deleted without deleting")
    args = parser.parse_args(argv)

    settings = AppSettings.from_env()
    configure_logging(settings.log_level, settings.log_dir)

    try:
        report = ImagePurger(settings.user_content).run(args.before, dry_run=args.dry_run)
    except (AssetIndexError, OSError) as exc:
        log.error("Fatal error: %s", exc)
        return 1

    print(report.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
