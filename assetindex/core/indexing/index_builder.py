# Path: assetindex/core/indexing/index_builder.py
# Purpose: Build the game-asset and user-content JSON index documents.
# Layer: core/indexing.
# Details: Scan -> extract per file -> assemble -> write, with per-item failures counted, not raised.

from __future__ import annotations

import json
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from tqdm import tqdm

from assetindex.common.logging import get_logger
from assetindex.common.time_utils import parse_timestamp, utc_now_iso
from assetindex.config.settings import GameAssetSettings, UserContentSettings
from assetindex.core.errors import ScanRootNotFoundError
from assetindex.core.models.domain import (
    BuildResult,
    GameAssetEntry,
    GameAssetIndex,
    UserContentEntry,
    UserContentIndex,
)
from .metadata import GameAssetExtractor, UserContentExtractor
from .scanner import ImageScanner

log = get_logger(__name__)


def write_json(path: Path, payload: Dict[str, Any]) -> int:
    """Write ``payload`` as pretty-printed UTF-8 JSON and return the file size in bytes."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return path.stat().st_size


def sort_newest_first(images: List[UserContentEntry]) -> List[UserContentEntry]:
    """Order entries by upload date, newest first; ties keep input order, unparsable dates go last."""

    def key(entry: UserContentEntry) -> Tuple[bool, float]:
        parsed: Optional[datetime] = parse_timestamp(entry.upload_date)
        return (parsed is not None, parsed.timestamp() if parsed else 0.0)

    return sorted(images, key=key, reverse=True)


class GameAssetIndexBuilder:
    """Scan a CDN image tree and write ``image-index.json`` plus its search form."""

    def __init__(self, settings: GameAssetSettings) -> None:
        self.settings = settings
        self.scanner = ImageScanner(settings.cdn_dir)
        self.extractor = GameAssetExtractor(settings.cdn_dir)

    def build(self) -> Optional[BuildResult]:
        """
        Run a full rebuild.

        Returns None when the tree holds no images; nothing is written then.
        Raises ScanRootNotFoundError when the CDN directory is missing.
        """

        settings = self.settings
        log.info("Scanning for images...")
        log.info("CDN directory: %s", settings.cdn_dir)
        log.info("Output directory: %s", settings.output_dir)

        if not settings.cdn_dir.is_dir():
            raise ScanRootNotFoundError(settings.cdn_dir)

        image_files = self.scanner.scan()
        log.info("Found %d images", len(image_files))
        if not image_files:
            log.warning("No images found in CDN directory")
            return None

        images: List[GameAssetEntry] = []
        skipped = 0
        for full_path in tqdm(image_files, desc="Indexing images", unit="img"):
            try:
                images.append(self.extractor.extract(full_path))
            except Exception as exc:  # noqa: BLE001 - a single bad file never aborts the batch
                log.error("Failed to process %s: %s", full_path, exc)
                skipped += 1

        log.info("Processed %d images", len(images))
        if skipped:
            log.warning("Skipped %d images due to errors", skipped)

        document = GameAssetIndex(generated_at=utc_now_iso(), base_path=settings.base_path, images=images)

        log.info("Writing %s...", settings.index_filename)
        index_size = write_json(settings.index_path, document.to_dict())
        log.info("Writing %s...", settings.search_index_filename)
        write_json(settings.search_index_path, document.to_search_dict())

        categories = Counter(image.category for image in images)
        log.info("Summary:")
        log.info("  Total images: %d", document.total_images)
        log.info("  Categories: %d", len(categories))
        log.info("  %s: %.2f MB", settings.index_filename, index_size / 1024 / 1024)
        log.info("Image index built successfully!")

        return BuildResult(
            output_path=settings.index_path,
            total_images=document.total_images,
            processed=len(images),
            failed=skipped,
            categories=dict(categories),
            extra_outputs=[settings.search_index_path],
        )


class UserContentIndexBuilder:
    """Read metadata sidecars of uploaded images and write their ``image-index.json``."""

    def __init__(self, settings: UserContentSettings) -> None:
        self.settings = settings
        self.scanner = ImageScanner(settings.base_dir)
        self.extractor = UserContentExtractor()

    def build(self) -> BuildResult:
        settings = self.settings
        log.info("=== Image Index Generation ===")
        log.info("Scanning %s for metadata files...", settings.base_dir)

        if not settings.base_dir.is_dir():
            raise ScanRootNotFoundError(settings.base_dir)

        metadata_files = self.scanner.scan_metadata()
        log.info("Found %d metadata files", len(metadata_files))

        if not metadata_files:
            log.warning("No images to index. Creating empty index...")
            write_json(settings.index_path, UserContentIndex(generated_date=utc_now_iso()).to_dict())
            log.info("Empty index created at %s", settings.index_path)
            return BuildResult(output_path=settings.index_path, total_images=0, processed=0, failed=0)

        images: List[UserContentEntry] = []
        errors = 0
        for meta_file in tqdm(metadata_files, desc="Indexing uploads", unit="img"):
            try:
                images.append(self.extractor.extract(meta_file))
            except Exception as exc:  # noqa: BLE001 - a single bad sidecar never aborts the batch
                log.error("Error processing %s: %s", meta_file, exc)
                errors += 1

        document = UserContentIndex(generated_date=utc_now_iso(), images=sort_newest_first(images))
        by_category = document.by_category
        write_json(settings.index_path, document.to_dict())

        log.info("=== Index Generation Complete ===")
        log.info("Generated index with %d images", document.total_images)
        log.info("Categories: %s", ", ".join(by_category))
        log.info("Errors: %d", errors)
        log.info("Output: %s", settings.index_path)

        log.info("=== Category Breakdown ===")
        for category, ids in sorted(by_category.items(), key=lambda item: len(item[1]), reverse=True):
            log.info("  %s: %d images", category, len(ids))

        return BuildResult(
            output_path=settings.index_path,
            total_images=document.total_images,
            processed=len(images),
            failed=errors,
            categories={category: len(ids) for category, ids in by_category.items()},
        )
