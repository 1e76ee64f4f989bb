# Path: assetindex/core/indexing/metadata.py
# Purpose: Derive index entries from image files and metadata sidecars.
# Layer: core/indexing.
# Details: Category, dimensions, keywords, and file facts for both index variants.

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from PIL import Image

from assetindex.common.logging import get_logger
from assetindex.common.time_utils import from_epoch, utc_now_iso
from assetindex.core.models.domain import Dimensions, GameAssetEntry, UserContentEntry
from assetindex.core.models.sidecar import ImageMetadata, image_id_for

log = get_logger(__name__)

DEFAULT_CATEGORY = "uncategorized"
DEFAULT_USER_CATEGORY = "other"
VECTOR_EXTENSIONS = {".svg"}
IGNORED_PATH_SEGMENTS = {"images", "content"}

# Lookup order for the primary upload; webp is a generated variant and only a fallback.
PRIMARY_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")
WEBP_EXTENSION = ".webp"

_EXTENSION_RE = re.compile(r"\.[^/.]+$")
_DIGITS_RE = re.compile(r"\d+")
_WORD_SPLIT_RE = re.compile(r"[_-]")


def extract_category(relative_path: str) -> str:
    """
    Return the first segment of a root-relative path.

    Examples:
        spirits/Spirit_001.png -> "spirits"
        equipment/weapons/sword.png -> "equipment"
        logo.png -> "logo.png"
        "" -> "uncategorized"
    """

    parts = [part for part in relative_path.replace("\\", "/").split("/") if part]
    return parts[0] if parts else DEFAULT_CATEGORY


def decode_dimensions(path: Path) -> Dimensions:
    """Read pixel dimensions from the image header, raising on failure."""

    with Image.open(path) as img:
        width, height = img.size
    return Dimensions(width=int(width), height=int(height))


def read_dimensions(path: Path) -> Optional[Dimensions]:
    """Return the dimensions of a raster image, or None for vectors and unreadable files."""

    if path.suffix.lower() in VECTOR_EXTENSIONS:
        return None

    try:
        dimensions = decode_dimensions(path)
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        log.warning("Could not read dimensions for %s: %s", path, exc)
        return None

    if dimensions.width and dimensions.height:
        return dimensions
    return None


def generate_keywords(filename: str, category: str, image_path: str) -> List[str]:
    """Build the ordered, de-duplicated search keywords for one image."""

    keywords: Dict[str, None] = {}

    name_without_ext = _EXTENSION_RE.sub("", filename)
    keywords[name_without_ext] = None
    keywords[category] = None

    # Path segments allow searching by subdirectory.
    for part in image_path.split("/"):
        if part and part not in IGNORED_PATH_SEGMENTS and part != filename:
            keywords[part] = None

    lower_name = name_without_ext.lower()

    # "Spirit_001" -> "001"
    for number in _DIGITS_RE.findall(lower_name):
        keywords[number] = None

    for word in _WORD_SPLIT_RE.split(lower_name):
        if len(word) > 1:
            keywords[word] = None

    return list(keywords)


class GameAssetExtractor:
    """Build game-asset entries for files under a CDN image root."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def extract(self, full_path: Path) -> GameAssetEntry:
        relative = full_path.relative_to(self.root).as_posix()
        image_path = "/" + relative
        stats = full_path.stat()
        filename = full_path.name
        category = extract_category(relative)

        return GameAssetEntry(
            path=image_path,
            filename=filename,
            category=category,
            filesize=stats.st_size,
            keywords=generate_keywords(filename, category, image_path),
            last_modified=from_epoch(stats.st_mtime),
            dimensions=read_dimensions(full_path),
        )


@dataclass(frozen=True)
class ImageFiles:
    """Files on disk belonging to one uploaded image."""

    primary: Optional[Path]
    webp: Optional[Path]


def locate_image_files(directory: Path, image_id: str) -> ImageFiles:
    """Find the primary upload and its webp variant for ``image_id``."""

    webp = directory / f"{image_id}{WEBP_EXTENSION}"
    webp = webp if webp.is_file() else None

    primary = None
    for ext in PRIMARY_EXTENSIONS:
        candidate = directory / f"{image_id}{ext}"
        if candidate.is_file():
            primary = candidate
            break

    return ImageFiles(primary=primary or webp, webp=webp)


class UserContentExtractor:
    """Build user-content entries from metadata sidecars."""

    def extract(self, sidecar: Path) -> UserContentEntry:
        """Parse ``sidecar`` and resolve its image files; raises MetadataError on bad JSON."""

        metadata = ImageMetadata.from_file(sidecar)
        image_id = image_id_for(sidecar)
        files = locate_image_files(sidecar.parent, image_id)
        primary = files.primary

        filename = metadata.filename or image_id
        return UserContentEntry(
            id=image_id,
            filename=filename,
            name=metadata.name or filename,
            description=metadata.description or "",
            path=primary.as_posix() if primary else None,
            webp_path=files.webp.as_posix() if files.webp else None,
            category=metadata.category or DEFAULT_USER_CATEGORY,
            tags=list(metadata.tags or []),
            dimensions=self._dimensions(image_id, metadata, files),
            filesize=primary.stat().st_size if primary else 0,
            uploaded_by=metadata.uploaded_by or "unknown",
            upload_date=metadata.upload_date or metadata.uploaded_at or utc_now_iso(),
            format=metadata.format or (primary.suffix[1:] if primary else "unknown"),
        )

    @staticmethod
    def _dimensions(image_id: str, metadata: ImageMetadata, files: ImageFiles) -> Dimensions:
        recorded = metadata.dimensions
        if recorded is not None and recorded.is_complete:
            return Dimensions(width=int(recorded.width), height=int(recorded.height))

        image_file = files.primary or files.webp
        if image_file is None:
            log.warning("Image file not found for %s", image_id)
            return Dimensions.zero()

        try:
            dimensions = decode_dimensions(image_file)
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            log.warning("Could not extract dimensions for %s: %s", image_id, exc)
            return Dimensions.zero()

        log.debug("Extracted dimensions for %s: %sx%s", image_id, dimensions.width, dimensions.height)
        return dimensions
