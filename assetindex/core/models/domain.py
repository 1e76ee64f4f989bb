# Path: assetindex/core/models/domain.py
# Purpose: Define domain models shared across indexing and purge workflows.
# Layer: core/models.
# Details: Lightweight dataclasses that serialize to the JSON schemas consumed by the front end.

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

INDEX_VERSION = "1.0"


@dataclass(frozen=True)
class Dimensions:
    """Pixel size of a raster image."""

    width: int
    height: int

    def to_dict(self) -> Dict[str, int]:
        return {"width": self.width, "height": self.height}

    @classmethod
    def zero(cls) -> "Dimensions":
        return cls(width=0, height=0)


@dataclass
class GameAssetEntry:
    """Metadata describing one image found under the game-asset tree."""

    path: str
    filename: str
    category: str
    filesize: int
    keywords: List[str]
    last_modified: str
    dimensions: Optional[Dimensions] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "path": self.path,
            "filename": self.filename,
            "category": self.category,
            "filesize": self.filesize,
            "keywords": list(self.keywords),
            "lastModified": self.last_modified,
        }
        if self.dimensions is not None:
            payload["dimensions"] = self.dimensions.to_dict()
        return payload


@dataclass
class UserContentEntry:
    """Metadata describing one uploaded image and its generated variants."""

    id: str
    filename: str
    name: str
    description: str
    path: Optional[str]
    webp_path: Optional[str]
    category: str
    tags: List[Any]
    dimensions: Dimensions
    filesize: int
    uploaded_by: str
    upload_date: str
    format: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "filename": self.filename,
            "name": self.name,
            "description": self.description,
            "path": self.path,
            "webpPath": self.webp_path,
            "category": self.category,
            "tags": list(self.tags),
            "dimensions": self.dimensions.to_dict(),
            "filesize": self.filesize,
            "uploadedBy": self.uploaded_by,
            "uploadDate": self.upload_date,
            "format": self.format,
        }


@dataclass
class GameAssetIndex:
    """The game-asset ``image-index.json`` document."""

    generated_at: str
    base_path: str = "/images"
    images: List[GameAssetEntry] = field(default_factory=list)
    version: str = INDEX_VERSION

    @property
    def total_images(self) -> int:
        return len(self.images)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "path": self.base_path,
            "totalImages": self.total_images,
            "generatedAt": self.generated_at,
            "images": [image.to_dict() for image in self.images],
        }

    def to_search_dict(self) -> Dict[str, Any]:
        """Object-keyed form of the same entries, for direct lookup by path, category, or keyword."""

        images: Dict[str, Dict[str, Any]] = {}
        by_category: Dict[str, List[str]] = {}
        by_keyword: Dict[str, List[str]] = {}
        for image in self.images:
            item: Dict[str, Any] = {
                "filename": image.filename,
                "category": image.category,
                "keywords": list(image.keywords),
            }
            if image.dimensions is not None:
                item["dimensions"] = image.dimensions.to_dict()
            images[image.path] = item
            by_category.setdefault(image.category, []).append(image.path)
            for keyword in image.keywords:
                bucket = by_keyword.setdefault(keyword.lower(), [])
                if image.path not in bucket:
                    bucket.append(image.path)

        return {
            "version": self.version,
            "path": self.base_path,
            "totalImages": self.total_images,
            "generatedAt": self.generated_at,
            "images": images,
            "byCategory": by_category,
            "byKeyword": by_keyword,
        }


@dataclass
class UserContentIndex:
    """The user-content ``image-index.json`` document."""

    generated_date: str
    images: List[UserContentEntry] = field(default_factory=list)
    version: str = INDEX_VERSION

    @property
    def total_images(self) -> int:
        return len(self.images)

    @property
    def by_category(self) -> Dict[str, List[str]]:
        buckets: Dict[str, List[str]] = {}
        for image in self.images:
            buckets.setdefault(image.category, []).append(image.id)
        return buckets

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "totalImages": self.total_images,
            "generatedDate": self.generated_date,
            "images": [image.to_dict() for image in self.images],
            "byCategory": self.by_category,
        }


@dataclass
class BuildResult:
    """Outcome of a single builder run."""

    output_path: Path
    total_images: int
    processed: int
    failed: int
    categories: Dict[str, int] = field(default_factory=dict)
    extra_outputs: List[Path] = field(default_factory=list)
