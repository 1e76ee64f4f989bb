# Path: assetindex/core/models/sidecar.py
# Purpose: Validate user-content metadata sidecar files.
# Layer: core/models.
# Details: Single parse point for "<id>-metadata.json"; unknown keys are kept but ignored.

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from assetindex.core.errors import MetadataError

METADATA_SUFFIX = "-metadata.json"


class SidecarDimensions(BaseModel):
    """Dimensions as recorded by the uploader, possibly incomplete."""

    model_config = ConfigDict(extra="allow")

    width: Optional[int] = None
    height: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.width) and bool(self.height)


class ImageMetadata(BaseModel):
    """Schema of a metadata sidecar written next to every uploaded image."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    filename: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[Any]] = None
    dimensions: Optional[SidecarDimensions] = None
    uploaded_by: Optional[str] = Field(default=None, alias="uploadedBy")
    upload_date: Optional[str] = Field(default=None, alias="uploadDate")
    uploaded_at: Optional[str] = Field(default=None, alias="uploadedAt")
    format: Optional[str] = None

    @classmethod
    def from_file(cls, path: Path) -> "ImageMetadata":
        """Read and validate a sidecar, raising MetadataError on any problem."""

        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise MetadataError(path, str(exc)) from exc
        try:
            return cls.model_validate_json(raw)
        except ValidationError as exc:
            raise MetadataError(path, f"{exc.error_count()} validation error(s): {exc.errors()[0]['msg']}") from exc


def image_id_for(sidecar: Path) -> str:
    """Return the image id encoded in a sidecar filename."""

    name = sidecar.name
    if name.endswith(METADATA_SUFFIX):
        return name[: -len(METADATA_SUFFIX)]
    return sidecar.stem
