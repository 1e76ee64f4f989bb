# Path: assetindex/core/purge/purger.py
# Purpose: Delete uploaded images whose metadata upload date is on or before a cutoff.
# Layer: core/purge.
# Details: Classifies every sidecar as delete/keep/skipped, deletes whole units, then rebuilds the index.

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import List, Optional, Union

from assetindex.common.logging import get_logger
from assetindex.common.time_utils import isoformat_utc, parse_timestamp
from assetindex.config.settings import UserContentSettings
from assetindex.core.errors import InvalidCutoffError, MetadataError, ScanRootNotFoundError
from assetindex.core.indexing.index_builder import UserContentIndexBuilder
from assetindex.core.indexing.metadata import PRIMARY_EXTENSIONS, WEBP_EXTENSION
from assetindex.core.indexing.scanner import ImageScanner
from assetindex.core.models.domain import BuildResult
from assetindex.core.models.sidecar import ImageMetadata, image_id_for

log = get_logger(__name__)


def parse_cutoff(value: Union[str, date]) -> datetime:
    """Return the last instant (UTC) of the given day; the cutoff is inclusive."""

    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        try:
            value = date.fromisoformat(str(value).strip())
        except ValueError as exc:
            raise InvalidCutoffError(f"Invalid cutoff date {value!r}; expected YYYY-MM-DD") from exc
    return datetime.combine(value, time.max, tzinfo=timezone.utc)


@dataclass
class PurgeCandidate:
    """One uploaded image together with every file that belongs to it."""

    image_id: str
    sidecar: Path
    uploaded_at: datetime
    files: List[Path]
    size_bytes: int


@dataclass
class SkippedSidecar:
    """A sidecar that cannot be classified and is therefore never deleted."""

    sidecar: Path
    reason: str


@dataclass
class PurgePlan:
    cutoff: datetime
    delete: List[PurgeCandidate] = field(default_factory=list)
    keep: List[PurgeCandidate] = field(default_factory=list)
    skipped: List[SkippedSidecar] = field(default_factory=list)

    @property
    def bytes_to_free(self) -> int:
        return sum(candidate.size_bytes for candidate in self.delete)


@dataclass
class PurgeReport:
    """Result of a purge run, including what a dry run would have done."""

    plan: PurgePlan
    dry_run: bool
    deleted_files: int = 0
    bytes_freed: int = 0
    failed_files: int = 0
    failed_units: List[str] = field(default_factory=list)
    index_result: Optional[BuildResult] = None

    def summary(self) -> str:
        plan = self.plan
        lines = [
            "=== Image Purge Summary ===",
            f"Mode: {'DRY RUN' if self.dry_run else 'DELETE'}",
            f"Cutoff: {isoformat_utc(plan.cutoff)} (inclusive)",
            f"Images to delete: {len(plan.delete)}",
            f"Images to keep: {len(plan.keep)}",
            f"Skipped (no usable metadata): {len(plan.skipped)}",
        ]
        if self.dry_run:
            lines.append(f"Space that would be freed: {_format_bytes(plan.bytes_to_free)}")
        else:
            lines.append(f"Files deleted: {self.deleted_files}")
            lines.append(f"Space freed: {_format_bytes(self.bytes_freed)}")
            if self.failed_units:
                lines.append(f"Images that could not be deleted: {len(self.failed_units)}")
                lines.extend(f"  ! {image_id}" for image_id in self.failed_units)
        for candidate in plan.delete:
            lines.append(f"  - {candidate.image_id} (uploaded {isoformat_utc(candidate.uploaded_at)})")
        for skipped in plan.skipped:
            lines.append(f"  ? {skipped.sidecar}: {skipped.reason}")
        return "\n".join(lines)


def _format_bytes(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.2f} KB"
    return f"{size / 1024 / 1024:.2f} MB"


class ImagePurger:
    """Remove expired user uploads based on the upload date stored in their sidecars."""

    def __init__(self, settings: UserContentSettings, index_builder: Optional[UserContentIndexBuilder] = None) -> None:
        self.settings = settings
        self.scanner = ImageScanner(settings.base_dir)
        self.index_builder = index_builder or UserContentIndexBuilder(settings)

    def plan(self, cutoff: Union[str, date]) -> PurgePlan:
        """Classify every sidecar under the user-content root without touching the filesystem."""

        plan = PurgePlan(cutoff=parse_cutoff(cutoff))
        if not self.settings.base_dir.is_dir():
            raise ScanRootNotFoundError(self.settings.base_dir)

        for sidecar in self.scanner.scan_metadata():
            try:
                metadata = ImageMetadata.from_file(sidecar)
            except MetadataError as exc:
                log.warning("Skipping %s: %s", sidecar, exc.reason)
                plan.skipped.append(SkippedSidecar(sidecar=sidecar, reason=f"invalid metadata: {exc.reason}"))
                continue

            raw_dates = [value for value in (metadata.uploaded_at, metadata.upload_date) if value]
            if not raw_dates:
                plan.skipped.append(SkippedSidecar(sidecar=sidecar, reason="no uploadedAt/uploadDate field"))
                continue
            uploaded_at = next((parsed for parsed in map(parse_timestamp, raw_dates) if parsed), None)
            if uploaded_at is None:
                reason = "unparsable upload date " + ", ".join(repr(value) for value in raw_dates)
                plan.skipped.append(SkippedSidecar(sidecar=sidecar, reason=reason))
                continue

            candidate = self._candidate(sidecar, uploaded_at)
            if uploaded_at <= plan.cutoff:
                plan.delete.append(candidate)
            else:
                plan.keep.append(candidate)

        return plan

    def run(self, cutoff: Union[str, date], dry_run: bool = False) -> PurgeReport:
        """Purge images uploaded on or before ``cutoff``; a dry run only reports."""

        plan = self.plan(cutoff)
        report = PurgeReport(plan=plan, dry_run=dry_run)
        log.info(
            "Found %d images to delete, %d to keep, %d skipped",
            len(plan.delete),
            len(plan.keep),
            len(plan.skipped),
        )

        if dry_run or not plan.delete:
            return report

        for candidate in plan.delete:
            if self._delete_unit(candidate, report):
                log.info("Deleted %s", candidate.image_id)
            else:
                report.failed_units.append(candidate.image_id)

        log.info("Regenerating image index...")
        report.index_result = self.index_builder.build()
        return report

    @staticmethod
    def _delete_unit(candidate: PurgeCandidate, report: PurgeReport) -> bool:
        """Delete image files first and the sidecar last; stop at the first failure so the sidecar survives."""

        for path in candidate.files:
            try:
                size = path.stat().st_size
                path.unlink()
            except FileNotFoundError:
                continue
            except OSError as exc:
                log.error("Could not delete %s, keeping %s: %s", path, candidate.sidecar.name, exc)
                report.failed_files += 1
                return False
            report.deleted_files += 1
            report.bytes_freed += size
        return True

    @staticmethod
    def _candidate(sidecar: Path, uploaded_at: datetime) -> PurgeCandidate:
        image_id = image_id_for(sidecar)
        directory = sidecar.parent
        names = [f"{image_id}{ext}" for ext in PRIMARY_EXTENSIONS] + [f"{image_id}{WEBP_EXTENSION}"]
        files = [directory / name for name in names if (directory / name).is_file()]
        files.append(sidecar)
        return PurgeCandidate(
            image_id=image_id,
            sidecar=sidecar,
            uploaded_at=uploaded_at,
            files=files,
            size_bytes=sum(path.stat().st_size for path in files),
        )
