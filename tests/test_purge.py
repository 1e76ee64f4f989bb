from __future__ import annotations

from datetime import date, timezone
from pathlib import Path

import pytest

from assetindex.config import UserContentSettings
from assetindex.core.errors import InvalidCutoffError
from assetindex.core.purge import ImagePurger, parse_cutoff

from conftest import make_image, read_json, write_sidecar


@pytest.fixture
def content(tmp_path: Path) -> UserContentSettings:
    base = tmp_path / "user-content" / "images"
    make_image(base / "old.png")
    make_image(base / "old.webp")
    write_sidecar(base, "old", {"category": "misc", "uploadedAt": "2024-01-01T10:00:00Z"})
    make_image(base / "edge.jpg")
    write_sidecar(base, "edge", {"uploadDate": "2024-06-30T23:59:59.999Z"})
    make_image(base / "new.png")
    write_sidecar(base, "new", {"uploadDate": "2024-07-01T00:00:00Z"})
    make_image(base / "nodate.png")
    write_sidecar(base, "nodate", {"category": "misc"})
    (base / "broken-metadata.json").write_text("{", encoding="utf-8")
    return UserContentSettings(base_dir=base)


def test_parse_cutoff_is_end_of_day_utc() -> None:
    cutoff = parse_cutoff("2024-06-30")

    assert cutoff.date() == date(2024, 6, 30)
    assert (cutoff.hour, cutoff.minute, cutoff.second) == (23, 59, 59)
    assert cutoff.tzinfo == timezone.utc
    assert parse_cutoff(date(2024, 6, 30)) == cutoff


def test_parse_cutoff_rejects_garbage() -> None:
    with pytest.raises(InvalidCutoffError):
        parse_cutoff("last tuesday")


def test_plan_classifies_every_sidecar(content: UserContentSettings) -> None:
    plan = ImagePurger(content).plan("2024-06-30")

    assert sorted(candidate.image_id for candidate in plan.delete) == ["edge", "old"]
    assert [candidate.image_id for candidate in plan.keep] == ["new"]
    assert sorted(skipped.sidecar.name for skipped in plan.skipped) == [
        "broken-metadata.json",
        "nodate-metadata.json",
    ]
    old = next(candidate for candidate in plan.delete if candidate.image_id == "old")
    assert {path.name for path in old.files} == {"old.png", "old.webp", "old-metadata.json"}
    assert plan.bytes_to_free == sum(path.stat().st_size for c in plan.delete for path in c.files)


def test_dry_run_deletes_nothing(content: UserContentSettings) -> None:
    before = sorted(path.name for path in content.base_dir.iterdir())

    report = ImagePurger(content).run("2024-06-30", dry_run=True)

    assert sorted(path.name for path in content.base_dir.iterdir()) == before
    assert report.deleted_files == 0
    assert report.index_result is None
    summary = report.summary()
    assert "DRY RUN" in summary
    assert "Images to delete: 2" in summary
    assert "Skipped (no usable metadata): 2" in summary


def test_run_deletes_units_and_regenerates_index(content: UserContentSettings) -> None:
    report = ImagePurger(content).run("2024-06-30")

    remaining = sorted(path.name for path in content.base_dir.iterdir())
    assert remaining == [
        "broken-metadata.json",
        "image-index.json",
        "new-metadata.json",
        "new.png",
        "nodate-metadata.json",
        "nodate.png",
    ]
    assert report.deleted_files == 5
    assert report.bytes_freed > 0
    assert report.index_result is not None

    document = read_json(content.index_path)
    # "nodate" falls back to the generation time, so it sorts first.
    assert [entry["id"] for entry in document["images"]] == ["nodate", "new"]
    assert document["totalImages"] == 2


def test_run_with_nothing_expired_leaves_index_alone(content: UserContentSettings) -> None:
    report = ImagePurger(content).run("2020-01-01")

    assert report.plan.delete == []
    assert report.index_result is None
    assert not content.index_path.exists()


def _sidecar_only(tmp_path: Path, payload: dict) -> UserContentSettings:
    base = tmp_path / "uploads"
    make_image(base / "pic.png")
    write_sidecar(base, "pic", payload)
    return UserContentSettings(base_dir=base)


def test_uploaded_at_takes_precedence_over_upload_date(tmp_path: Path) -> None:
    settings = _sidecar_only(tmp_path, {"uploadedAt": "2023-01-01T00:00:00Z", "uploadDate": "2025-01-01"})

    plan = ImagePurger(settings).plan("2024-01-01")

    assert [candidate.image_id for candidate in plan.delete] == ["pic"]
    assert plan.keep == []


def test_upload_date_kept_when_uploaded_at_is_later(tmp_path: Path) -> None:
    settings = _sidecar_only(tmp_path, {"uploadedAt": "2025-01-01T00:00:00Z", "uploadDate": "2023-01-01"})

    plan = ImagePurger(settings).plan("2024-01-01")

    assert [candidate.image_id for candidate in plan.keep] == ["pic"]
    assert plan.delete == []


def test_unparsable_uploaded_at_falls_back_to_upload_date(tmp_path: Path) -> None:
    settings = _sidecar_only(tmp_path, {"uploadedAt": "yesterday", "uploadDate": "2023-01-01"})

    plan = ImagePurger(settings).plan("2024-01-01")

    assert [candidate.image_id for candidate in plan.delete] == ["pic"]
    assert plan.skipped == []


def test_both_dates_unparsable_is_skipped(tmp_path: Path) -> None:
    settings = _sidecar_only(tmp_path, {"uploadedAt": "yesterday", "uploadDate": "last week"})

    plan = ImagePurger(settings).plan("2024-01-01")

    [skipped] = plan.skipped
    assert "yesterday" in skipped.reason and "last week" in skipped.reason


def test_failed_image_delete_keeps_sidecar(content: UserContentSettings, monkeypatch) -> None:
    real_unlink = Path.unlink

    def guarded_unlink(self: Path, *args, **kwargs) -> None:
        if self.name == "old.png":
            raise PermissionError(13, "Permission denied", str(self))
        real_unlink(self, *args, **kwargs)

    monkeypatch.setattr(Path, "unlink", guarded_unlink)

    report = ImagePurger(content).run("2024-06-30")

    assert (content.base_dir / "old.png").exists()
    assert (content.base_dir / "old-metadata.json").exists()
    assert not (content.base_dir / "edge.jpg").exists()
    assert report.failed_units == ["old"]
    assert report.failed_files == 1
    assert "Images that could not be deleted: 1" in report.summary()
    ids = [entry["id"] for entry in read_json(content.index_path)["images"]]
    assert "old" in ids
    assert "edge" not in ids
