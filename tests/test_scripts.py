from __future__ import annotations

from pathlib import Path

from assetindex.scripts import build_game_asset_index, generate_image_index, purge_images

from conftest import make_image, read_json, write_sidecar


def test_build_game_asset_index_cli(tmp_path: Path) -> None:
    cdn = tmp_path / "cdn"
    out = tmp_path / "out"
    make_image(cdn / "icons" / "fire.png")

    code = build_game_asset_index.main(["--cdn-dir", str(cdn), "--output-dir", str(out)])

    assert code == 0
    assert read_json(out / "image-index.json")["totalImages"] == 1
    assert (out / "image-search-index.json").exists()


def test_build_game_asset_index_cli_reads_environment(tmp_path: Path, monkeypatch) -> None:
    cdn = tmp_path / "cdn"
    make_image(cdn / "icons" / "fire.png")
    monkeypatch.setenv("ASSETINDEX_CDN_DIR", str(cdn))
    monkeypatch.setenv("ASSETINDEX_OUTPUT_DIR", str(tmp_path / "env-out"))

    assert build_game_asset_index.main([]) == 0
    assert (tmp_path / "env-out" / "image-index.json").exists()


def test_build_game_asset_index_cli_missing_root(tmp_path: Path) -> None:
    code = build_game_asset_index.main(["--cdn-dir", str(tmp_path / "missing"), "--output-dir", str(tmp_path)])

    assert code == 1


def test_build_game_asset_index_cli_empty_root(tmp_path: Path) -> None:
    (tmp_path / "cdn").mkdir()

    code = build_game_asset_index.main(["--cdn-dir", str(tmp_path / "cdn"), "--output-dir", str(tmp_path / "out")])

    assert code == 0
    assert not (tmp_path / "out" / "image-index.json").exists()


def test_generate_image_index_cli_uses_conventional_path(tmp_path: Path, monkeypatch) -> None:
    base = tmp_path / "user-content" / "images"
    write_sidecar(base, "abc123", {"uploadDate": "2025-01-01"})
    monkeypatch.chdir(tmp_path)

    assert generate_image_index.main([]) == 0
    assert read_json(base / "image-index.json")["totalImages"] == 1


def test_generate_image_index_cli_missing_root(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert generate_image_index.main([]) == 1


def test_purge_images_cli(tmp_path: Path, monkeypatch, capsys) -> None:
    base = tmp_path / "uploads"
    make_image(base / "old.png")
    write_sidecar(base, "old", {"uploadDate": "2023-05-05"})
    monkeypatch.setenv("ASSETINDEX_USER_CONTENT_DIR", str(base))

    assert purge_images.main(["--before", "2024-01-01", "--dry-run"]) == 0
    assert "Images to delete: 1" in capsys.readouterr().out
    assert (base / "old.png").exists()

    assert purge_images.main(["--before", "2024-01-01"]) == 0
    assert not (base / "old.png").exists()
    assert read_json(base / "image-index.json")["totalImages"] == 0


def test_purge_images_cli_rejects_bad_date(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("ASSETINDEX_USER_CONTENT_DIR", str(tmp_path))

    assert purge_images.main(["--before", "soon"]) == 1
