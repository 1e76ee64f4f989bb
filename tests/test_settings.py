from __future__ import annotations

from pathlib import Path

from assetindex.common.time_utils import isoformat_utc, parse_timestamp
from assetindex.config import AppSettings


def test_defaults() -> None:
    settings = AppSettings.from_env({})

    assert settings.game_assets.index_path == Path("game-assets/images/image-index.json")
    assert settings.game_assets.search_index_path == Path("game-assets/images/image-search-index.json")
    assert settings.user_content.index_path == Path("user-content/images/image-index.json")
    assert settings.log_level == "INFO"
    assert settings.log_dir is None


def test_environment_overrides() -> None:
    settings = AppSettings.from_env(
        {
            "ASSETINDEX_CDN_DIR": "/srv/cdn",
            "ASSETINDEX_OUTPUT_DIR": "/srv/out",
            "ASSETINDEX_USER_CONTENT_DIR": "/srv/uploads",
            "LOG_LEVEL": "debug",
            "ASSETINDEX_LOG_DIR": "/var/log/assetindex",
        }
    )

    assert settings.game_assets.cdn_dir == Path("/srv/cdn")
    assert settings.game_assets.output_dir == Path("/srv/out")
    assert settings.user_content.base_dir == Path("/srv/uploads")
    assert settings.log_level == "DEBUG"
    assert settings.log_dir == Path("/var/log/assetindex")


def test_timestamps_round_trip_to_millisecond_utc() -> None:
    parsed = parse_timestamp("2025-01-01T12:30:45.678+02:00")

    assert isoformat_utc(parsed) == "2025-01-01T10:30:45.678Z"
    assert parse_timestamp("2025-01-01").tzinfo is not None
    assert parse_timestamp("not a date") is None
    assert parse_timestamp(None) is None
