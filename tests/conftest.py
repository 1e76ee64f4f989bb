from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Tuple

import pytest
from PIL import Image

ENV_VARS = (
    "ASSETINDEX_CDN_DIR",
    "ASSETINDEX_OUTPUT_DIR",
    "ASSETINDEX_USER_CONTENT_DIR",
    "ASSETINDEX_LOG_DIR",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    logger = logging.getLogger("assetindex")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def make_image(path: Path, size: Tuple[int, int] = (64, 64), color: str = "red") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color=color).save(path)
    return path


def write_sidecar(directory: Path, image_id: str, payload: Dict[str, Any]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{image_id}-metadata.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def read_json(path: Path) -> Dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))
