# Path: assetindex/common/logging.py
# Purpose: Configure console and optional rotating file loggers.
# Layer: common.
# Details: Modules log through children of the "assetindex" logger; scripts configure it once.

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

ROOT_LOGGER = "assetindex"


def _level_from_env(default: str = "INFO") -> int:
    return _LEVELS.get(os.getenv("LOG_LEVEL", default).upper(), logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the "assetindex" hierarchy."""

    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(level: Optional[str] = None, log_dir: Optional[Path | str] = None) -> logging.Logger:
    """
    Console (+ optional rotating file) handlers on the "assetindex" logger.
    - <log_dir>/assetindex.log (5 MB x 5 files) when log_dir is given
    - honors LOG_LEVEL env or provided level
    - idempotent (safe to call multiple times)
    """
    logger = logging.getLogger(ROOT_LOGGER)
    log_level = _LEVELS.get(level.upper(), _level_from_env()) if level else _level_from_env()
    logger.setLevel(log_level)
    if logger.handlers:  # already configured
        for handler in logger.handlers:
            handler.setLevel(log_level)
        return logger

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    # File (rotating)
    if log_dir is not None:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            filename=str(Path(log_dir) / f"{ROOT_LOGGER}.log"),
            maxBytes=5_000_000,
            backupCount=5,
            encoding="utf-8",
        )
        fh.setFormatter(fmt)
        fh.setLevel(log_level)
        logger.addHandler(fh)

    # Console
    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    ch.setLevel(log_level)
    logger.addHandler(ch)
    return logger
