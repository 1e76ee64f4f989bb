# Path: assetindex/common/__init__.py
# Purpose: Package initializer for shared helpers.
# Layer: common.
# Details: Exposes logger configuration and timestamp helpers.

from .logging import configure_logging, get_logger
from .time_utils import isoformat_utc, parse_timestamp, utc_now_iso

__all__ = ["configure_logging", "get_logger", "isoformat_utc", "parse_timestamp", "utc_now_iso"]
