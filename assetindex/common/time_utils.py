# Path: assetindex/common/time_utils.py
# Purpose: Format and parse the ISO-8601 timestamps written into index documents.
# Layer: common.
# Details: Output uses UTC with millisecond precision and a "Z" suffix.

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def isoformat_utc(dt: datetime) -> str:
    """Render ``dt`` as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def utc_now_iso() -> str:
    return isoformat_utc(datetime.now(timezone.utc))


def from_epoch(seconds: float) -> str:
    return isoformat_utc(datetime.fromtimestamp(seconds, tz=timezone.utc))


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime string into an aware datetime.
    Naive values are taken as UTC. Returns None for empty or unparsable input.
    """
    if not value:
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
