# Overview: UTC timestamps for entities and the row store (ISO-8601 with trailing "Z").

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Union


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def utcnow_iso() -> str:
    """Timestamp used for transaction dates, shift times and movements."""
    return to_utc_z(utcnow())


def parse_iso_datetime(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Parse an entity timestamp into the UTC-naive form stored in DateTime columns.

    Accepts "...Z", "...+HH:MM" and naive strings (naive means UTC).
    Datetimes pass through after normalization. Empty -> None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """Serialize to whole-second ISO-8601 with trailing 'Z'. Naive input is UTC."""
    if dt is None:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt.replace(microsecond=0).isoformat() + "Z"


def timestamp_key(value: Optional[str]) -> datetime:
    """Sort key for entity timestamps; missing or malformed values sort oldest."""
    try:
        parsed = parse_iso_datetime(value)
    except ValueError:
        parsed = None
    return parsed or datetime.min
