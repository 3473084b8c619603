from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Current UTC time as a naive datetime (the store keeps naive UTC).

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_iso(value: datetime) -> str:
    """Serialize a naive UTC datetime as ISO-8601 with a ``Z`` suffix."""
    return value.isoformat(timespec="milliseconds") + "Z"
