"""Time utility helpers."""

from __future__ import annotations

from datetime import UTC, datetime


def now_utc() -> datetime:
    """Return current timezone-aware UTC datetime."""
    return datetime.now(tz=UTC)


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an ISO timestamp (``Z`` suffix allowed) into an aware datetime."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def minutes_between(start: datetime, end: datetime) -> float:
    """Return elapsed minutes between two timestamps."""
    return (parse_timestamp(end) - parse_timestamp(start)).total_seconds() / 60


def format_duration(minutes: float) -> str:
    """Format minutes as ``"2h 5m"`` or ``"45m"``."""
    hours = int(minutes // 60)
    mins = round(minutes % 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"
