from __future__ import annotations

from datetime import timedelta

from taskboard.core.timeutil import as_utc, utcnow


def touch(row) -> None:
    """Refresh ``updated_at``; the new value is always strictly later than the old one."""
    now = utcnow()
    previous = as_utc(getattr(row, "updated_at", None))
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    row.updated_at = now
