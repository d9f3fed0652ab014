from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def utcnow_iso(now: Optional[datetime] = None) -> str:
    dt = now or utcnow()

    # Treat naive values as UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return dt.isoformat(timespec="microseconds")
