"""Timezone handling for stored timestamps.

SQL providers may hand back naive datetimes; every stored timestamp is
written in UTC, so naive values are read back as UTC.
"""

from datetime import UTC, datetime


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
