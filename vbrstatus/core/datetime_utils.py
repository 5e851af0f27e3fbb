"""Datetime helpers for converting Veeam timestamps to the Zabbix wire format.

Veeam stores naive datetimes; they are treated as UTC. Internally a missing
timestamp stays ``None``; it becomes the ``-1`` sentinel only in
``to_epoch_offset``.
"""

from datetime import UTC, datetime, timedelta

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

NOT_RUN = -1


def to_aware_utc(dt: datetime) -> datetime:
    """Convert a datetime to aware UTC.

    Args:
        dt: Datetime to convert (naive values are assumed to be UTC)

    Returns:
        Timezone-aware datetime in UTC
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_epoch_offset(timestamp: datetime | None) -> int:
    """Whole seconds elapsed since 1970-01-01T00:00:00Z.

    Returns -1 when the timestamp is absent or before the epoch. Veeam uses
    1900-01-01 for sessions that are still running.
    """
    if timestamp is None:
        return NOT_RUN
    aware = to_aware_utc(timestamp)
    if aware < EPOCH:
        return NOT_RUN
    return (aware - EPOCH) // timedelta(seconds=1)

