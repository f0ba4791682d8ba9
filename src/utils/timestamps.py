"""Timestamp helpers."""

import re
from datetime import datetime, timezone

# Seconds fraction of any precision, dropped before parsing
SECONDS_FRACTION = re.compile(r"(T\d{2}:\d{2}:\d{2})\.\d+")


def utc_now_iso() -> str:
    """Current UTC time as ISO 8601 with millisecond precision and a ``Z`` suffix.

    Example: ``2025-03-01T09:30:00.123Z``
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_schedule_expression(timestamp: str) -> str:
    """Convert an ISO 8601 timestamp into a one-shot scheduler expression in UTC.

    Naive timestamps are taken as UTC. Fractional seconds are dropped because
    the scheduler only accepts ``yyyy-mm-ddThh:mm:ss``.

    Raises:
        ValueError: If the timestamp cannot be parsed
    """
    timestamp = SECONDS_FRACTION.sub(r"\1", timestamp)
    if timestamp.endswith("Z"):
        timestamp = timestamp[:-1] + "+00:00"
    moment = datetime.fromisoformat(timestamp)
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return f"at({moment.strftime('%Y-%m-%dT%H:%M:%S')})"
