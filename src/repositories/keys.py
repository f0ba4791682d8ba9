"""Composite key construction for the single-table layout.

Every key is either ``"<PREFIX>#<id>"`` or, for sentinels such as the event
root's sort key, the bare prefix. These strings are the persisted contract and
must never change for an existing entity.
"""

from enum import Enum
from typing import Optional


class KeyPrefix(str, Enum):
    """Entity-type prefixes used in partition, sort and index keys."""

    EVENT = "EVENT"
    USER = "USER"
    ATTENDEE = "ATTENDEE"
    POLL = "POLL"
    BUDGET = "BUDGET"
    VENDOR = "VENDOR"
    MEDIA = "MEDIA"
    MESSAGE = "MESSAGE"
    METADATA = "METADATA"
    STATUS = "STATUS"
    DATE = "DATE"


# Child collections stored as separate items under an event partition
EVENT_CHILD_PREFIXES = (
    KeyPrefix.ATTENDEE,
    KeyPrefix.POLL,
    KeyPrefix.MEDIA,
    KeyPrefix.MESSAGE,
    KeyPrefix.BUDGET,
    KeyPrefix.VENDOR,
)


def partition_key(prefix: KeyPrefix, entity_id: str) -> str:
    """Build a partition key such as ``EVENT#123``."""
    return f"{prefix.value}#{entity_id}"


def sort_key(prefix: KeyPrefix, entity_id: Optional[str] = None) -> str:
    """Build a sort key; without an id the bare prefix is the sentinel value."""
    return prefix.value if entity_id is None else f"{prefix.value}#{entity_id}"


def sort_key_prefix(prefix: KeyPrefix) -> str:
    """Prefix matching every child of one type, e.g. ``ATTENDEE#``."""
    return f"{prefix.value}#"


def status_index_key(status: str) -> str:
    """GSI1 partition key grouping events by status."""
    return partition_key(KeyPrefix.STATUS, status)


def date_index_key(start_date: str) -> str:
    """GSI1 sort key ordering events by start date."""
    return partition_key(KeyPrefix.DATE, start_date)
