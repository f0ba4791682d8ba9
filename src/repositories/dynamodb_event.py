"""DynamoDB implementation of the event repository.

An event is stored as one root item (``EVENT#<id>`` / ``METADATA``) holding
its embedded polls, budget and vendors, plus independent child items under the
same partition for attendees, media and scheduled messages. This module
handles serialization between the domain models and those items.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from aws_lambda_powertools.logging import Logger

from ..clients.dynamodb import DynamoDBClient
from ..middleware.exceptions import (
    EventNotFoundError,
    ItemNotFoundError,
    MediaNotFoundError,
    MessageNotFoundError,
)
from ..models.domain import (
    Attendee,
    Event,
    EventCategory,
    EventStatus,
    MediaItem,
    ScheduledMessage,
)
from ..utils.timestamps import utc_now_iso
from .keys import (
    EVENT_CHILD_PREFIXES,
    KeyPrefix,
    date_index_key,
    partition_key,
    sort_key,
    sort_key_prefix,
    status_index_key,
)

logger = Logger()

# Key attributes that only exist in storage
STORAGE_KEYS = ("PK", "SK", "GSI1PK", "GSI1SK")

# Root fields that a merge update may never touch
PROTECTED_EVENT_FIELDS = {"id", "createdAt", "createdBy", *STORAGE_KEYS}

# Collections that are separate items, never stored inside the root item
CHILD_COLLECTIONS = {"attendees", "media", "scheduled_messages"}


class DynamoDBEventRepository:
    """DynamoDB implementation of event repository operations."""

    def __init__(self, dynamodb_client: DynamoDBClient) -> None:
        """Initialize the repository with a DynamoDB client.

        Args:
            dynamodb_client: Client for DynamoDB operations
        """
        self.dynamodb_client = dynamodb_client
        self.index_name = dynamodb_client.config.gsi1_index_name

    @staticmethod
    def event_pk(event_id: str) -> str:
        return partition_key(KeyPrefix.EVENT, event_id)

    @staticmethod
    def event_sk() -> str:
        return sort_key(KeyPrefix.METADATA)

    # --- Serialization ---

    def _serialize_event(self, event: Event) -> Dict[str, Any]:
        """Convert a domain Event to its root item, including index keys."""
        payload = event.model_dump(
            mode="json", by_alias=True, exclude_none=True, exclude=CHILD_COLLECTIONS
        )
        item = self._convert_to_dynamodb_type(payload)
        item.update(
            {
                "PK": self.event_pk(event.id),
                "SK": self.event_sk(),
                "GSI1PK": status_index_key(event.status.value),
                "GSI1SK": date_index_key(event.start_date),
            }
        )
        return item

    def _deserialize_event(self, item: Dict[str, Any]) -> Event:
        return Event.model_validate(self._strip_storage_keys(item))

    @classmethod
    def _strip_storage_keys(cls, item: Dict[str, Any]) -> Dict[str, Any]:
        """Drop key attributes and convert Decimals back to int/float."""
        return cls._normalize_dynamodb_types(
            {k: v for k, v in item.items() if k not in STORAGE_KEYS}
        )

    @staticmethod
    def _convert_to_dynamodb_type(value: Any) -> Any:
        """Convert Python values to DynamoDB compatible types.

        Floats become Decimals; lists and dicts are converted recursively.
        """
        if isinstance(value, float):
            return Decimal(str(value))
        elif isinstance(value, (list, tuple)):
            return [
                DynamoDBEventRepository._convert_to_dynamodb_type(item)
                for item in value
            ]
        elif isinstance(value, dict):
            return {
                k: DynamoDBEventRepository._convert_to_dynamodb_type(v)
                for k, v in value.items()
            }
        return value

    @staticmethod
    def _normalize_dynamodb_types(data: Any) -> Any:
        """Convert DynamoDB Decimals to int when whole, otherwise to float."""
        if isinstance(data, Decimal):
            if data % 1 == 0:
                return int(data)
            return float(data)
        elif isinstance(data, list):
            return [DynamoDBEventRepository._normalize_dynamodb_types(i) for i in data]
        elif isinstance(data, dict):
            return {
                k: DynamoDBEventRepository._normalize_dynamodb_types(v)
                for k, v in data.items()
            }
        return data

    # --- Event root ---

    def create_event(self, event: Event) -> None:
        self.dynamodb_client.put_item(self._serialize_event(event))
        logger.info("Event stored", extra={"event_id": event.id})

    def get_event(self, event_id: str) -> Event:
        item = self.dynamodb_client.get_item(self.event_pk(event_id), self.event_sk())
        if item is None:
            raise EventNotFoundError(event_id)
        return self._deserialize_event(item)

    def get_event_aggregate(self, event_id: str) -> Event:
        """Fetch the root item, then its attendee, media and message items.

        The child queries run concurrently after the root fetch, so a child
        written in between may or may not be included.
        """
        event = self.get_event(event_id)

        prefixes = {
            KeyPrefix.ATTENDEE: sort_key_prefix(KeyPrefix.ATTENDEE),
            KeyPrefix.MEDIA: sort_key_prefix(KeyPrefix.MEDIA),
            KeyPrefix.MESSAGE: sort_key_prefix(KeyPrefix.MESSAGE),
        }
        children = self.dynamodb_client.query_prefixes(
            self.event_pk(event_id), prefixes.values()
        )

        event.attendees = [
            Attendee.model_validate(self._strip_storage_keys(item))
            for item in children[prefixes[KeyPrefix.ATTENDEE]]
        ]
        event.media = [
            MediaItem.model_validate(self._strip_storage_keys(item))
            for item in children[prefixes[KeyPrefix.MEDIA]]
        ]
        event.scheduled_messages = [
            ScheduledMessage.model_validate(self._strip_storage_keys(item))
            for item in children[prefixes[KeyPrefix.MESSAGE]]
        ]
        return event

    def list_events(
        self,
        status: Optional[EventStatus] = None,
        category: Optional[EventCategory] = None,
    ) -> List[Event]:
        """List events through the status index, ordered by start date.

        Without a status filter every status partition of the index is
        queried and the results are merged.
        """
        statuses = [status] if status else list(EventStatus)

        items: List[Dict[str, Any]] = []
        for current in statuses:
            items.extend(
                self.dynamodb_client.query(
                    status_index_key(current.value), index_name=self.index_name
                )
            )

        events = [self._deserialize_event(item) for item in items]
        if category:
            events = [e for e in events if e.category == category]

        logger.debug(
            "Events listed",
            extra={
                "status": status.value if status else None,
                "category": category.value if category else None,
                "count": len(events),
            },
        )
        return sorted(events, key=lambda e: e.start_date)

    def update_event_fields(self, event_id: str, updates: Dict[str, Any]) -> None:
        """Merge camelCase fields into the root item.

        Identity and audit fields are ignored. A new ``status`` or
        ``startDate`` also rewrites the matching index key, and ``updatedAt``
        is stamped unless given.
        """
        fields = {k: v for k, v in updates.items() if k not in PROTECTED_EVENT_FIELDS}
        if not fields:
            return

        if "status" in fields:
            fields["GSI1PK"] = status_index_key(EventStatus(fields["status"]).value)
        if "startDate" in fields:
            fields["GSI1SK"] = date_index_key(fields["startDate"])
        fields.setdefault("updatedAt", utc_now_iso())

        try:
            self.dynamodb_client.update_item_fields(
                self.event_pk(event_id),
                self.event_sk(),
                self._convert_to_dynamodb_type(fields),
            )
        except ItemNotFoundError:
            raise EventNotFoundError(event_id)

    def delete_event(self, event_id: str) -> int:
        """Delete the root item and every child item in the event partition."""
        pk = self.event_pk(event_id)
        if self.dynamodb_client.get_item(pk, self.event_sk()) is None:
            raise EventNotFoundError(event_id)

        children = self.dynamodb_client.query_prefixes(
            pk, [sort_key_prefix(prefix) for prefix in EVENT_CHILD_PREFIXES]
        )
        keys = [(pk, self.event_sk())]
        for items in children.values():
            keys.extend((item["PK"], item["SK"]) for item in items)

        self.dynamodb_client.batch_delete_items(keys)
        logger.info(
            "Event deleted", extra={"event_id": event_id, "item_count": len(keys)}
        )
        return len(keys)

    # --- Attendees ---

    def save_attendee(self, event_id: str, attendee: Attendee) -> None:
        """Upsert the attendee item; a repeated RSVP overwrites the previous one."""
        item = self._convert_to_dynamodb_type(attendee.to_payload())
        item.update(
            {
                "PK": self.event_pk(event_id),
                "SK": sort_key(KeyPrefix.ATTENDEE, attendee.id),
                "GSI1PK": partition_key(KeyPrefix.USER, attendee.id),
                "GSI1SK": sort_key(KeyPrefix.EVENT, event_id),
            }
        )
        self.dynamodb_client.put_item(item)

    def list_attendees(self, event_id: str) -> List[Attendee]:
        items = self.dynamodb_client.query(
            self.event_pk(event_id), sk_prefix=sort_key_prefix(KeyPrefix.ATTENDEE)
        )
        return [Attendee.model_validate(self._strip_storage_keys(i)) for i in items]

    # --- Media ---

    def save_media(self, event_id: str, media: MediaItem) -> None:
        item = self._convert_to_dynamodb_type(media.to_payload())
        item.update(
            {
                "PK": self.event_pk(event_id),
                "SK": sort_key(KeyPrefix.MEDIA, media.id),
            }
        )
        self.dynamodb_client.put_item(item)

    def get_media(self, event_id: str, media_id: str) -> MediaItem:
        item = self.dynamodb_client.get_item(
            self.event_pk(event_id), sort_key(KeyPrefix.MEDIA, media_id)
        )
        if item is None:
            raise MediaNotFoundError(event_id, media_id)
        return MediaItem.model_validate(self._strip_storage_keys(item))

    def update_media_fields(
        self, event_id: str, media_id: str, updates: Dict[str, Any]
    ) -> None:
        try:
            self.dynamodb_client.update_item_fields(
                self.event_pk(event_id),
                sort_key(KeyPrefix.MEDIA, media_id),
                self._convert_to_dynamodb_type(updates),
            )
        except ItemNotFoundError:
            raise MediaNotFoundError(event_id, media_id)

    def delete_media(self, event_id: str, media_id: str) -> None:
        self.dynamodb_client.delete_item(
            self.event_pk(event_id), sort_key(KeyPrefix.MEDIA, media_id)
        )

    # --- Scheduled messages ---

    def save_message(self, message: ScheduledMessage) -> None:
        item = self._convert_to_dynamodb_type(message.to_payload())
        item.update(
            {
                "PK": self.event_pk(message.event_id),
                "SK": sort_key(KeyPrefix.MESSAGE, message.id),
            }
        )
        self.dynamodb_client.put_item(item)

    def get_message(self, event_id: str, message_id: str) -> ScheduledMessage:
        item = self.dynamodb_client.get_item(
            self.event_pk(event_id), sort_key(KeyPrefix.MESSAGE, message_id)
        )
        if item is None:
            raise MessageNotFoundError(event_id, message_id)
        return ScheduledMessage.model_validate(self._strip_storage_keys(item))

    def update_message_fields(
        self, event_id: str, message_id: str, updates: Dict[str, Any]
    ) -> None:
        try:
            self.dynamodb_client.update_item_fields(
                self.event_pk(event_id),
                sort_key(KeyPrefix.MESSAGE, message_id),
                self._convert_to_dynamodb_type(updates),
            )
        except ItemNotFoundError:
            raise MessageNotFoundError(event_id, message_id)

    def delete_message(self, event_id: str, message_id: str) -> None:
        self.dynamodb_client.delete_item(
            self.event_pk(event_id), sort_key(KeyPrefix.MESSAGE, message_id)
        )
