"""Repository interfaces for event data access operations."""

import uuid
from typing import Any, Dict, List, Optional, Protocol

from ..models.domain import (
    Attendee,
    Event,
    EventCategory,
    EventStatus,
    MediaItem,
    ScheduledMessage,
)


class EventRepository(Protocol):
    """Interface for event repository operations."""

    def create_event(self, event: Event) -> None:
        """Store a new event root item.

        Args:
            event: The Event domain object to save.
        Raises:
            StorageGeneralError: If the save operation fails.
        """
        ...

    def get_event(self, event_id: str) -> Event:
        """Retrieve the event root item, without child collections.

        Raises:
            EventNotFoundError: If the event does not exist.
            StorageGeneralError: If the retrieval fails.
        """
        ...

    def get_event_aggregate(self, event_id: str) -> Event:
        """Retrieve the event together with attendees, media and messages.

        Raises:
            EventNotFoundError: If the event does not exist.
            StorageGeneralError: If the retrieval fails.
        """
        ...

    def list_events(
        self,
        status: Optional[EventStatus] = None,
        category: Optional[EventCategory] = None,
    ) -> List[Event]:
        """List events ordered by start date, optionally filtered.

        Raises:
            StorageGeneralError: If the list operation fails.
        """
        ...

    def update_event_fields(self, event_id: str, updates: Dict[str, Any]) -> None:
        """Merge camelCase fields into the event root item.

        Raises:
            EventNotFoundError: If the event does not exist.
            StorageGeneralError: If the update fails.
        """
        ...

    def delete_event(self, event_id: str) -> int:
        """Delete the event root item and every child item of the event.

        Returns:
            Number of items deleted.
        Raises:
            EventNotFoundError: If the event does not exist.
            StorageGeneralError: If a delete chunk fails.
        """
        ...

    def save_attendee(self, event_id: str, attendee: Attendee) -> None: ...

    def list_attendees(self, event_id: str) -> List[Attendee]: ...

    def save_media(self, event_id: str, media: MediaItem) -> None: ...

    def get_media(self, event_id: str, media_id: str) -> MediaItem: ...

    def update_media_fields(
        self, event_id: str, media_id: str, updates: Dict[str, Any]
    ) -> None: ...

    def delete_media(self, event_id: str, media_id: str) -> None: ...

    def save_message(self, message: ScheduledMessage) -> None: ...

    def get_message(self, event_id: str, message_id: str) -> ScheduledMessage: ...

    def update_message_fields(
        self, event_id: str, message_id: str, updates: Dict[str, Any]
    ) -> None: ...

    def delete_message(self, event_id: str, message_id: str) -> None: ...


def generate_id() -> str:
    """Generate a random identifier for events and their sub-entities.

    Returns:
        A uuid4 string
    """
    return str(uuid.uuid4())
