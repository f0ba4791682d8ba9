"""Event domain model.

The event is the aggregate root of the planner. Polls, vendors and the budget
live inside the root item; attendees, media and scheduled messages are
separate items under the event's partition and are attached only when the
full aggregate is read.
"""

from typing import List, Optional

from pydantic import Field

from .attendee import Attendee
from .base import CamelModel
from .enums import EventCategory, EventStatus, RSVPStatus
from .media import MediaItem
from .message import ScheduledMessage
from .poll import Poll
from .vendor import Budget, Vendor


class Event(CamelModel):
    """An event being planned.

    Attributes:
        id: Unique event identifier, immutable after creation
        title: Non-empty event title
        status: Lifecycle status, mirrored into the status index
        start_date: ISO start date, mirrored into the date index
        capacity: Maximum number of attendees going (at least 1)
        waitlist_enabled: Whether RSVPs beyond capacity go to the waitlist
        budget: Embedded budget with its line items
        vendors: Embedded vendors
        polls: Embedded polls
        attendees: Attendee items (populated on aggregate reads only)
        media: Media items (populated on aggregate reads only)
        scheduled_messages: Message items (populated on aggregate reads only)
    """

    id: str
    title: str = Field(..., min_length=1)
    description: str
    category: EventCategory
    status: EventStatus
    start_date: str
    end_date: Optional[str] = None
    location: str
    is_virtual: bool
    virtual_link: Optional[str] = None
    capacity: int = Field(..., ge=1)
    waitlist_enabled: bool
    has_voting_enabled: bool = False
    budget: Budget = Field(default_factory=Budget)
    vendors: List[Vendor] = Field(default_factory=list)
    polls: List[Poll] = Field(default_factory=list)
    cover_image: Optional[str] = None
    slack_channel: Optional[str] = None
    calendar_event_id: Optional[str] = None
    created_by: str
    created_at: str
    updated_at: str

    attendees: List[Attendee] = Field(default_factory=list)
    media: List[MediaItem] = Field(default_factory=list)
    scheduled_messages: List[ScheduledMessage] = Field(default_factory=list)

    def to_response(self, with_children: bool = True) -> dict:
        """Camel-cased API representation.

        Storage locations of media objects are internal and never returned.
        Without ``with_children`` the attendee, media and message collections
        are left out.
        """
        exclude: dict = {"media": {"__all__": {"s3_key", "s3_bucket"}}}
        if not with_children:
            exclude = {"attendees": True, "media": True, "scheduled_messages": True}
        return self.model_dump(
            mode="json", by_alias=True, exclude_none=True, exclude=exclude
        )

    def resolve_rsvp_status(
        self, requested: RSVPStatus, going_count: int
    ) -> RSVPStatus:
        """Decide the status actually recorded for an RSVP.

        A request for ``going`` is moved to the waitlist when waitlisting is
        enabled and ``going_count`` already meets capacity. Every other
        request is accepted as is.

        Args:
            requested: Status the attendee asked for
            going_count: Number of other attendees currently going
        """
        if (
            requested == RSVPStatus.GOING
            and self.waitlist_enabled
            and going_count >= self.capacity
        ):
            return RSVPStatus.WAITLIST
        return requested

    def find_poll(self, poll_id: str) -> Optional[Poll]:
        return next((p for p in self.polls if p.id == poll_id), None)

    def find_vendor(self, vendor_id: str) -> Optional[Vendor]:
        return next((v for v in self.vendors if v.id == vendor_id), None)
