"""Request models for API endpoints.

Bodies are camelCase JSON. Creation variants omit server-assigned fields (ids,
timestamps, child collections); update variants make every field optional and
are applied as a merge of the fields actually sent.
"""

from typing import Iterable, List, Optional, Sequence

from pydantic import EmailStr, Field, field_validator, model_validator

from ..domain.base import CamelModel
from ..domain.enums import (
    EventCategory,
    EventStatus,
    MediaType,
    MessageChannel,
    MessageType,
    PollType,
    RecipientType,
    RSVPStatus,
    VendorStatus,
)
from ..domain.message import FormField
from ..domain.poll import Poll
from ..domain.user import User
from ..domain.vendor import Budget, Vendor
from ...utils.timestamps import to_schedule_expression


def check_unique_ids(ids: Iterable[Optional[str]], kind: str) -> None:
    """Reject repeated ids within one array; missing ids are skipped."""
    seen = set()
    for entry_id in ids:
        if entry_id is None:
            continue
        if entry_id in seen:
            raise ValueError(f"duplicate {kind} id '{entry_id}'")
        seen.add(entry_id)


def check_poll_options(options: Sequence) -> None:
    """Option ids are unique and each user votes for at most one option."""
    check_unique_ids((option.id for option in options), "option")
    voters = set()
    for option in options:
        for user_id in set(option.votes):
            if user_id in voters:
                raise ValueError(f"user '{user_id}' has votes on several options")
            voters.add(user_id)


class CreateEventRequest(CamelModel):
    """Request model for POST /events."""

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

    @model_validator(mode="after")
    def check_embedded_ids(self) -> "CreateEventRequest":
        check_unique_ids((item.id for item in self.budget.items), "budget item")
        check_unique_ids((vendor.id for vendor in self.vendors), "vendor")
        check_unique_ids((poll.id for poll in self.polls), "poll")
        for poll in self.polls:
            check_poll_options(poll.options)
        return self


class ListEventsRequest(CamelModel):
    """Query parameters for GET /events."""

    status: Optional[EventStatus] = Field(None, description="Filter by status")
    category: Optional[EventCategory] = Field(None, description="Filter by category")


class UpdateEventRequest(CamelModel):
    """Request model for PUT /events/{id}.

    ``id``, ``createdAt`` and ``createdBy`` cannot be changed.
    """

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category: Optional[EventCategory] = None
    status: Optional[EventStatus] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    location: Optional[str] = None
    is_virtual: Optional[bool] = None
    virtual_link: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=1)
    waitlist_enabled: Optional[bool] = None
    has_voting_enabled: Optional[bool] = None
    budget: Optional[Budget] = None
    vendors: Optional[List[Vendor]] = None
    polls: Optional[List[Poll]] = None
    cover_image: Optional[str] = None
    slack_channel: Optional[str] = None
    calendar_event_id: Optional[str] = None

    @model_validator(mode="after")
    def check_embedded_ids(self) -> "UpdateEventRequest":
        if self.budget is not None:
            check_unique_ids((item.id for item in self.budget.items), "budget item")
        if self.vendors is not None:
            check_unique_ids((vendor.id for vendor in self.vendors), "vendor")
        if self.polls is not None:
            check_unique_ids((poll.id for poll in self.polls), "poll")
            for poll in self.polls:
                check_poll_options(poll.options)
        return self


class RSVPRequest(CamelModel):
    """Request model for POST /events/{id}/rsvp."""

    status: RSVPStatus
    user_id: str = Field(..., min_length=1)
    user_name: str
    user_email: EmailStr
    user_avatar: Optional[str] = None

    def to_user(self) -> User:
        """The responding user as sent with the request."""
        return User(
            id=self.user_id,
            name=self.user_name,
            email=self.user_email,
            avatar=self.user_avatar,
        )


class PollOptionInput(CamelModel):
    id: Optional[str] = Field(None, min_length=1)
    label: str
    votes: List[str] = Field(default_factory=list)


class CreatePollRequest(CamelModel):
    """Request model for POST /events/{id}/polls.

    Options without an id get one generated on creation.
    """

    question: str
    type: PollType
    options: List[PollOptionInput]
    is_active: bool = True
    closes_at: Optional[str] = None

    @model_validator(mode="after")
    def check_options(self) -> "CreatePollRequest":
        check_poll_options(self.options)
        return self


class VoteRequest(CamelModel):
    option_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)


class CreateBudgetItemRequest(CamelModel):
    category: str
    description: str
    estimated: float
    actual: Optional[float] = None


class UpdateBudgetItemRequest(CamelModel):
    category: Optional[str] = None
    description: Optional[str] = None
    estimated: Optional[float] = None
    actual: Optional[float] = None


class CreateVendorRequest(CamelModel):
    name: str
    category: str
    contact: str
    cost: float
    status: VendorStatus
    notes: Optional[str] = None


class UpdateVendorRequest(CamelModel):
    name: Optional[str] = None
    category: Optional[str] = None
    contact: Optional[str] = None
    cost: Optional[float] = None
    status: Optional[VendorStatus] = None
    notes: Optional[str] = None


class CreateMediaRequest(CamelModel):
    """Request model for POST /events/{id}/media."""

    type: MediaType
    uploaded_by: str
    caption: Optional[str] = None
    file_name: str = Field(..., min_length=1)
    content_type: str = Field(..., min_length=1)


class CreateMessageRequest(CamelModel):
    """Request model for POST /events/{id}/messages.

    Email to a ``custom`` recipient list needs at least one address in
    ``customRecipients``.
    """

    type: MessageType
    subject: Optional[str] = None
    content: str = Field(..., min_length=1)
    scheduled_at: str = Field(..., min_length=1)
    timezone: str = "UTC"
    channels: List[MessageChannel] = Field(default_factory=list)
    recipient_type: RecipientType = RecipientType.ALL
    custom_recipients: Optional[List[EmailStr]] = None
    slack_channel: Optional[str] = None
    poll_options: Optional[List[str]] = None
    form_fields: Optional[List[FormField]] = None
    created_by: Optional[str] = None

    @field_validator("scheduled_at")
    @classmethod
    def check_scheduled_at(cls, value: str) -> str:
        try:
            to_schedule_expression(value)
        except ValueError:
            raise ValueError("must be an ISO 8601 timestamp")
        return value

    @model_validator(mode="after")
    def check_custom_recipients(self) -> "CreateMessageRequest":
        if (
            MessageChannel.EMAIL in self.channels
            and self.recipient_type == RecipientType.CUSTOM
            and not self.custom_recipients
        ):
            raise ValueError(
                "customRecipients is required when email channel is selected "
                "with custom recipient type"
            )
        return self
