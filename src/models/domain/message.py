"""Scheduled message domain model."""

from typing import List, Optional

from pydantic import Field

from .base import CamelModel
from .enums import (
    DeliveryStatus,
    FormFieldType,
    MessageChannel,
    MessageType,
    RecipientType,
)


class FormField(CamelModel):
    id: str
    type: FormFieldType
    label: str
    required: bool = False
    options: Optional[List[str]] = None


class ScheduledMessage(CamelModel):
    """A message delivered to event attendees at a scheduled time.

    Attributes:
        id: Message identifier
        event_id: Owning event
        type: Kind of message (announcement, reminder, poll, form)
        content: Message body
        channels: Delivery channels
        recipient_type: Which attendees receive email
        custom_recipients: Explicit email addresses for ``custom`` recipients
        scheduled_at: When the message is due (ISO 8601)
        timezone: Timezone the organizer scheduled in, for display
        status: PENDING until delivered, then SENT
        scheduler_schedule_arn: Handle of the one-shot schedule
    """

    id: str
    event_id: str
    type: MessageType
    subject: Optional[str] = None
    content: str
    channels: List[MessageChannel] = Field(default_factory=list)
    recipient_type: RecipientType = RecipientType.ALL
    custom_recipients: Optional[List[str]] = None
    scheduled_at: str
    timezone: str = "UTC"
    slack_channel: Optional[str] = None
    poll_options: Optional[List[str]] = None
    form_fields: Optional[List[FormField]] = None
    status: DeliveryStatus = DeliveryStatus.PENDING
    scheduler_schedule_arn: Optional[str] = None
    sent_at: Optional[str] = None
    error_message: Optional[str] = None
    created_by: Optional[str] = None
    created_at: str
    updated_at: str

    @property
    def schedule_name(self) -> Optional[str]:
        """Schedule name, i.e. the last path segment of the schedule ARN."""
        if not self.scheduler_schedule_arn:
            return None
        return self.scheduler_schedule_arn.split("/")[-1] or None
