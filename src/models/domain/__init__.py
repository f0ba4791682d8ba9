"""Domain models for the Event Planner service."""

from .attendee import Attendee
from .enums import (
    DeliveryStatus,
    EventCategory,
    EventStatus,
    FormFieldType,
    MediaType,
    MessageChannel,
    MessageType,
    PollType,
    RecipientType,
    RSVPStatus,
    UploadStatus,
    UserRole,
    VendorStatus,
)
from .event import Event
from .media import MediaItem
from .message import FormField, ScheduledMessage
from .poll import Poll, PollOption
from .user import User
from .vendor import Budget, BudgetItem, Vendor

__all__ = [
    "DeliveryStatus",
    "EventCategory",
    "EventStatus",
    "FormFieldType",
    "MediaType",
    "MessageChannel",
    "MessageType",
    "PollType",
    "RecipientType",
    "RSVPStatus",
    "UploadStatus",
    "UserRole",
    "VendorStatus",
    "Attendee",
    "Budget",
    "BudgetItem",
    "Event",
    "FormField",
    "MediaItem",
    "Poll",
    "PollOption",
    "ScheduledMessage",
    "User",
    "Vendor",
]
