"""Domain enums for the Event Planner service.

All enums inherit from str so they serialize to their plain values.
"""

from enum import Enum


class EventCategory(str, Enum):
    TEAM_BUILDING = "team-building"
    WORKSHOP = "workshop"
    SOCIAL = "social"
    CONFERENCE = "conference"
    CELEBRATION = "celebration"
    OFFSITE = "offsite"
    OTHER = "other"


class EventStatus(str, Enum):
    """Event lifecycle status; also the GSI1 partition of the event root."""

    DRAFT = "draft"
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class RSVPStatus(str, Enum):
    GOING = "going"
    MAYBE = "maybe"
    NOT_GOING = "not-going"
    WAITLIST = "waitlist"


class PollType(str, Enum):
    DATE = "date"
    LOCATION = "location"
    CUSTOM = "custom"


class VendorStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PAID = "paid"


class MediaType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class UploadStatus(str, Enum):
    """Media upload lifecycle: pending until the client confirms the upload."""

    PENDING = "pending"
    COMPLETED = "completed"

    def can_transition_to(self, new_status: "UploadStatus") -> bool:
        """Check if current status can transition to new status."""
        valid_transitions = {
            UploadStatus.PENDING: {UploadStatus.COMPLETED},
            UploadStatus.COMPLETED: set(),  # Terminal state
        }
        return new_status in valid_transitions.get(self, set())


class MessageChannel(str, Enum):
    SLACK = "slack"
    EMAIL = "email"


class MessageType(str, Enum):
    ANNOUNCEMENT = "announcement"
    REMINDER = "reminder"
    POLL = "poll"
    FORM = "form"


class RecipientType(str, Enum):
    ALL = "all"
    GOING = "going"
    MAYBE = "maybe"
    CUSTOM = "custom"


class DeliveryStatus(str, Enum):
    """Scheduled message delivery status as stored on the message item."""

    PENDING = "PENDING"
    SENT = "SENT"


class FormFieldType(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    SELECT = "select"
    CHECKBOX = "checkbox"
    RATING = "rating"


class UserRole(str, Enum):
    ADMIN = "admin"
    ORGANIZER = "organizer"
    MEMBER = "member"
