"""Attendee domain model (one item per event and user)."""

from typing import Optional

from pydantic import EmailStr

from .base import CamelModel
from .enums import RSVPStatus
from .user import User


class Attendee(CamelModel):
    """A user's RSVP to an event. ``id`` is the user id."""

    id: str
    name: str
    email: EmailStr
    avatar: Optional[str] = None
    status: RSVPStatus
    responded_at: str

    @classmethod
    def for_user(cls, user: User, status: RSVPStatus, responded_at: str) -> "Attendee":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            avatar=user.avatar,
            status=status,
            responded_at=responded_at,
        )
