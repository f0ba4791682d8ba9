"""Response models for API endpoints."""

from typing import Optional

from pydantic import BaseModel, Field

from ..domain.base import CamelModel
from ..domain.enums import MediaType, RSVPStatus


class APIErrorResponse(BaseModel):
    """Body of every failed API response."""

    error: str = Field(..., description="Human-readable error message")


class VersionResponse(BaseModel):
    """Response for GET /version endpoint."""

    version: str = Field(..., description="API version string")


class RSVPResponse(CamelModel):
    """Response for POST /events/{id}/rsvp."""

    event_id: str
    user_id: str
    status: RSVPStatus
    responded_at: str
    was_waitlisted: bool = Field(
        ..., description="True when a 'going' request was moved to the waitlist"
    )


class MediaUploadResponse(CamelModel):
    """Response for POST /events/{id}/media.

    The client PUTs the file to ``upload_url``; once uploaded it is served from
    ``url``.
    """

    id: str
    upload_url: str
    url: str
    type: MediaType
    uploaded_by: str
    uploaded_at: str
    caption: Optional[str] = None
    expires_in: int


class EventDeletedResponse(CamelModel):
    deleted: bool = True
    event_id: str


class MediaDeletedResponse(CamelModel):
    deleted: bool = True
    media_id: str
