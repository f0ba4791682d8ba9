"""API models for request/response handling."""

from .requests import (
    CreateBudgetItemRequest,
    CreateEventRequest,
    CreateMediaRequest,
    CreateMessageRequest,
    CreatePollRequest,
    CreateVendorRequest,
    ListEventsRequest,
    PollOptionInput,
    RSVPRequest,
    UpdateBudgetItemRequest,
    UpdateEventRequest,
    UpdateVendorRequest,
    VoteRequest,
)
from .responses import (
    APIErrorResponse,
    EventDeletedResponse,
    MediaDeletedResponse,
    MediaUploadResponse,
    RSVPResponse,
    VersionResponse,
)

__all__ = [
    # Requests
    "CreateBudgetItemRequest",
    "CreateEventRequest",
    "CreateMediaRequest",
    "CreateMessageRequest",
    "CreatePollRequest",
    "CreateVendorRequest",
    "ListEventsRequest",
    "PollOptionInput",
    "RSVPRequest",
    "UpdateBudgetItemRequest",
    "UpdateEventRequest",
    "UpdateVendorRequest",
    "VoteRequest",
    # Responses
    "APIErrorResponse",
    "EventDeletedResponse",
    "MediaDeletedResponse",
    "MediaUploadResponse",
    "RSVPResponse",
    "VersionResponse",
]
