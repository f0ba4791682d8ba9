"""API-related exceptions."""

from typing import Any, Dict, Optional

from . import EventPlannerError


class APIError(EventPlannerError):
    """Base class for API-related errors."""

    pass


class BadRequestError(APIError):
    """400 Bad Request errors."""

    def __init__(
        self,
        message: str = "Invalid request",
        code: str = "BAD_REQUEST",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, code=code, details=details, status_code=400)


class RequestValidationError(BadRequestError):
    """Request body failed schema validation.

    The message carries only the first violation; the full list is kept in
    ``details["errors"]`` for logging.
    """

    def __init__(
        self,
        message: str = "Invalid request",
        code: str = "VALIDATION_INVALID_INPUT",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, code=code, details=details)


class NotFoundError(APIError):
    """404 Not Found errors."""

    def __init__(
        self,
        message: str = "Not found",
        code: str = "NOT_FOUND",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, code=code, details=details, status_code=404)


class EventNotFoundError(NotFoundError):
    """Error when the event root item does not exist."""

    def __init__(self, event_id: str, message: str = "Event not found"):
        super().__init__(
            message=message,
            code="EVENT_NOT_FOUND",
            details={"event_id": event_id},
        )


class PollNotFoundError(NotFoundError):
    def __init__(self, event_id: str, poll_id: str, message: str = "Poll not found"):
        super().__init__(
            message=message,
            code="POLL_NOT_FOUND",
            details={"event_id": event_id, "poll_id": poll_id},
        )


class BudgetItemNotFoundError(NotFoundError):
    def __init__(
        self, event_id: str, item_id: str, message: str = "Budget item not found"
    ):
        super().__init__(
            message=message,
            code="BUDGET_ITEM_NOT_FOUND",
            details={"event_id": event_id, "item_id": item_id},
        )


class VendorNotFoundError(NotFoundError):
    def __init__(
        self, event_id: str, vendor_id: str, message: str = "Vendor not found"
    ):
        super().__init__(
            message=message,
            code="VENDOR_NOT_FOUND",
            details={"event_id": event_id, "vendor_id": vendor_id},
        )


class MediaNotFoundError(NotFoundError):
    def __init__(self, event_id: str, media_id: str, message: str = "Media not found"):
        super().__init__(
            message=message,
            code="MEDIA_NOT_FOUND",
            details={"event_id": event_id, "media_id": media_id},
        )


class MessageNotFoundError(NotFoundError):
    def __init__(
        self, event_id: str, message_id: str, message: str = "Message not found"
    ):
        super().__init__(
            message=message,
            code="MESSAGE_NOT_FOUND",
            details={"event_id": event_id, "message_id": message_id},
        )
