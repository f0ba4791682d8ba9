"""Exception handling for the Event Planner service."""

from typing import Any, Dict, Optional


class EventPlannerError(Exception):
    """Base exception for all Event Planner service errors."""

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.status_code = status_code


from .api import (
    BadRequestError,
    BudgetItemNotFoundError,
    EventNotFoundError,
    MediaNotFoundError,
    MessageNotFoundError,
    NotFoundError,
    PollNotFoundError,
    RequestValidationError,
    VendorNotFoundError,
)
from .business import BusinessError, PollClosedError, PollOptionNotFoundError
from .integration import (
    EmailDeliveryError,
    IntegrationError,
    ObjectStorageError,
    SchedulerError,
    SecretsError,
)
from .storage import ItemNotFoundError, StorageError, StorageGeneralError

__all__ = [
    # Base
    "EventPlannerError",
    # API Errors
    "BadRequestError",
    "RequestValidationError",
    "NotFoundError",
    "EventNotFoundError",
    "PollNotFoundError",
    "BudgetItemNotFoundError",
    "VendorNotFoundError",
    "MediaNotFoundError",
    "MessageNotFoundError",
    # Business Errors
    "BusinessError",
    "PollClosedError",
    "PollOptionNotFoundError",
    # Storage Errors
    "StorageError",
    "StorageGeneralError",
    "ItemNotFoundError",
    # Integration Errors
    "IntegrationError",
    "ObjectStorageError",
    "SchedulerError",
    "EmailDeliveryError",
    "SecretsError",
]
