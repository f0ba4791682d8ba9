"""Exceptions raised by external collaborators (S3, Scheduler, SES, Secrets)."""

from typing import Any, Dict, Optional

from . import EventPlannerError


class IntegrationError(EventPlannerError):
    """Base class for failures of downstream AWS or third-party services."""

    def __init__(
        self, message: str, code: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code=code,
            details=details,
            status_code=500,
        )


class ObjectStorageError(IntegrationError):
    """Raised when an S3 operation fails."""

    def __init__(
        self,
        message: str = "Object storage operation failed",
        code: str = "OBJECT_STORAGE_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code, details)


class SchedulerError(IntegrationError):
    """Raised when creating or deleting a schedule fails."""

    def __init__(
        self,
        message: str = "Scheduler operation failed",
        code: str = "SCHEDULER_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code, details)


class EmailDeliveryError(IntegrationError):
    """Raised when SES rejects a message."""

    def __init__(
        self,
        message: str = "Failed to send email",
        code: str = "EMAIL_DELIVERY_FAILED",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code, details)


class SecretsError(IntegrationError):
    """Raised when a secret cannot be read or parsed."""

    def __init__(
        self,
        message: str = "Failed to read secret",
        code: str = "SECRET_READ_FAILED",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code, details)
