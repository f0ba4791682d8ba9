"""Business logic related exceptions."""

from typing import Any, Dict, Optional

from . import EventPlannerError


class BusinessError(EventPlannerError):
    """Base class for business rule violations.

    These are client errors: the request was well-formed but the current
    state of the event does not allow it.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code=code,
            details=details,
            status_code=400
        )


class PollClosedError(BusinessError):
    """Raised when voting on, or closing, a poll that is no longer active."""

    def __init__(
        self,
        message: str = "Poll is closed",
        code: str = "POLL_CLOSED",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code, details)


class PollOptionNotFoundError(BusinessError):
    """Raised when a vote references an option the poll does not have."""

    def __init__(
        self,
        message: str = "Option not found",
        code: str = "POLL_OPTION_NOT_FOUND",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code, details)
