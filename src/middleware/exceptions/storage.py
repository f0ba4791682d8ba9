"""Storage-related exceptions."""

from typing import Any, Dict, Optional

from . import EventPlannerError


class StorageError(EventPlannerError):
    """Base class for storage-related errors."""

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ):
        super().__init__(
            message=message,
            code=code,
            details=details,
            status_code=status_code,
        )


class StorageGeneralError(StorageError):
    """General error for storage operations."""

    def __init__(
        self,
        message: str = "Storage operation failed",
        code: str = "STORAGE_GENERAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class ItemNotFoundError(StorageError):
    """Error when a conditional write targets an item that does not exist."""

    def __init__(
        self,
        pk: str,
        sk: str,
        message: str = "Item not found",
        code: str = "ITEM_NOT_FOUND",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            code=code,
            details={"pk": pk, "sk": sk, **(details or {})},
            status_code=404,
        )
