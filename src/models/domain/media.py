"""Media item domain model."""

from typing import Optional

from pydantic import Field

from .base import CamelModel
from .enums import MediaType, UploadStatus


class MediaItem(CamelModel):
    """A photo or video attached to an event.

    The binary lives in S3 under ``s3_bucket``/``s3_key``; the item is created
    before the upload happens and stays ``pending`` until confirmed.
    """

    id: str
    url: str = Field(..., description="Public URL of the object once uploaded")
    type: MediaType
    uploaded_by: str
    uploaded_at: str
    caption: Optional[str] = None
    s3_key: Optional[str] = Field(None, description="Object key in the media bucket")
    s3_bucket: Optional[str] = Field(None, description="Media bucket name")
    content_type: Optional[str] = None
    file_name: Optional[str] = None
    upload_status: UploadStatus = UploadStatus.PENDING

    def to_response(self) -> dict:
        """API representation; the storage location is left out."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude={"s3_key", "s3_bucket"},
        )
