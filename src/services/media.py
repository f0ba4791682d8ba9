"""Service for event media uploads."""

from aws_lambda_powertools.logging import Logger

from ..clients.s3 import S3Client
from ..config.app import AppConfig
from ..middleware.exceptions import BadRequestError, ObjectStorageError
from ..models.api import CreateMediaRequest, MediaUploadResponse
from ..models.domain import MediaItem, UploadStatus
from ..repositories.event import EventRepository, generate_id
from ..utils.timestamps import utc_now_iso


class MediaService:
    """Service for media upload operations.

    Files never pass through the API: the client receives a presigned URL and
    uploads directly to S3, then confirms the upload.
    """

    def __init__(
        self,
        config: AppConfig,
        event_repository: EventRepository,
        s3_client: S3Client,
        logger: Logger,
    ) -> None:
        """Initialize media service.

        Args:
            config: Application configuration
            event_repository: Repository for event operations
            s3_client: S3 client for the media bucket
            logger: Logger instance
        """
        self.config = config
        self.event_repository = event_repository
        self.s3_client = s3_client
        self.logger = logger

    @staticmethod
    def object_key(event_id: str, media_id: str, file_name: str) -> str:
        return f"events/{event_id}/media/{media_id}/{file_name}"

    def request_upload(
        self, event_id: str, request: CreateMediaRequest
    ) -> MediaUploadResponse:
        """Create a pending media item and a presigned URL to upload its file.

        Raises:
            EventNotFoundError: If the event does not exist
            ObjectStorageError: If the URL cannot be generated
        """
        self.event_repository.get_event(event_id)

        media_id = generate_id()
        key = self.object_key(event_id, media_id, request.file_name)
        expires_in = self.config.presigned_url_expiry
        upload_url = self.s3_client.generate_upload_url(
            key, request.content_type, expires_in
        )

        media = MediaItem(
            id=media_id,
            url=self.s3_client.public_url(key),
            type=request.type,
            uploaded_by=request.uploaded_by,
            uploaded_at=utc_now_iso(),
            caption=request.caption,
            s3_key=key,
            s3_bucket=self.s3_client.bucket,
            content_type=request.content_type,
            file_name=request.file_name,
            upload_status=UploadStatus.PENDING,
        )
        self.event_repository.save_media(event_id, media)

        self.logger.info(
            "Presigned URL generated",
            extra={"event_id": event_id, "media_id": media_id, "expires_in": expires_in},
        )

        return MediaUploadResponse(
            id=media.id,
            upload_url=upload_url,
            url=media.url,
            type=media.type,
            uploaded_by=media.uploaded_by,
            uploaded_at=media.uploaded_at,
            caption=media.caption,
            expires_in=expires_in,
        )

    def confirm_upload(self, event_id: str, media_id: str) -> MediaItem:
        """Mark a pending media item as uploaded.

        Confirming an already completed upload is a no-op.

        Raises:
            MediaNotFoundError: If the media item does not exist
            BadRequestError: If the status cannot move to completed
        """
        media = self.event_repository.get_media(event_id, media_id)
        if media.upload_status == UploadStatus.COMPLETED:
            return media

        if not media.upload_status.can_transition_to(UploadStatus.COMPLETED):
            raise BadRequestError(
                f"Cannot complete upload in status {media.upload_status.value}",
                details={"event_id": event_id, "media_id": media_id},
            )

        self.event_repository.update_media_fields(
            event_id, media_id, {"uploadStatus": UploadStatus.COMPLETED.value}
        )
        media.upload_status = UploadStatus.COMPLETED
        self.logger.info(
            "Media upload confirmed", extra={"event_id": event_id, "media_id": media_id}
        )
        return media

    def delete_media(self, event_id: str, media_id: str) -> None:
        """Delete the media record, removing its S3 object on a best-effort basis.

        Raises:
            EventNotFoundError: If the event does not exist
            MediaNotFoundError: If the media item does not exist
        """
        self.event_repository.get_event(event_id)
        media = self.event_repository.get_media(event_id, media_id)

        if media.s3_key and media.s3_bucket:
            try:
                self.s3_client.delete_object(media.s3_key, bucket=media.s3_bucket)
                self.logger.info(
                    "Deleted from S3",
                    extra={"bucket": media.s3_bucket, "key": media.s3_key},
                )
            except ObjectStorageError as e:
                self.logger.warning(
                    "Failed to delete from S3",
                    extra={
                        "bucket": media.s3_bucket,
                        "key": media.s3_key,
                        "details": e.details,
                    },
                )

        self.event_repository.delete_media(event_id, media_id)
        self.logger.info("Media deleted", extra={"event_id": event_id, "media_id": media_id})
