"""Client wrapper for S3 operations on the media bucket."""

from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ..config.app import AppConfig
from ..middleware.exceptions import ObjectStorageError
from ..middleware.logging import logger


class S3Client:
    """Client wrapper for S3 operations."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize S3 client.

        Args:
            config: Application configuration
        """
        self.config = config
        self.bucket = config.media_bucket_name
        self.region = config.aws_region
        # SigV4 with virtual-hosted addressing so browser PUTs pass CORS checks
        self.s3 = boto3.client(
            "s3",
            region_name=config.aws_region,
            config=Config(signature_version="s3v4", s3={"addressing_style": "virtual"}),
        )

    def generate_upload_url(
        self, key: str, content_type: str, expires_in: Optional[int] = None
    ) -> str:
        """Create a presigned URL allowing a client to PUT one object.

        Args:
            key: S3 object key
            content_type: Content type the upload must be sent with
            expires_in: URL lifetime in seconds (defaults to the configured expiry)

        Returns:
            Presigned PUT URL

        Raises:
            ObjectStorageError: If URL generation fails
        """
        expiration = expires_in or self.config.presigned_url_expiry
        try:
            return self.s3.generate_presigned_url(
                "put_object",
                Params={"Bucket": self.bucket, "Key": key, "ContentType": content_type},
                ExpiresIn=expiration,
            )
        except ClientError as e:
            raise ObjectStorageError(
                "Failed to generate upload URL",
                code="generate_upload_url_failed",
                details={"key": key, "e": str(e)},
            )

    def public_url(self, key: str) -> str:
        """Public virtual-hosted URL of an object in the media bucket."""
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def delete_object(self, key: str, bucket: Optional[str] = None) -> None:
        """Delete an object from S3.

        Args:
            key: S3 object key
            bucket: Bucket holding the object (defaults to the media bucket)

        Raises:
            ObjectStorageError: If deletion fails
        """
        try:
            self.s3.delete_object(Bucket=bucket or self.bucket, Key=key)
            logger.debug("Deleted S3 object", extra={"key": key})
        except ClientError as e:
            raise ObjectStorageError(
                "Failed to delete object",
                code="delete_object_failed",
                details={"key": key, "e": str(e)},
            )
