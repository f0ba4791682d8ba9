import unittest
from unittest.mock import MagicMock

from fakes import InMemoryDynamoDBClient, make_event

from src.clients.s3 import S3Client
from src.config.app import AppConfig
from src.middleware.exceptions import (
    EventNotFoundError,
    MediaNotFoundError,
    ObjectStorageError,
)
from src.models.api import CreateMediaRequest
from src.models.domain import UploadStatus
from src.repositories.dynamodb_event import DynamoDBEventRepository
from src.services.media import MediaService


class TestMediaService(unittest.TestCase):
    """Test cases for the media upload flow."""

    def setUp(self):
        """Set up test fixtures."""
        self.mock_config = MagicMock(spec=AppConfig)
        self.mock_config.presigned_url_expiry = 900

        self.mock_s3 = MagicMock(spec=S3Client)
        self.mock_s3.bucket = "media-bucket"
        self.mock_s3.generate_upload_url.return_value = "https://signed.example/put"
        self.mock_s3.public_url.side_effect = (
            lambda key: f"https://media-bucket.s3.eu-central-1.amazonaws.com/{key}"
        )

        self.client = InMemoryDynamoDBClient()
        self.repository = DynamoDBEventRepository(self.client)
        self.repository.create_event(make_event())
        self.mock_logger = MagicMock()

        self.service = MediaService(
            self.mock_config, self.repository, self.mock_s3, self.mock_logger
        )
        self.request = CreateMediaRequest.model_validate(
            {
                "type": "image",
                "uploadedBy": "alice",
                "caption": "Summit",
                "fileName": "summit.jpg",
                "contentType": "image/jpeg",
            }
        )

    def test_request_upload_creates_pending_item(self):
        # Act
        response = self.service.request_upload("evt-1", self.request)

        # Assert
        key = f"events/evt-1/media/{response.id}/summit.jpg"
        self.mock_s3.generate_upload_url.assert_called_once_with(key, "image/jpeg", 900)
        self.assertEqual("https://signed.example/put", response.upload_url)
        self.assertEqual(900, response.expires_in)
        self.assertTrue(response.url.endswith(key))

        media = self.repository.get_media("evt-1", response.id)
        self.assertEqual(UploadStatus.PENDING, media.upload_status)
        self.assertEqual(key, media.s3_key)
        self.assertEqual("media-bucket", media.s3_bucket)

    def test_upload_response_has_no_storage_fields(self):
        payload = self.service.request_upload("evt-1", self.request).to_payload()

        self.assertIn("uploadUrl", payload)
        self.assertEqual("Summit", payload["caption"])
        self.assertNotIn("s3Key", payload)

    def test_request_upload_for_unknown_event(self):
        with self.assertRaises(EventNotFoundError):
            self.service.request_upload("nope", self.request)

        self.mock_s3.generate_upload_url.assert_not_called()

    def test_url_failure_stores_nothing(self):
        self.mock_s3.generate_upload_url.side_effect = ObjectStorageError()

        with self.assertRaises(ObjectStorageError):
            self.service.request_upload("evt-1", self.request)

        self.assertEqual([], self.repository.get_event_aggregate("evt-1").media)

    def test_confirm_upload(self):
        media_id = self.service.request_upload("evt-1", self.request).id

        media = self.service.confirm_upload("evt-1", media_id)

        self.assertEqual(UploadStatus.COMPLETED, media.upload_status)
        stored = self.repository.get_media("evt-1", media_id)
        self.assertEqual(UploadStatus.COMPLETED, stored.upload_status)

    def test_confirm_twice_is_a_no_op(self):
        media_id = self.service.request_upload("evt-1", self.request).id
        self.service.confirm_upload("evt-1", media_id)

        media = self.service.confirm_upload("evt-1", media_id)

        self.assertEqual(UploadStatus.COMPLETED, media.upload_status)

    def test_confirm_unknown_media(self):
        with self.assertRaises(MediaNotFoundError):
            self.service.confirm_upload("evt-1", "missing")

    def test_delete_media_removes_object_and_record(self):
        response = self.service.request_upload("evt-1", self.request)

        self.service.delete_media("evt-1", response.id)

        self.mock_s3.delete_object.assert_called_once_with(
            f"events/evt-1/media/{response.id}/summit.jpg", bucket="media-bucket"
        )
        with self.assertRaises(MediaNotFoundError):
            self.repository.get_media("evt-1", response.id)

    def test_delete_media_survives_s3_failure(self):
        response = self.service.request_upload("evt-1", self.request)
        self.mock_s3.delete_object.side_effect = ObjectStorageError()

        self.service.delete_media("evt-1", response.id)

        self.mock_logger.warning.assert_called_once()
        with self.assertRaises(MediaNotFoundError):
            self.repository.get_media("evt-1", response.id)

    def test_delete_unknown_media(self):
        with self.assertRaises(MediaNotFoundError):
            self.service.delete_media("evt-1", "missing")

        self.mock_s3.delete_object.assert_not_called()

    def test_delete_media_of_unknown_event(self):
        with self.assertRaises(EventNotFoundError):
            self.service.delete_media("nope", "m1")


if __name__ == "__main__":
    unittest.main()
