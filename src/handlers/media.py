"""Handlers for event media (/events/{id}/media...)."""

from typing import Any, Dict

from aws_lambda_powertools.event_handler import APIGatewayRestResolver
from aws_lambda_powertools.logging import Logger

from ..clients.dynamodb import DynamoDBClient
from ..clients.s3 import S3Client
from ..config.app import AppConfig
from ..models.api import CreateMediaRequest, MediaDeletedResponse, MediaUploadResponse
from ..repositories.dynamodb_event import DynamoDBEventRepository
from ..services.media import MediaService
from ..services.request_parser import RequestParsingService


def handle_request_media_upload(
    app: APIGatewayRestResolver,
    app_config: AppConfig,
    dynamodb_client: DynamoDBClient,
    s3_client: S3Client,
    logger: Logger,
    event_id: str,
) -> MediaUploadResponse:
    """Handle POST /events/{id}/media requests.

    Creates a pending media item and returns a presigned URL for uploading
    the file straight to S3.

    Raises:
        RequestValidationError: If the body is invalid
        EventNotFoundError: If the event does not exist
        ObjectStorageError: If the upload URL cannot be generated
    """
    parser_service = RequestParsingService(app, logger)
    media_service = MediaService(
        app_config, DynamoDBEventRepository(dynamodb_client), s3_client, logger
    )

    request = parser_service.parse_body(CreateMediaRequest)
    return media_service.request_upload(event_id, request)


def handle_confirm_media_upload(
    app: APIGatewayRestResolver,
    app_config: AppConfig,
    dynamodb_client: DynamoDBClient,
    s3_client: S3Client,
    logger: Logger,
    event_id: str,
    media_id: str,
) -> Dict[str, Any]:
    """Handle POST /events/{id}/media/{mediaId}/confirm requests."""
    media_service = MediaService(
        app_config, DynamoDBEventRepository(dynamodb_client), s3_client, logger
    )
    return media_service.confirm_upload(event_id, media_id).to_response()


def handle_delete_media(
    app: APIGatewayRestResolver,
    app_config: AppConfig,
    dynamodb_client: DynamoDBClient,
    s3_client: S3Client,
    logger: Logger,
    event_id: str,
    media_id: str,
) -> MediaDeletedResponse:
    """Handle DELETE /events/{id}/media/{mediaId} requests.

    Raises:
        EventNotFoundError: If the event does not exist
        MediaNotFoundError: If the media item does not exist
    """
    media_service = MediaService(
        app_config, DynamoDBEventRepository(dynamodb_client), s3_client, logger
    )
    media_service.delete_media(event_id, media_id)
    return MediaDeletedResponse(media_id=media_id)
