"""Handlers for scheduled messages (/events/{id}/messages...)."""

from typing import Dict

from aws_lambda_powertools.event_handler import APIGatewayRestResolver
from aws_lambda_powertools.logging import Logger

from ..clients.dynamodb import DynamoDBClient
from ..clients.scheduler import SchedulerClient
from ..models.api import CreateMessageRequest
from ..models.domain import ScheduledMessage
from ..repositories.dynamodb_event import DynamoDBEventRepository
from ..services.messages import MessageService
from ..services.request_parser import RequestParsingService


def handle_schedule_message(
    app: APIGatewayRestResolver,
    dynamodb_client: DynamoDBClient,
    scheduler_client: SchedulerClient,
    logger: Logger,
    event_id: str,
) -> ScheduledMessage:
    """Handle POST /events/{id}/messages requests.

    The worker function lives in the same account as this function, whose
    ARN gives the account id.

    Raises:
        RequestValidationError: If the body is invalid
        EventNotFoundError: If the event does not exist
        SchedulerError: If the schedule cannot be created
    """
    parser_service = RequestParsingService(app, logger)
    message_service = MessageService(
        DynamoDBEventRepository(dynamodb_client), scheduler_client, logger
    )

    request = parser_service.parse_body(CreateMessageRequest)
    account_id = app.lambda_context.invoked_function_arn.split(":")[4]
    return message_service.schedule_message(event_id, request, account_id)


def handle_delete_message(
    app: APIGatewayRestResolver,
    dynamodb_client: DynamoDBClient,
    scheduler_client: SchedulerClient,
    logger: Logger,
    event_id: str,
    message_id: str,
) -> Dict[str, str]:
    """Handle DELETE /events/{id}/messages/{msgId} requests.

    Raises:
        MessageNotFoundError: If the message does not exist
    """
    message_service = MessageService(
        DynamoDBEventRepository(dynamodb_client), scheduler_client, logger
    )
    message_service.delete_message(event_id, message_id)
    return {"message": "Message deleted"}
