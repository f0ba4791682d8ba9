"""Handlers for polls (/events/{id}/polls...)."""

from typing import Any, Dict

from aws_lambda_powertools.event_handler import APIGatewayRestResolver
from aws_lambda_powertools.logging import Logger

from ..clients.dynamodb import DynamoDBClient
from ..models.api import CreatePollRequest, VoteRequest
from ..models.domain import Poll
from ..repositories.dynamodb_event import DynamoDBEventRepository
from ..services.polls import PollService
from ..services.request_parser import RequestParsingService


def handle_create_poll(
    app: APIGatewayRestResolver,
    dynamodb_client: DynamoDBClient,
    logger: Logger,
    event_id: str,
) -> Poll:
    """Handle POST /events/{id}/polls requests."""
    parser_service = RequestParsingService(app, logger)
    poll_service = PollService(DynamoDBEventRepository(dynamodb_client), logger)

    request = parser_service.parse_body(CreatePollRequest)
    return poll_service.create_poll(event_id, request)


def handle_vote(
    app: APIGatewayRestResolver,
    dynamodb_client: DynamoDBClient,
    logger: Logger,
    event_id: str,
    poll_id: str,
) -> Dict[str, Any]:
    """Handle POST /events/{id}/polls/{pollId}/vote requests.

    Raises:
        EventNotFoundError: If the event does not exist
        PollNotFoundError: If the poll does not exist
        PollClosedError: If the poll is closed
        PollOptionNotFoundError: If the option does not exist
    """
    parser_service = RequestParsingService(app, logger)
    poll_service = PollService(DynamoDBEventRepository(dynamodb_client), logger)

    request = parser_service.parse_body(VoteRequest)
    poll = poll_service.vote(event_id, poll_id, request)

    return {
        "pollId": poll_id,
        "optionId": request.option_id,
        "userId": request.user_id,
        "poll": poll.to_payload(),
    }


def handle_close_poll(
    app: APIGatewayRestResolver,
    dynamodb_client: DynamoDBClient,
    logger: Logger,
    event_id: str,
    poll_id: str,
) -> Dict[str, Any]:
    """Handle POST /events/{id}/polls/{pollId}/close requests.

    Raises:
        EventNotFoundError: If the event does not exist
        PollNotFoundError: If the poll does not exist
        PollClosedError: If the poll is already closed
    """
    poll_service = PollService(DynamoDBEventRepository(dynamodb_client), logger)

    poll = poll_service.close_poll(event_id, poll_id)
    return {"pollId": poll_id, "closed": True, "poll": poll.to_payload()}
