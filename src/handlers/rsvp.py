"""Handler for RSVP (POST /events/{id}/rsvp)."""

from aws_lambda_powertools.event_handler import APIGatewayRestResolver
from aws_lambda_powertools.logging import Logger

from ..clients.dynamodb import DynamoDBClient
from ..models.api import RSVPRequest, RSVPResponse
from ..repositories.dynamodb_event import DynamoDBEventRepository
from ..services.request_parser import RequestParsingService
from ..services.rsvp import RSVPService


def handle_rsvp(
    app: APIGatewayRestResolver,
    dynamodb_client: DynamoDBClient,
    logger: Logger,
    event_id: str,
) -> RSVPResponse:
    """Handle POST /events/{id}/rsvp requests.

    Args:
        app: The API Gateway resolver instance
        dynamodb_client: DynamoDB client for event data
        logger: Logger instance
        event_id: The event being responded to

    Returns:
        RSVPResponse with the recorded status

    Raises:
        RequestValidationError: If the body is invalid
        EventNotFoundError: If the event does not exist
    """
    parser_service = RequestParsingService(app, logger)
    rsvp_service = RSVPService(DynamoDBEventRepository(dynamodb_client), logger)

    request = parser_service.parse_body(RSVPRequest)
    return rsvp_service.respond(event_id, request)
