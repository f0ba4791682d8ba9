"""Handlers for the event resource (/events and /events/{id}).

Each handler validates its input, runs one repository operation and returns
the camelCase payload for the response body.
"""

from typing import Any, Dict

from aws_lambda_powertools.event_handler import APIGatewayRestResolver
from aws_lambda_powertools.logging import Logger

from ..clients.dynamodb import DynamoDBClient
from ..models.api import (
    CreateEventRequest,
    EventDeletedResponse,
    ListEventsRequest,
    UpdateEventRequest,
)
from ..models.domain import Event
from ..repositories.dynamodb_event import DynamoDBEventRepository
from ..repositories.event import generate_id
from ..services.request_parser import RequestParsingService, validate_model
from ..utils.timestamps import utc_now_iso


def handle_list_events(
    app: APIGatewayRestResolver,
    dynamodb_client: DynamoDBClient,
    logger: Logger,
) -> Dict[str, Any]:
    """Handle GET /events requests.

    Optional ``status`` and ``category`` query parameters filter the list.

    Raises:
        RequestValidationError: If a filter value is not a known status or category
        StorageGeneralError: If storage operations fail
    """
    parser_service = RequestParsingService(app, logger)
    event_repository = DynamoDBEventRepository(dynamodb_client)

    filters = validate_model(
        ListEventsRequest,
        {
            "status": parser_service.get_query_param("status"),
            "category": parser_service.get_query_param("category"),
        },
    )
    logger.info(
        "Listing events",
        extra={"status": filters.status, "category": filters.category},
    )

    events = event_repository.list_events(filters.status, filters.category)
    return {"events": [event.to_response() for event in events]}


def handle_create_event(
    app: APIGatewayRestResolver,
    dynamodb_client: DynamoDBClient,
    logger: Logger,
) -> Dict[str, Any]:
    """Handle POST /events requests.

    Raises:
        BadRequestError: If the body is missing or malformed
        RequestValidationError: If the body is invalid
        StorageGeneralError: If storage operations fail
    """
    parser_service = RequestParsingService(app, logger)
    event_repository = DynamoDBEventRepository(dynamodb_client)

    request = parser_service.parse_body(CreateEventRequest)

    now = utc_now_iso()
    event = Event(
        id=generate_id(),
        created_at=now,
        updated_at=now,
        **request.model_dump(),
    )
    event_repository.create_event(event)

    logger.info("Event created", extra={"event_id": event.id})
    return event.to_response()


def handle_get_event(
    app: APIGatewayRestResolver,
    dynamodb_client: DynamoDBClient,
    logger: Logger,
    event_id: str,
) -> Dict[str, Any]:
    """Handle GET /events/{id} requests: the event with all of its children.

    Raises:
        EventNotFoundError: If the event does not exist
        StorageGeneralError: If storage operations fail
    """
    event_repository = DynamoDBEventRepository(dynamodb_client)

    event = event_repository.get_event_aggregate(event_id)

    logger.info(
        "Returning event",
        extra={
            "event_id": event_id,
            "attendee_count": len(event.attendees),
            "media_count": len(event.media),
            "message_count": len(event.scheduled_messages),
        },
    )
    return event.to_response()


def handle_update_event(
    app: APIGatewayRestResolver,
    dynamodb_client: DynamoDBClient,
    logger: Logger,
    event_id: str,
) -> Dict[str, Any]:
    """Handle PUT /events/{id} requests.

    Only the fields present in the body change. The response is the stored
    event merged with the changes, without its child collections.

    Raises:
        EventNotFoundError: If the event does not exist
        RequestValidationError: If the body or the merged event is invalid
        StorageGeneralError: If storage operations fail
    """
    parser_service = RequestParsingService(app, logger)
    event_repository = DynamoDBEventRepository(dynamodb_client)

    request = parser_service.parse_body(UpdateEventRequest)
    updates = request.model_dump(mode="json", by_alias=True, exclude_unset=True)

    existing = event_repository.get_event(event_id)
    updates["updatedAt"] = utc_now_iso()
    merged = validate_model(Event, {**existing.to_payload(), **updates})

    event_repository.update_event_fields(event_id, updates)

    logger.info(
        "Event updated", extra={"event_id": event_id, "fields": sorted(updates)}
    )
    return merged.to_response(with_children=False)


def handle_delete_event(
    app: APIGatewayRestResolver,
    dynamodb_client: DynamoDBClient,
    logger: Logger,
    event_id: str,
) -> EventDeletedResponse:
    """Handle DELETE /events/{id} requests, removing the event and all children.

    Raises:
        EventNotFoundError: If the event does not exist
        StorageGeneralError: If a batch delete chunk fails
    """
    event_repository = DynamoDBEventRepository(dynamodb_client)

    deleted_count = event_repository.delete_event(event_id)

    logger.info(
        "Event deleted", extra={"event_id": event_id, "item_count": deleted_count}
    )
    return EventDeletedResponse(event_id=event_id)
