from http import HTTPStatus

from aws_lambda_powertools.event_handler import APIGatewayRestResolver, Response
from aws_lambda_powertools.event_handler.exceptions import NotFoundError
from aws_lambda_powertools.utilities.typing import LambdaContext

from src.clients.dynamodb import DynamoDBClient
from src.clients.s3 import S3Client
from src.clients.scheduler import SchedulerClient
from src.config.app import AppConfig
from src.handlers import (
    handle_add_budget_item,
    handle_add_vendor,
    handle_close_poll,
    handle_confirm_media_upload,
    handle_create_event,
    handle_create_poll,
    handle_delete_event,
    handle_delete_media,
    handle_delete_message,
    handle_get_event,
    handle_list_events,
    handle_request_media_upload,
    handle_rsvp,
    handle_schedule_message,
    handle_update_budget_item,
    handle_update_event,
    handle_update_vendor,
    handle_vote,
)
from src.middleware.api import json_response
from src.middleware.error_handler import error_handler_middleware
from src.middleware.logging import logger, logging_middleware
from src.models.api import VersionResponse

# CORS headers are set on every response by json_response and the error
# handler, so the resolver's own CORS support stays off
app = APIGatewayRestResolver()

# --- Load Configuration and Initialize Services ---
try:
    app_config = AppConfig.from_env()
    logger.info(
        "Configuration loaded successfully.",
        extra={
            "app_env": app_config.app_env,
            "version": app_config.version,
            "commit_hash": app_config.commit_hash,
        },
    )
except Exception as e:
    logger.exception("CRITICAL: Failed to load configuration or initialize services.")
    # This error prevents the Lambda from functioning, raise to indicate failure
    raise RuntimeError(f"Initialization error: {e}") from e

# --- Initialize Global Clients ---
dynamodb_client = DynamoDBClient(app_config)
s3_client = S3Client(app_config)
scheduler_client = SchedulerClient(app_config)


def respond(status_code: HTTPStatus, payload) -> Response:
    return json_response(status_code, payload, app_config.cors_allow_origin)


@app.not_found
def route_not_found(exc: NotFoundError) -> Response:
    """Answer CORS preflight requests; everything else unknown is a 404."""
    if app.current_event.http_method == "OPTIONS":
        return respond(HTTPStatus.OK, {})
    return respond(HTTPStatus.NOT_FOUND, {"error": "Not found"})


# --- API Route Handlers ---
@app.get("/version")
def get_version() -> Response:
    """Returns the application version."""
    display_version = f"{app_config.version}-B:{app_config.commit_hash[:7]}-{app_config.app_env[0].upper()}"
    logger.info(f"Version requested: {display_version}")
    return respond(HTTPStatus.OK, VersionResponse(version=display_version))


# --- Events ---
@app.get("/events")
def list_events() -> Response:
    return respond(HTTPStatus.OK, handle_list_events(app, dynamodb_client, logger))


@app.post("/events")
def create_event() -> Response:
    return respond(HTTPStatus.CREATED, handle_create_event(app, dynamodb_client, logger))


@app.get("/events/<event_id>")
def get_event(event_id: str) -> Response:
    return respond(
        HTTPStatus.OK, handle_get_event(app, dynamodb_client, logger, event_id)
    )


@app.put("/events/<event_id>")
def update_event(event_id: str) -> Response:
    return respond(
        HTTPStatus.OK, handle_update_event(app, dynamodb_client, logger, event_id)
    )


@app.delete("/events/<event_id>")
def delete_event(event_id: str) -> Response:
    return respond(
        HTTPStatus.OK, handle_delete_event(app, dynamodb_client, logger, event_id)
    )


# --- RSVP and polls ---
@app.post("/events/<event_id>/rsvp")
def rsvp(event_id: str) -> Response:
    return respond(HTTPStatus.OK, handle_rsvp(app, dynamodb_client, logger, event_id))


@app.post("/events/<event_id>/polls")
def create_poll(event_id: str) -> Response:
    return respond(
        HTTPStatus.CREATED, handle_create_poll(app, dynamodb_client, logger, event_id)
    )


@app.post("/events/<event_id>/polls/<poll_id>/vote")
def vote(event_id: str, poll_id: str) -> Response:
    return respond(
        HTTPStatus.OK, handle_vote(app, dynamodb_client, logger, event_id, poll_id)
    )


@app.post("/events/<event_id>/polls/<poll_id>/close")
def close_poll(event_id: str, poll_id: str) -> Response:
    return respond(
        HTTPStatus.OK,
        handle_close_poll(app, dynamodb_client, logger, event_id, poll_id),
    )


# --- Budget and vendors ---
@app.post("/events/<event_id>/budget")
def add_budget_item(event_id: str) -> Response:
    return respond(
        HTTPStatus.CREATED,
        handle_add_budget_item(app, dynamodb_client, logger, event_id),
    )


@app.put("/events/<event_id>/budget/<item_id>")
def update_budget_item(event_id: str, item_id: str) -> Response:
    return respond(
        HTTPStatus.OK,
        handle_update_budget_item(app, dynamodb_client, logger, event_id, item_id),
    )


@app.post("/events/<event_id>/vendors")
def add_vendor(event_id: str) -> Response:
    return respond(
        HTTPStatus.CREATED, handle_add_vendor(app, dynamodb_client, logger, event_id)
    )


@app.put("/events/<event_id>/vendors/<vendor_id>")
def update_vendor(event_id: str, vendor_id: str) -> Response:
    return respond(
        HTTPStatus.OK,
        handle_update_vendor(app, dynamodb_client, logger, event_id, vendor_id),
    )


# --- Media ---
@app.post("/events/<event_id>/media")
def request_media_upload(event_id: str) -> Response:
    return respond(
        HTTPStatus.CREATED,
        handle_request_media_upload(
            app, app_config, dynamodb_client, s3_client, logger, event_id
        ),
    )


@app.post("/events/<event_id>/media/<media_id>/confirm")
def confirm_media_upload(event_id: str, media_id: str) -> Response:
    return respond(
        HTTPStatus.OK,
        handle_confirm_media_upload(
            app, app_config, dynamodb_client, s3_client, logger, event_id, media_id
        ),
    )


@app.delete("/events/<event_id>/media/<media_id>")
def delete_media(event_id: str, media_id: str) -> Response:
    return respond(
        HTTPStatus.OK,
        handle_delete_media(
            app, app_config, dynamodb_client, s3_client, logger, event_id, media_id
        ),
    )


# --- Scheduled messages ---
@app.post("/events/<event_id>/messages")
def schedule_message(event_id: str) -> Response:
    return respond(
        HTTPStatus.CREATED,
        handle_schedule_message(app, dynamodb_client, scheduler_client, logger, event_id),
    )


@app.delete("/events/<event_id>/messages/<message_id>")
def delete_message(event_id: str, message_id: str) -> Response:
    return respond(
        HTTPStatus.OK,
        handle_delete_message(
            app, dynamodb_client, scheduler_client, logger, event_id, message_id
        ),
    )


# --- Main Lambda Entry Point ---
@error_handler_middleware(allow_origin=app_config.cors_allow_origin)
@logging_middleware
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """Main Lambda handler function.

    Args:
        event: API Gateway proxy event
        context: Lambda context object

    Returns:
        API Gateway proxy response
    """
    return app.resolve(event, context)
