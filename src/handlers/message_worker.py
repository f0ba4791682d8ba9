"""Lambda invoked by the scheduler to deliver one scheduled message."""

from aws_lambda_powertools.utilities.typing import LambdaContext

from src.clients.dynamodb import DynamoDBClient
from src.clients.secrets import SecretsManagerClient
from src.clients.ses import EmailClient
from src.clients.slack import SlackClient
from src.config.app import AppConfig
from src.middleware.logging import logger, logging_middleware
from src.repositories.dynamodb_event import DynamoDBEventRepository
from src.services.messages import MessageDeliveryService

# --- Load Configuration and Initialize Services ---
try:
    app_config = AppConfig.from_env()
except Exception as e:
    logger.exception("CRITICAL: Failed to load configuration or initialize services.")
    # This error prevents the Lambda from functioning, raise to indicate failure
    raise RuntimeError(f"Initialization error: {e}") from e

# --- Initialize Global Clients ---
# The Slack client keeps its credentials for the life of the execution environment
dynamodb_client = DynamoDBClient(app_config)
slack_client = SlackClient(app_config, SecretsManagerClient(app_config))
email_client = EmailClient(app_config)


@logging_middleware
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """Deliver the message named in the scheduler payload.

    Args:
        event: ``{"eventId": ..., "messageId": ...}``
        context: Lambda context object

    Returns:
        A summary of the processing result

    Raises:
        Exception: Any delivery failure, so the scheduler's retry and
            dead-letter policy applies
    """
    event_id = event["eventId"]
    message_id = event["messageId"]
    logger.info(
        "Processing scheduled message",
        extra={"event_id": event_id, "message_id": message_id},
    )

    delivery_service = MessageDeliveryService(
        DynamoDBEventRepository(dynamodb_client), slack_client, email_client, logger
    )

    try:
        delivered = delivery_service.deliver(event_id, message_id)
    except Exception:
        logger.exception(
            "Failed to process message",
            extra={"event_id": event_id, "message_id": message_id},
        )
        raise

    return {"eventId": event_id, "messageId": message_id, "delivered": delivered}
