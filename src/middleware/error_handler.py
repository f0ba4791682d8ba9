from http import HTTPStatus
from typing import Any, Dict

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.middleware_factory import lambda_handler_decorator

from ..models.api.responses import APIErrorResponse
from .api import cors_headers
from .exceptions import EventPlannerError

logger = Logger()

INTERNAL_ERROR_MESSAGE = "Internal server error"


def create_error_response(
    status_code: HTTPStatus, message: str, allow_origin: str = "*"
) -> Dict[str, Any]:
    """Build the proxy response for a failure: ``{"error": message}``."""
    return {
        "statusCode": int(status_code),
        "headers": {"Content-Type": "application/json", **cors_headers(allow_origin)},
        "body": APIErrorResponse(error=message).model_dump_json(),
    }


@lambda_handler_decorator
def error_handler_middleware(handler, event, context, allow_origin: str = "*"):
    """Middleware turning exceptions into error responses.

    Client errors keep their message. Server errors are logged with their
    details and answered with a generic message only.
    """
    try:
        return handler(event, context)

    # --- EventPlannerError exceptions (our custom exceptions) ---
    except EventPlannerError as e:
        status = HTTPStatus(e.status_code)
        if e.status_code < 500:
            logger.warning(
                f"{e.__class__.__name__}: {e.message}",
                extra={"code": e.code, "details": e.details},
            )
            return create_error_response(status, e.message, allow_origin)

        logger.error(
            f"{e.__class__.__name__}: {e.message}",
            extra={"code": e.code, "details": e.details},
        )
        return create_error_response(status, INTERNAL_ERROR_MESSAGE, allow_origin)

    # --- Generic Fallback Error ---
    except Exception as e:
        logger.exception(f"Unhandled error: {e.__class__.__name__}: {str(e)}")
        return create_error_response(
            HTTPStatus.INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE, allow_origin
        )
