"""Structured logging shared by the API and the message worker Lambdas."""

import os
import threading
from typing import Any, Dict

import psutil
from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.middleware_factory import lambda_handler_decorator

logger = Logger(service="event-planner-api")

BYTES_PER_MB = 1024 * 1024


def memory_snapshot() -> Dict[str, Any]:
    vm = psutil.virtual_memory()
    return {
        "memory_available_mb": vm.available // BYTES_PER_MB,
        "memory_percent_used": vm.percent,
    }


def invocation_summary(event: Dict[str, Any]) -> Dict[str, Any]:
    """Route of an API call, or the ids of a scheduler payload."""
    if "httpMethod" in event:
        return {"http_method": event["httpMethod"], "path": event.get("path")}
    return {key: event[key] for key in ("eventId", "messageId") if key in event}


@lambda_handler_decorator
def logging_middleware(handler, event, context):
    """Tag every log line with the invocation and log its start, result and memory use.

    Exceptions are logged and re-raised, so the error handler (API) or the
    scheduler's retry policy (worker) still sees them.
    """
    logger.append_keys(
        function_name=getattr(context, "function_name", handler.__name__),
        function_request_id=getattr(context, "aws_request_id", None),
    )

    logger.info(
        "Invocation started",
        extra={
            "invocation": invocation_summary(event),
            "system_info": {
                "cpu_cores": os.cpu_count(),
                "memory_limit_mb": getattr(context, "memory_limit_in_mb", None),
                "active_threads": threading.active_count(),
                **memory_snapshot(),
            },
        },
    )
    logger.debug("Received event", extra={"event": event})

    try:
        response = handler(event, context)
    except Exception:
        logger.exception("Invocation failed")
        raise

    status_code = response.get("statusCode") if isinstance(response, dict) else None
    logger.info(
        "Invocation finished",
        extra={"status_code": status_code, "system_info": memory_snapshot()},
    )
    logger.debug("Handler response", extra={"response": response})
    return response
