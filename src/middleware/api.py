"""Response helpers for API Gateway proxy responses."""

import json
from decimal import Decimal
from http import HTTPStatus
from typing import Any, Dict, Union

from aws_lambda_powertools.event_handler import Response, content_types
from pydantic import BaseModel

CORS_ALLOW_HEADERS = "Content-Type,Authorization,X-Amz-Date,X-Api-Key,X-Amz-Security-Token"
CORS_ALLOW_METHODS = "GET,POST,PUT,DELETE,OPTIONS"


def cors_headers(allow_origin: str = "*") -> Dict[str, str]:
    """CORS headers sent with every response, whether or not the request had an Origin."""
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
        "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
    }


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value % 1 == 0 else float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def json_response(
    status_code: Union[int, HTTPStatus],
    payload: Union[BaseModel, Dict[str, Any], list],
    allow_origin: str = "*",
) -> Response:
    """Build a JSON response with the standard headers.

    Pydantic models are dumped by alias, so camelCase models stay camelCase.
    """
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", by_alias=True, exclude_none=True)

    return Response(
        status_code=int(status_code),
        content_type=content_types.APPLICATION_JSON,
        body=json.dumps(payload, default=_json_default),
        headers=cors_headers(allow_origin),
    )
