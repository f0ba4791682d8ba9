"""Request parsing service for JSON request bodies."""

import base64
import binascii
import json
from typing import Any, Dict, Optional, Type, TypeVar

from aws_lambda_powertools.event_handler import APIGatewayRestResolver
from aws_lambda_powertools.logging import Logger
from pydantic import BaseModel, ValidationError

from ..middleware.exceptions import BadRequestError, RequestValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_validation_error(error: Dict[str, Any]) -> str:
    """Render one pydantic error as ``"<field>: <message>"``.

    Model-level errors have no field and render as the bare message.
    """
    if error.get("type") == "value_error" and "error" in error.get("ctx", {}):
        message = str(error["ctx"]["error"])
    else:
        message = error.get("msg", "Invalid value")

    field = ".".join(str(part) for part in error.get("loc", ()))
    return f"{field}: {message}" if field else message


def validate_model(model_cls: Type[ModelT], data: Any) -> ModelT:
    """Validate ``data`` against ``model_cls``.

    Raises:
        RequestValidationError: With the first violation as message
    """
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        messages = [format_validation_error(err) for err in e.errors()]
        raise RequestValidationError(messages[0], details={"errors": messages})


class RequestParsingService:
    """Service for parsing HTTP request data."""

    def __init__(self, app: APIGatewayRestResolver, logger: Logger):
        """Initialize request parsing service.

        Args:
            app: The API Gateway resolver instance
            logger: Logger instance
        """
        self.app = app
        self.logger = logger

    def get_json_body(self) -> Dict[str, Any]:
        """Decode the request body as a JSON object.

        Raises:
            BadRequestError: If the body is missing, not JSON or not an object
        """
        body = self.app.current_event.body
        if not body:
            raise BadRequestError("Request body is required")

        if self.app.current_event.is_base64_encoded:
            try:
                body = base64.b64decode(body).decode("utf-8")
            except (binascii.Error, UnicodeDecodeError) as e:
                self.logger.warning(f"Error decoding base64 body: {e}")
                raise BadRequestError("Invalid base64 encoding in request body")

        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            self.logger.warning("Request body is not valid JSON", extra={"error": str(e)})
            raise BadRequestError("Invalid JSON in request body")

        if not isinstance(data, dict):
            raise BadRequestError("Request body must be a JSON object")
        return data

    def parse_body(self, model_cls: Type[ModelT]) -> ModelT:
        """Decode the JSON body and validate it against ``model_cls``.

        Raises:
            BadRequestError: If the body is missing or malformed
            RequestValidationError: If the body violates the model
        """
        data = self.get_json_body()
        try:
            return validate_model(model_cls, data)
        except RequestValidationError as e:
            self.logger.warning(
                "Request validation failed",
                extra={"model": model_cls.__name__, "errors": e.details.get("errors")},
            )
            raise

    def get_query_param(self, name: str) -> Optional[str]:
        params = self.app.current_event.query_string_parameters or {}
        value = params.get(name)
        return value or None
