"""Handlers for budget items and vendors (/events/{id}/budget, /events/{id}/vendors)."""

from aws_lambda_powertools.event_handler import APIGatewayRestResolver
from aws_lambda_powertools.logging import Logger

from ..clients.dynamodb import DynamoDBClient
from ..models.api import (
    CreateBudgetItemRequest,
    CreateVendorRequest,
    UpdateBudgetItemRequest,
    UpdateVendorRequest,
)
from ..models.domain import BudgetItem, Vendor
from ..repositories.dynamodb_event import DynamoDBEventRepository
from ..services.line_items import LineItemService
from ..services.request_parser import RequestParsingService


def handle_add_budget_item(
    app: APIGatewayRestResolver,
    dynamodb_client: DynamoDBClient,
    logger: Logger,
    event_id: str,
) -> BudgetItem:
    """Handle POST /events/{id}/budget requests."""
    parser_service = RequestParsingService(app, logger)
    service = LineItemService(DynamoDBEventRepository(dynamodb_client), logger)

    request = parser_service.parse_body(CreateBudgetItemRequest)
    return service.add_budget_item(event_id, request)


def handle_update_budget_item(
    app: APIGatewayRestResolver,
    dynamodb_client: DynamoDBClient,
    logger: Logger,
    event_id: str,
    item_id: str,
) -> BudgetItem:
    """Handle PUT /events/{id}/budget/{itemId} requests.

    Raises:
        EventNotFoundError: If the event does not exist
        BudgetItemNotFoundError: If the item does not exist
    """
    parser_service = RequestParsingService(app, logger)
    service = LineItemService(DynamoDBEventRepository(dynamodb_client), logger)

    request = parser_service.parse_body(UpdateBudgetItemRequest)
    return service.update_budget_item(event_id, item_id, request)


def handle_add_vendor(
    app: APIGatewayRestResolver,
    dynamodb_client: DynamoDBClient,
    logger: Logger,
    event_id: str,
) -> Vendor:
    """Handle POST /events/{id}/vendors requests."""
    parser_service = RequestParsingService(app, logger)
    service = LineItemService(DynamoDBEventRepository(dynamodb_client), logger)

    request = parser_service.parse_body(CreateVendorRequest)
    return service.add_vendor(event_id, request)


def handle_update_vendor(
    app: APIGatewayRestResolver,
    dynamodb_client: DynamoDBClient,
    logger: Logger,
    event_id: str,
    vendor_id: str,
) -> Vendor:
    """Handle PUT /events/{id}/vendors/{vendorId} requests.

    Raises:
        EventNotFoundError: If the event does not exist
        VendorNotFoundError: If the vendor does not exist
    """
    parser_service = RequestParsingService(app, logger)
    service = LineItemService(DynamoDBEventRepository(dynamodb_client), logger)

    request = parser_service.parse_body(UpdateVendorRequest)
    return service.update_vendor(event_id, vendor_id, request)
