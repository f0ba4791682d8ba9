"""Service for budget items and vendors embedded in the event root item."""

from aws_lambda_powertools.logging import Logger

from ..middleware.exceptions import BudgetItemNotFoundError, VendorNotFoundError
from ..models.api import (
    CreateBudgetItemRequest,
    CreateVendorRequest,
    UpdateBudgetItemRequest,
    UpdateVendorRequest,
)
from ..models.domain import BudgetItem, Vendor
from ..repositories.event import EventRepository, generate_id
from .request_parser import validate_model


class LineItemService:
    """Adds and merges budget items and vendors.

    Updates are partial: only the fields present in the request change, and
    the item id is always kept.
    """

    def __init__(self, event_repository: EventRepository, logger: Logger) -> None:
        self.event_repository = event_repository
        self.logger = logger

    def add_budget_item(self, event_id: str, request: CreateBudgetItemRequest) -> BudgetItem:
        event = self.event_repository.get_event(event_id)

        item = BudgetItem(id=generate_id(), **request.model_dump())
        event.budget.items.append(item)

        self.event_repository.update_event_fields(
            event_id, {"budget": event.budget.to_payload()}
        )
        self.logger.info(
            "Budget item added", extra={"event_id": event_id, "item_id": item.id}
        )
        return item

    def update_budget_item(
        self, event_id: str, item_id: str, request: UpdateBudgetItemRequest
    ) -> BudgetItem:
        """Merge the sent fields into an existing budget item.

        Raises:
            EventNotFoundError: If the event does not exist
            BudgetItemNotFoundError: If the item does not exist
            RequestValidationError: If the merged item is invalid
        """
        event = self.event_repository.get_event(event_id)
        items = event.budget.items
        index = next((i for i, b in enumerate(items) if b.id == item_id), None)
        if index is None:
            raise BudgetItemNotFoundError(event_id, item_id)

        merged = {**items[index].model_dump(), **request.model_dump(exclude_unset=True)}
        merged["id"] = item_id
        items[index] = validate_model(BudgetItem, merged)

        self.event_repository.update_event_fields(
            event_id, {"budget": event.budget.to_payload()}
        )
        self.logger.info(
            "Budget item updated", extra={"event_id": event_id, "item_id": item_id}
        )
        return items[index]

    def add_vendor(self, event_id: str, request: CreateVendorRequest) -> Vendor:
        event = self.event_repository.get_event(event_id)

        vendor = Vendor(id=generate_id(), **request.model_dump())
        event.vendors.append(vendor)

        self.event_repository.update_event_fields(
            event_id, {"vendors": [v.to_payload() for v in event.vendors]}
        )
        self.logger.info(
            "Vendor added", extra={"event_id": event_id, "vendor_id": vendor.id}
        )
        return vendor

    def update_vendor(
        self, event_id: str, vendor_id: str, request: UpdateVendorRequest
    ) -> Vendor:
        """Merge the sent fields into an existing vendor.

        Raises:
            EventNotFoundError: If the event does not exist
            VendorNotFoundError: If the vendor does not exist
            RequestValidationError: If the merged vendor is invalid
        """
        event = self.event_repository.get_event(event_id)
        vendors = event.vendors
        index = next((i for i, v in enumerate(vendors) if v.id == vendor_id), None)
        if index is None:
            raise VendorNotFoundError(event_id, vendor_id)

        merged = {**vendors[index].model_dump(), **request.model_dump(exclude_unset=True)}
        merged["id"] = vendor_id
        vendors[index] = validate_model(Vendor, merged)

        self.event_repository.update_event_fields(
            event_id, {"vendors": [v.to_payload() for v in vendors]}
        )
        self.logger.info(
            "Vendor updated", extra={"event_id": event_id, "vendor_id": vendor_id}
        )
        return vendors[index]
