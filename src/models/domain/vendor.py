"""Vendor and budget line items, embedded in the event root item."""

from typing import List, Optional

from pydantic import Field

from .base import CamelModel
from .enums import VendorStatus


class Vendor(CamelModel):
    id: str
    name: str
    category: str
    contact: str
    cost: float
    status: VendorStatus
    notes: Optional[str] = None


class BudgetItem(CamelModel):
    id: str
    category: str
    description: str
    estimated: float
    actual: Optional[float] = None


class Budget(CamelModel):
    """Event budget: an overall total and its line items."""

    total: float = 0
    items: List[BudgetItem] = Field(default_factory=list)
