from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field, model_validator

from bms.core.db import MongoModel
from bms.core.modules.invoice.models import PaymentStatus
from bms.utils import now


class ItemType(StrEnum):
    SIMPLE = "Simple"
    PRODUCT = "Product"
    KIT = "Kit"


class LineItem(BaseModel):
    item_type: ItemType
    name: str | None = None  # Required for simple items, catalog items are referenced by id
    item_id: int | None = None  # product_id or kit_id
    quantity: float = Field(..., gt=0)
    rate: float = Field(..., ge=0)
    tax_rate: float = Field(default=0, ge=0, le=100)
    total: float = Field(..., ge=0)

    @model_validator(mode="after")
    def check_reference(self) -> "LineItem":
        if self.item_type == ItemType.SIMPLE and not self.name:
            raise ValueError("Simple line items need a name")
        if self.item_type != ItemType.SIMPLE and self.item_id is None:
            raise ValueError(f"{self.item_type} line items need an item_id")
        return self


class BillData(BaseModel):
    """Fields supplied when issuing a customer bill."""

    customer_name: str = ""
    customer_phone: str = ""
    bill_date: datetime = Field(default_factory=now)
    items: list[LineItem] = Field(..., min_length=1)
    grand_total: float = Field(..., ge=0)
    payment_status: PaymentStatus = PaymentStatus.PENDING
    paid_amount: float = Field(default=0, ge=0)
    payment_mode: str = ""
    notes: str = ""


class Bill(MongoModel, BillData):
    """Customer bill numbered BILL/<fiscal year>/<sequence>."""

    bill_number: str
    created_at: datetime = Field(default_factory=now)
