from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from bms.core.db import MongoModel
from bms.utils import now


class TaxType(StrEnum):
    GST = "GST"
    VAT = "VAT"
    NONE = "None"


class ProductData(BaseModel):
    """Catalog fields supplied by the client. product_id and sku are assigned server-side."""

    name: str = Field(..., min_length=1)
    description: str = ""
    category: str | None = None
    brand: str | None = None
    barcode: str | None = None
    price: float = Field(..., ge=0)
    cost_price: float = Field(default=0, ge=0)
    quantity: float = Field(default=0, ge=0)
    min_stock_level: float = Field(default=0, ge=0)
    unit_type: str = Field(..., min_length=1)
    tax_rate: float = Field(default=0, ge=0, le=100)
    tax_type: TaxType = TaxType.GST


class Product(MongoModel, ProductData):
    product_id: int | None = None  # Lifetime sequence, None only on legacy rows awaiting backfill
    sku: str | None = None  # Immutable once assigned
    created_at: datetime = Field(default_factory=now)
