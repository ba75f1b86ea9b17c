from datetime import datetime

from pydantic import BaseModel, Field

from bms.core.db import MongoModel
from bms.utils import now


class KitComponent(BaseModel):
    product_id: int
    quantity: int = Field(..., ge=1)


class KitData(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    price: float = Field(default=0, ge=0)  # 0 means "sum of component prices"
    products: list[KitComponent] = Field(..., min_length=1)


class Kit(MongoModel, KitData):
    """Bundle of products sold together, with its own lifetime id sequence."""

    kit_id: int
    sku: str
    created_at: datetime = Field(default_factory=now)
