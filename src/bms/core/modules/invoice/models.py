from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from bms.core.db import MongoModel
from bms.utils import now


class PaymentStatus(StrEnum):
    PENDING = "Pending"
    PARTIAL = "Partial"
    PAID = "Paid"


class InvoiceData(BaseModel):
    """Fields supplied when recording a supplier invoice."""

    supplier_id: str | None = None
    supplier_invoice_number: str = ""  # Number printed on the supplier's own invoice
    invoice_date: datetime
    due_date: datetime
    amount: float = Field(..., ge=0)
    payment_status: PaymentStatus = PaymentStatus.PENDING
    paid_amount: float = Field(default=0, ge=0)
    payment_mode: str = ""
    notes: str = ""


class Invoice(MongoModel, InvoiceData):
    """Supplier invoice numbered INV/<fiscal year>/<sequence>."""

    invoice_number: str
    created_at: datetime = Field(default_factory=now)
