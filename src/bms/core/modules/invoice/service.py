from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from bms.core.core import Service
from bms.core.modules.counter.models import DocumentType
from bms.core.modules.invoice.models import Invoice, InvoiceData
from bms.errors import ConflictError, NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class InvoiceService(Service):
    """Supplier invoices."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("invoices")

    async def on_start(self) -> None:
        await self._collection.create_index([("invoice_number", 1)], unique=True)
        await self._collection.create_index([("due_date", 1)])

    async def get_invoice(self, invoice_id: UUID) -> Invoice:
        doc = await self._collection.find_one({"_id": invoice_id})
        if not doc:
            raise NotFoundError(f"Invoice not found: {invoice_id}")
        return Invoice.model_validate(doc)

    async def create_invoice(self, data: InvoiceData) -> Invoice:
        """Validate, allocate the next invoice number, then persist.

        If allocation fails nothing is written.
        """
        if data.due_date < data.invoice_date:
            raise ValidationError("Due date cannot be before the invoice date")
        if data.paid_amount > data.amount:
            raise ValidationError("Paid amount cannot exceed the invoice amount")

        invoice_number = await self.core.services.counter.generate_formatted_number(DocumentType.INVOICE)
        invoice = Invoice(invoice_number=str(invoice_number), **data.model_dump())
        try:
            await self._collection.insert_one(invoice.to_mongo())
        except DuplicateKeyError as e:
            raise ConflictError(f"Invoice number {invoice.invoice_number} is already taken. Please try again.") from e
        logger.info("invoice_created", invoice_id=str(invoice.id), invoice_number=invoice.invoice_number)
        return invoice
