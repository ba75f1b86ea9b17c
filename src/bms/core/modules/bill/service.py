from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from bms.core.core import Service
from bms.core.modules.bill.models import Bill, BillData
from bms.core.modules.counter.models import DocumentType
from bms.errors import ConflictError, NotFoundError, ValidationError

logger = structlog.get_logger(__name__)

TOTAL_TOLERANCE = 0.01


class BillService(Service):
    """Customer bills."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("bills")

    async def on_start(self) -> None:
        await self._collection.create_index([("bill_number", 1)], unique=True)
        await self._collection.create_index([("bill_date", -1)])

    async def get_bill(self, bill_id: UUID) -> Bill:
        doc = await self._collection.find_one({"_id": bill_id})
        if not doc:
            raise NotFoundError(f"Bill not found: {bill_id}")
        return Bill.model_validate(doc)

    async def create_bill(self, data: BillData) -> Bill:
        """Validate totals, allocate the next bill number, then persist."""
        items_total = sum(item.total for item in data.items)
        if abs(items_total - data.grand_total) > TOTAL_TOLERANCE:
            raise ValidationError(f"Grand total {data.grand_total} does not match line items total {items_total}")
        if data.paid_amount > data.grand_total:
            raise ValidationError("Paid amount cannot exceed the grand total")

        bill_number = await self.core.services.counter.generate_formatted_number(DocumentType.BILL)
        bill = Bill(bill_number=str(bill_number), **data.model_dump())
        try:
            await self._collection.insert_one(bill.to_mongo())
        except DuplicateKeyError as e:
            raise ConflictError(f"Bill number {bill.bill_number} is already taken. Please try again.") from e
        logger.info("bill_created", bill_id=str(bill.id), bill_number=bill.bill_number)
        return bill
