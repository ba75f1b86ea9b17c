from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from uuid import UUID

from bms.config import Config
from bms.core.core import Core
from bms.core.modules.bill.models import Bill, BillData
from bms.core.modules.counter.models import DocumentType, ScopeKey
from bms.core.modules.invoice.models import Invoice, InvoiceData
from bms.core.modules.kit.models import Kit, KitData
from bms.core.modules.product.models import Product, ProductData


class App:
    """Facade for all application operations, delegating to Core services."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        async with self._core.lifespan():
            yield

    async def next_number(self, document_type: DocumentType) -> str | int:
        """Allocate the next number; formatted for invoices and bills, raw for products and kits."""
        return await self._core.services.counter.generate_formatted_number(document_type)

    async def current_sequence(self, document_type: DocumentType) -> tuple[ScopeKey, int]:
        return await self._core.services.counter.get_current_sequence(document_type)

    async def create_invoice(self, data: InvoiceData) -> Invoice:
        return await self._core.services.invoice.create_invoice(data)

    async def get_invoice(self, invoice_id: UUID) -> Invoice:
        return await self._core.services.invoice.get_invoice(invoice_id)

    async def create_bill(self, data: BillData) -> Bill:
        return await self._core.services.bill.create_bill(data)

    async def get_bill(self, bill_id: UUID) -> Bill:
        return await self._core.services.bill.get_bill(bill_id)

    async def create_product(self, data: ProductData) -> Product:
        return await self._core.services.product.create_product(data)

    async def get_product(self, product_id: int) -> Product:
        return await self._core.services.product.get_product(product_id)

    async def create_kit(self, data: KitData) -> Kit:
        return await self._core.services.kit.create_kit(data)

    async def get_kit(self, kit_id: int) -> Kit:
        return await self._core.services.kit.get_kit(kit_id)

    async def backfill_product_ids(self) -> int:
        return await self._core.services.product.backfill_product_ids()

    async def set_counter(self, document_type: DocumentType, value: int, year: str | None = None) -> ScopeKey:
        return await self._core.services.counter.set_sequence(document_type, value, year)
