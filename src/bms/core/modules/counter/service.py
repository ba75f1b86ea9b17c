import re
from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from bms.core.core import Service
from bms.core.modules.counter.allocator import SequenceAllocator
from bms.core.modules.counter.models import DocumentType, ScopeKey
from bms.core.modules.counter.store import MongoCounterStore
from bms.errors import ValidationError
from bms.utils import today_in

logger = structlog.get_logger(__name__)

FISCAL_YEAR_RE = re.compile(r"^\d{4}-\d{2}$")


class CounterService(Service):
    """Sequential numbers for invoices, bills, products and kits."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self.store = MongoCounterStore(database.get_collection("counters"))
        self._allocator: SequenceAllocator | None = None

    async def on_start(self) -> None:
        await self.store.ensure_indexes()

    @property
    def allocator(self) -> SequenceAllocator:
        if self._allocator is None:
            config = self.core.config
            self._allocator = SequenceAllocator(
                self.store,
                max_attempts=config.sequence_max_attempts,
                backoff=config.sequence_backoff_ms / 1000,
                clock=today_in(config.fiscal_timezone),
            )
        return self._allocator

    async def allocate(self, document_type: DocumentType) -> int:
        """Return the next raw sequence value for the document type."""
        return await self.allocator.allocate(document_type)

    async def generate_formatted_number(self, document_type: DocumentType) -> str | int:
        return await self.allocator.generate_formatted_number(document_type)

    async def get_current_sequence(self, document_type: DocumentType) -> tuple[ScopeKey, int]:
        """Get the last issued value in the current scope without incrementing."""
        scope = self.allocator.scope_for(document_type)
        return scope, await self.store.get_current(scope)

    async def fix_indexes(self) -> list[str]:
        """Migrate the counters collection to the partial unique indexes.

        Returns the names of dropped legacy indexes.
        """
        dropped = await self.store.drop_legacy_indexes()
        normalized = await self.store.normalize_lifetime_counters()
        await self.store.ensure_indexes()
        logger.info("counter_indexes_fixed", dropped=dropped, normalized=normalized)
        return dropped

    async def set_sequence(self, document_type: DocumentType, value: int, year: str | None = None) -> ScopeKey:
        """Overwrite a counter so the next allocation returns value + 1.

        Year-scoped types default to the current fiscal year. Lifetime types take no year.
        """
        if value < 0:
            raise ValidationError("Counter value must be non-negative")
        if not document_type.is_year_scoped:
            if year is not None:
                raise ValidationError(f"{document_type} counters are not scoped by fiscal year")
            scope = ScopeKey(type=document_type)
        elif year is None:
            scope = self.allocator.scope_for(document_type)
        elif FISCAL_YEAR_RE.fullmatch(year):
            scope = ScopeKey(type=document_type, year=year)
        else:
            raise ValidationError(f"Invalid fiscal year '{year}', expected a label like 2024-25")

        previous = await self.store.get_current(scope)
        await self.store.set_value(scope, value)
        logger.warning("counter_overwritten", document_type=document_type.value, year=scope.year, previous=previous, value=value)
        return scope
